"""External application generator invocation.

Runs the generator (``ng generate application`` by default) from the
repository root with inherited standard streams, so its progress output reaches
the terminal unmodified.  A failed run is not cleaned up: a partially generated
directory may be left behind.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from .allocator import Allocation
from .config import Config, GeneratorConfig
from .errors import GeneratorError
from .utils import run_command


def build_generate_command(name: str, generator: GeneratorConfig) -> list[str]:
    """Return the argv that scaffolds application *name*.

    Example::

        build_generate_command("exercise-06-routing", GeneratorConfig())
        -> ["ng", "generate", "application", "exercise-06-routing",
            "--routing=false", "--style=css"]
    """
    return [
        *generator.command,
        "generate",
        "application",
        name,
        f"--routing={'true' if generator.routing else 'false'}",
        f"--style={generator.style}",
    ]


async def generate_application(allocation: Allocation, config: Config) -> Path:
    """Scaffold the exercise's sub-project and return its directory.

    Raises:
        GeneratorError: If the generator cannot be started, times out or
            exits non-zero.
    """
    cmd = build_generate_command(allocation.name, config.generator)
    cmd_str = shlex.join(cmd)

    try:
        returncode = await run_command(
            cmd,
            cwd=config.repo_root,
            timeout=config.generator.timeout,
        )
    except FileNotFoundError as exc:
        raise GeneratorError(
            f"Generator executable not found: {cmd[0]}", command=cmd_str
        ) from exc
    except PermissionError as exc:
        raise GeneratorError(
            f"Generator executable is not runnable: {cmd[0]}", command=cmd_str
        ) from exc
    except TimeoutError as exc:
        raise GeneratorError(str(exc), command=cmd_str) from exc

    if returncode != 0:
        raise GeneratorError(
            f"Command failed: {cmd_str} (exit code {returncode})",
            command=cmd_str,
            returncode=returncode,
        )

    return config.projects_dir / allocation.name
