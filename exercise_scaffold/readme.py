"""Exercise README rendering."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .allocator import Allocation
from .config import Config
from .templates import TemplateRenderer

README_TEMPLATE = "README.md.j2"


def build_context(allocation: Allocation, config: Config) -> dict[str, Any]:
    return {
        "padded": allocation.padded,
        "topic": allocation.topic,
        "name": allocation.name,
        "port": allocation.port,
        "runner": config.runner,
        "start_script": allocation.start_script,
        "build_script": allocation.build_script,
    }


def render_readme(
    allocation: Allocation,
    config: Config,
    renderer: TemplateRenderer | None = None,
) -> str:
    renderer = renderer or TemplateRenderer()
    return renderer.render(README_TEMPLATE, build_context(allocation, config))


async def write_readme(
    allocation: Allocation,
    config: Config,
    renderer: TemplateRenderer | None = None,
) -> Path:
    """Write the README into the exercise directory, replacing any existing one.

    Raises:
        OSError: If the file cannot be written (for example when the exercise
            directory does not exist).
    """
    renderer = renderer or TemplateRenderer()
    target = config.projects_dir / allocation.name / config.readme_name
    return await renderer.render_to_file(
        README_TEMPLATE, target, build_context(allocation, config)
    )
