"""Exercise creation orchestrator and CLI.

Creates a new numbered exercise in four sequential stages:

Allocate  -- pick the next ``exercise-<NN>-<topic>`` name and port 4200+NN.
Generate  -- run the external application generator.
Manifest  -- add ``start:ex<NN>`` / ``build:ex<NN>`` to package.json.
README    -- write the exercise README into the new project.

A failure in any stage stops the run; stages that already completed are not
rolled back.

Usage::

    python -m exercise_scaffold routing
    exercise-scaffold routing --repo-root ./angular-exercises
    exercise-scaffold two-way-binding --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import shlex
import sys
from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel

from .allocator import Allocation, allocate, find_existing_topics
from .config import Config
from .errors import ExerciseError
from .generator import build_generate_command, generate_application
from .manifest import exercise_scripts, update_manifest
from .readme import write_readme
from .templates import TemplateRenderer
from .utils import (
    console,
    err_console,
    print_error,
    print_step,
    print_success,
    print_summary_table,
    print_warning,
)


@dataclass
class CreationResult:
    """Outcome of a successful :meth:`ExerciseCreator.run`."""

    allocation: Allocation
    project_dir: Path
    manifest_path: Path
    readme_path: Path
    steps_completed: list[str] = field(default_factory=list)


class ExerciseCreator:
    """Drives allocation, generation, manifest update and README writing.

    Attributes:
        config: Scaffolder configuration (repository root, generator, ports).
        renderer: Template renderer used for the exercise README.
    """

    def __init__(self, config: Config, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    def plan(self, topic: str) -> Allocation:
        """Allocate identifiers for *topic* and announce them."""
        allocation = allocate(topic, self.config)

        console.print(
            Panel(
                f"[bold bright_cyan]Creating new exercise:[/bold bright_cyan] {escape(allocation.name)}\n"
                f"Port: {allocation.port}",
                border_style="bright_cyan",
            )
        )

        duplicates = find_existing_topics(
            self.config.projects_dir, topic, self.config.exercise_prefix
        )
        if duplicates:
            print_warning(
                f"Topic '{topic}' already exists as {', '.join(duplicates)}; "
                f"creating {allocation.name} anyway."
            )
        return allocation

    async def run(self, topic: str) -> CreationResult:
        """Create the exercise for *topic*.

        Raises:
            ExerciseError: If generation, the manifest update or the README
                write fails.
            OSError: If the projects directory cannot be listed.
        """
        allocation = self.plan(topic)
        steps: list[str] = []

        print_step(1, "Generating Angular application...")
        project_dir = await generate_application(allocation, self.config)
        steps.append("generate")

        print_step(2, f"Updating {self.config.manifest_name}...")
        update_manifest(allocation, self.config)
        steps.append("manifest")

        print_step(3, "Creating exercise README...")
        try:
            readme_path = await write_readme(allocation, self.config, self.renderer)
        except OSError as exc:
            raise ExerciseError(f"Cannot write README: {exc}", stage="readme") from exc
        steps.append("readme")

        result = CreationResult(
            allocation=allocation,
            project_dir=project_dir,
            manifest_path=self.config.manifest_path,
            readme_path=readme_path,
            steps_completed=steps,
        )
        self._print_summary(result)
        return result

    def _print_summary(self, result: CreationResult) -> None:
        allocation = result.allocation
        runner = self.config.runner
        location = f"{self.config.projects_dir_name}/{allocation.name}"

        console.print()
        print_success("Exercise created successfully!")
        console.print()
        print_summary_table(
            {
                "Name": allocation.name,
                "Port": str(allocation.port),
                "Start command": f"{runner} {allocation.start_script}",
                "Build command": f"{runner} {allocation.build_script}",
                "Location": location,
            }
        )
        console.print("[bold]Next steps:[/bold]")
        console.print(f"  1. Edit {escape(location)}/{self.config.readme_name} with exercise details")
        console.print(f"  2. Run: {escape(runner)} {escape(allocation.start_script)}")
        console.print("  3. Start coding!")
        console.print()

    def print_dry_run(self, allocation: Allocation) -> None:
        """Show what :meth:`run` would do without touching anything."""
        cmd = build_generate_command(allocation.name, self.config.generator)
        data = {"Generator": shlex.join(cmd)}
        data.update(exercise_scripts(allocation, self.config))
        data["README"] = str(
            Path(self.config.projects_dir_name) / allocation.name / self.config.readme_name
        )
        print_summary_table(data, title="Dry run (no changes made)")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exercise-scaffold",
        description="Create a new numbered exercise application",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  exercise-scaffold routing\n"
            "  exercise-scaffold two-way-binding --repo-root ./angular-exercises\n"
        ),
    )
    parser.add_argument(
        "topic",
        nargs="?",
        help="Exercise topic, e.g. 'routing' creates exercise-<NN>-routing",
    )
    parser.add_argument(
        "--repo-root", "-r",
        default=None,
        help="Repository holding package.json and projects/ (default: current directory)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Load settings from a JSON config file instead of the environment",
    )
    parser.add_argument(
        "--generator",
        default=None,
        help="Generator command (default: ng)",
    )
    parser.add_argument(
        "--style",
        default=None,
        help="Stylesheet format passed to the generator (default: css)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the allocated name, port and scripts without creating anything",
    )
    return parser


def _config_from_args(args: argparse.Namespace) -> Config:
    config = Config.load(Path(args.config)) if args.config else Config.from_env()

    if args.repo_root:
        config.repo_root = Path(args.repo_root)
    if args.generator:
        config.generator.command = shlex.split(args.generator)
    if args.style:
        config.generator.style = args.style
    return config


def _print_usage(parser: argparse.ArgumentParser, message: str) -> None:
    print_error(f"Error: {message}")
    err_console.print(parser.format_usage().rstrip(), markup=False, highlight=False)
    err_console.print("Example: exercise-scaffold routing", markup=False, highlight=False)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``exercise-scaffold`` and ``python -m exercise_scaffold``."""
    parser = build_parser()
    try:
        args, extras = parser.parse_known_args(argv)
    except SystemExit as exc:
        # argparse already printed its message; --help exits 0.
        return 0 if exc.code in (0, None) else 1

    # A topic such as "-draft" looks like an unknown option to argparse.
    if args.topic is None and extras:
        args.topic = extras.pop(0)
    if extras:
        _print_usage(parser, f"unrecognized arguments: {' '.join(extras)}")
        return 1
    if not args.topic:
        _print_usage(parser, "Please provide an exercise name")
        return 1

    try:
        config = _config_from_args(args)
        creator = ExerciseCreator(config)

        if args.dry_run:
            creator.print_dry_run(creator.plan(args.topic))
            return 0

        asyncio.run(creator.run(args.topic))
    except Exception as exc:
        err_console.print()
        print_error(f"Error creating exercise: {exc}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
