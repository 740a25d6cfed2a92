"""exercise-scaffold configuration.

Typed configuration for the scaffolder.  All settings use Pydantic v2 models
so they can be validated at construction time and serialised to/from JSON or
environment variables without boiler-plate.  The repository root is always an
explicit value; every path the tool touches is derived from it.
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class GeneratorConfig(BaseModel):
    """How the external application generator is invoked."""

    command: list[str] = Field(
        default_factory=lambda: ["ng"],
        min_length=1,
        description="Generator executable and any leading arguments",
    )
    script_command: str = Field(
        default="ng",
        min_length=1,
        description="CLI used by the generated start/build manifest scripts",
    )
    routing: bool = Field(default=False, description="Whether to scaffold a router")
    style: str = Field(default="css", min_length=1, description="Stylesheet format")
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Generator timeout in seconds (None waits indefinitely)",
    )


class Config(BaseModel):
    """Global exercise-scaffold configuration.

    Instances are created once by the CLI entry point (or by tests against a
    temporary repository) and then passed through every stage.
    """

    repo_root: Path = Field(default=Path("."))
    projects_dir_name: str = Field(default="projects")
    manifest_name: str = Field(default="package.json")
    readme_name: str = Field(default="README.md")

    exercise_prefix: str = Field(default="exercise-", min_length=1)
    short_prefix: str = Field(default="ex")
    pad_width: int = Field(default=2, ge=1)
    base_port: int = Field(default=4200, ge=1)

    runner: str = Field(default="npm run", description="Task runner prefix for manifest scripts")
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def projects_dir(self) -> Path:
        """Directory holding one sub-project per exercise."""
        return self.repo_root / self.projects_dir_name

    @property
    def manifest_path(self) -> Path:
        """The shared command manifest (``package.json``)."""
        return self.repo_root / self.manifest_name

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            EXERCISE_REPO_ROOT, EXERCISE_PROJECTS_DIR, EXERCISE_MANIFEST,
            EXERCISE_BASE_PORT, EXERCISE_GENERATOR, EXERCISE_STYLE,
            EXERCISE_GENERATOR_TIMEOUT.
        """
        generator_kwargs: dict[str, Any] = {}
        if os.environ.get("EXERCISE_GENERATOR"):
            generator_kwargs["command"] = shlex.split(os.environ["EXERCISE_GENERATOR"])
        if os.environ.get("EXERCISE_STYLE"):
            generator_kwargs["style"] = os.environ["EXERCISE_STYLE"]
        if os.environ.get("EXERCISE_GENERATOR_TIMEOUT"):
            generator_kwargs["timeout"] = float(os.environ["EXERCISE_GENERATOR_TIMEOUT"])

        kwargs: dict[str, Any] = {}
        if os.environ.get("EXERCISE_PROJECTS_DIR"):
            kwargs["projects_dir_name"] = os.environ["EXERCISE_PROJECTS_DIR"]
        if os.environ.get("EXERCISE_MANIFEST"):
            kwargs["manifest_name"] = os.environ["EXERCISE_MANIFEST"]
        if os.environ.get("EXERCISE_BASE_PORT"):
            kwargs["base_port"] = int(os.environ["EXERCISE_BASE_PORT"])

        return cls(
            repo_root=Path(os.environ.get("EXERCISE_REPO_ROOT", ".")),
            generator=GeneratorConfig(**generator_kwargs),
            **kwargs,
        )
