"""Shared pytest fixtures for the exercise-scaffold test suite.

Provides reusable fixtures for:
- A temporary exercise repository (package.json + projects/)
- Configs pointing at that repository
- Generator commands that stand in for ``ng`` in subprocess tests
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from exercise_scaffold.config import Config, GeneratorConfig


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

EXISTING_EXERCISES = [
    "exercise-01-basics",
    "exercise-02-components",
    "exercise-03-data-binding",
    "exercise-04-directives",
    "exercise-05-services",
]


@pytest.fixture
def sample_manifest() -> dict:
    """A package.json with two exercises already registered."""
    return {
        "name": "angular-exercises",
        "version": "0.0.0",
        "scripts": {
            "ng": "ng",
            "start:ex01": "ng serve exercise-01-basics --port 4201",
            "build:ex01": "ng build exercise-01-basics",
            "create-exercise": "node create-exercise.js",
        },
        "private": True,
    }


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


@pytest.fixture
def empty_repo(tmp_path: Path, sample_manifest: dict) -> Path:
    """Repository with a manifest but no projects/ directory."""
    repo = tmp_path / "angular-exercises"
    repo.mkdir()
    (repo / "package.json").write_text(json.dumps(sample_manifest, indent=2) + "\n")
    yield repo


@pytest.fixture
def exercise_repo(empty_repo: Path) -> Path:
    """Repository containing exercises 01 to 05."""
    projects = empty_repo / "projects"
    projects.mkdir()
    for name in EXISTING_EXERCISES:
        (projects / name).mkdir()
    yield empty_repo


@pytest.fixture
def config(exercise_repo: Path) -> Config:
    """Config rooted at ``exercise_repo``."""
    return Config(repo_root=exercise_repo)


# ---------------------------------------------------------------------------
# Generator stand-ins
# ---------------------------------------------------------------------------

# Invoked as ``python -c <code> generate application <name> --routing=... --style=...``
# so the application name is sys.argv[3].
_FAKE_NG = (
    "import pathlib, sys; "
    "target = pathlib.Path('projects') / sys.argv[3]; "
    "target.mkdir(parents=True); "
    "(target / 'README.md').write_text('generated by ng'); "
    "(target / 'src').mkdir()"
)


@pytest.fixture
def fake_generator() -> GeneratorConfig:
    """Generator that creates ``projects/<name>`` like ``ng generate application``."""
    return GeneratorConfig(command=[sys.executable, "-c", _FAKE_NG])


@pytest.fixture
def failing_generator() -> GeneratorConfig:
    """Generator that exits with status 3 without creating anything."""
    return GeneratorConfig(command=[sys.executable, "-c", "import sys; sys.exit(3)"])


@pytest.fixture
def silent_generator() -> GeneratorConfig:
    """Generator that succeeds but creates no project directory."""
    return GeneratorConfig(command=[sys.executable, "-c", "pass"])
