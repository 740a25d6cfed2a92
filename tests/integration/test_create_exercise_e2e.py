"""End-to-end tests: the CLI against a temporary repository.

A small Python program stands in for ``ng generate application`` so the real
subprocess path (inherited streams, cwd, exit codes) is exercised without
Node.js or the Angular CLI.
"""

from __future__ import annotations

import json
import shlex
from pathlib import Path

import pytest

from exercise_scaffold.config import GeneratorConfig
from exercise_scaffold.pipeline import main


def _run(repo: Path, generator: GeneratorConfig, *args: str) -> int:
    return main([*args, "--repo-root", str(repo), "--generator", shlex.join(generator.command)])


@pytest.mark.integration
class TestCreateExercise:
    def test_routing_after_five_exercises(
        self, exercise_repo: Path, fake_generator: GeneratorConfig, sample_manifest: dict
    ):
        assert _run(exercise_repo, fake_generator, "routing") == 0

        project = exercise_repo / "projects" / "exercise-06-routing"
        assert project.is_dir()

        manifest = json.loads((exercise_repo / "package.json").read_text(encoding="utf-8"))
        scripts = manifest["scripts"]
        assert scripts["start:ex06"] == "ng serve exercise-06-routing --port 4206"
        assert scripts["build:ex06"] == "ng build exercise-06-routing"
        assert list(scripts) == sorted(scripts)
        for key, value in sample_manifest["scripts"].items():
            assert scripts[key] == value

        readme = (project / "README.md").read_text(encoding="utf-8")
        assert readme.startswith("# Exercise 06: Routing\n")
        assert "http://localhost:4206" in readme

    def test_sequential_runs_allocate_increasing_numbers(
        self, empty_repo: Path, fake_generator: GeneratorConfig
    ):
        assert _run(empty_repo, fake_generator, "basics") == 0
        assert _run(empty_repo, fake_generator, "two-way-binding") == 0

        projects = sorted(p.name for p in (empty_repo / "projects").iterdir())
        assert projects == ["exercise-01-basics", "exercise-02-two-way-binding"]

        readme = empty_repo / "projects" / "exercise-02-two-way-binding" / "README.md"
        assert readme.read_text(encoding="utf-8").startswith("# Exercise 02: Two way binding\n")

        scripts = json.loads((empty_repo / "package.json").read_text())["scripts"]
        assert scripts["start:ex02"].endswith("--port 4202")

    def test_generator_failure_leaves_manifest_untouched(
        self, exercise_repo: Path, failing_generator: GeneratorConfig, capsys
    ):
        manifest_before = (exercise_repo / "package.json").read_text()

        assert _run(exercise_repo, failing_generator, "routing") == 1

        assert (exercise_repo / "package.json").read_text() == manifest_before
        assert not (exercise_repo / "projects" / "exercise-06-routing").exists()
        assert "Error creating exercise" in capsys.readouterr().err

    def test_missing_project_dir_fails_after_manifest(
        self, exercise_repo: Path, silent_generator: GeneratorConfig
    ):
        assert _run(exercise_repo, silent_generator, "routing") == 1

        # No rollback: the manifest update from the earlier stage stays.
        scripts = json.loads((exercise_repo / "package.json").read_text())["scripts"]
        assert "start:ex06" in scripts
