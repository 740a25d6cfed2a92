"""Command manifest (``package.json``) updates.

Adds the ``start:ex<NN>`` and ``build:ex<NN>`` scripts for a new exercise and
keeps the ``scripts`` mapping sorted by name.  Pre-existing script values are
never modified; only their order changes.  The file is rewritten as 2-space
indented JSON with a trailing newline.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .allocator import Allocation
from .config import Config
from .errors import ManifestError
from .utils import dump_json, load_json, write_text_atomic


def load_manifest(path: Path) -> dict[str, Any]:
    """Read the manifest and check it has a ``scripts`` object.

    Raises:
        ManifestError: If the file is missing, is not valid JSON, or lacks a
            ``scripts`` mapping.
    """
    try:
        data = load_json(path)
    except FileNotFoundError as exc:
        raise ManifestError(f"Manifest not found: {path}", path=path) from exc
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Invalid JSON in {path}: {exc}", path=path) from exc
    except OSError as exc:
        raise ManifestError(f"Cannot read {path}: {exc}", path=path) from exc

    if not isinstance(data, dict):
        raise ManifestError(f"Expected a JSON object in {path}", path=path)
    if not isinstance(data.get("scripts"), dict):
        raise ManifestError(f"No 'scripts' object in {path}", path=path)
    return data


def sort_scripts(scripts: dict[str, str]) -> dict[str, str]:
    """Return *scripts* re-ordered by key (plain string ordering)."""
    return {key: scripts[key] for key in sorted(scripts)}


def exercise_scripts(allocation: Allocation, config: Config) -> dict[str, str]:
    """The two manifest entries for *allocation*."""
    tool = config.generator.script_command
    return {
        allocation.start_script: f"{tool} serve {allocation.name} --port {allocation.port}",
        allocation.build_script: f"{tool} build {allocation.name}",
    }


def add_exercise_scripts(
    manifest: dict[str, Any], allocation: Allocation, config: Config
) -> dict[str, Any]:
    """Insert (or overwrite) the exercise's scripts and re-sort ``scripts``.

    Other top-level keys keep their position.  *manifest* is updated in place
    and returned.
    """
    scripts = dict(manifest["scripts"])
    scripts.update(exercise_scripts(allocation, config))
    manifest["scripts"] = sort_scripts(scripts)
    return manifest


def save_manifest(manifest: dict[str, Any], path: Path) -> Path:
    """Write *manifest* back, all-or-nothing.

    Raises:
        ManifestError: If the file cannot be written.
    """
    try:
        return write_text_atomic(path, dump_json(manifest))
    except OSError as exc:
        raise ManifestError(f"Cannot write {path}: {exc}", path=path) from exc


def update_manifest(allocation: Allocation, config: Config) -> dict[str, Any]:
    """Load, extend and save the manifest; return what was written."""
    path = config.manifest_path
    manifest = add_exercise_scripts(load_manifest(path), allocation, config)
    save_manifest(manifest, path)
    return manifest
