"""Exercise identifier allocation.

Scans the projects directory for ``exercise-<NN>-<topic>`` entries and derives
the next sequence number, its zero-padded form and the exercise port.  Nothing
is cached: every call works from the current directory listing.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, Field

from .config import Config


class Allocation(BaseModel):
    """The identifiers allocated to a new exercise."""

    topic: str = Field(..., min_length=1)
    sequence: int = Field(..., ge=1)
    padded: str
    port: int
    exercise_prefix: str = Field(default="exercise-")
    short_prefix: str = Field(default="ex")

    @property
    def name(self) -> str:
        """Full exercise name, e.g. ``exercise-06-routing``."""
        return f"{self.exercise_prefix}{self.padded}-{self.topic}"

    @property
    def short_name(self) -> str:
        """Short script suffix, e.g. ``ex06``."""
        return f"{self.short_prefix}{self.padded}"

    @property
    def start_script(self) -> str:
        """Manifest key that serves the exercise, e.g. ``start:ex06``."""
        return f"start:{self.short_name}"

    @property
    def build_script(self) -> str:
        """Manifest key that builds the exercise, e.g. ``build:ex06``."""
        return f"build:{self.short_name}"


def _sequence_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(prefix)}(\d+)-")


def scan_sequence_numbers(projects_dir: Path, prefix: str = "exercise-") -> list[int]:
    """Return the sequence number of every ``prefix``-named entry.

    Entries that carry the prefix but no ``<digits>-`` after it count as 0.
    A missing directory yields an empty list; other read errors propagate.
    """
    if not projects_dir.exists():
        return []

    pattern = _sequence_pattern(prefix)
    numbers: list[int] = []
    for entry in sorted(projects_dir.iterdir()):
        if not entry.name.startswith(prefix):
            continue
        match = pattern.match(entry.name)
        numbers.append(int(match.group(1)) if match else 0)
    return numbers


def next_sequence(numbers: list[int]) -> int:
    """One past the highest number seen, or 1 when there is none."""
    if not numbers:
        return 1
    return max(numbers) + 1


def pad_sequence(sequence: int, width: int = 2) -> str:
    """Zero-pad *sequence* to at least *width* digits (``1 -> "01"``, ``100 -> "100"``)."""
    return str(sequence).zfill(width)


def derive_port(sequence: int, base_port: int = 4200) -> int:
    """Port the exercise serves on: *base_port* plus its sequence number."""
    return base_port + sequence


def find_existing_topics(
    projects_dir: Path, topic: str, prefix: str = "exercise-"
) -> list[str]:
    """Return names of existing exercises whose topic part equals *topic*."""
    if not projects_dir.exists():
        return []

    pattern = re.compile(rf"^{re.escape(prefix)}\d+-(.+)$")
    matches: list[str] = []
    for entry in sorted(projects_dir.iterdir()):
        match = pattern.match(entry.name)
        if match and match.group(1) == topic:
            matches.append(entry.name)
    return matches


def allocate(topic: str, config: Config) -> Allocation:
    """Allocate the next exercise identifiers for *topic*.

    Raises:
        ValueError: If *topic* is empty.
        OSError: If the projects directory cannot be listed.
    """
    if not topic:
        raise ValueError("Exercise name must not be empty")

    sequence = next_sequence(
        scan_sequence_numbers(config.projects_dir, config.exercise_prefix)
    )
    return Allocation(
        topic=topic,
        sequence=sequence,
        padded=pad_sequence(sequence, config.pad_width),
        port=derive_port(sequence, config.base_port),
        exercise_prefix=config.exercise_prefix,
        short_prefix=config.short_prefix,
    )
