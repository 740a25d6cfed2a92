"""Exception types raised by the scaffolding stages."""

from __future__ import annotations

from pathlib import Path


class ExerciseError(Exception):
    """Raised when creating an exercise fails irrecoverably."""

    def __init__(self, message: str, stage: str = "") -> None:
        self.stage = stage
        super().__init__(message)


class GeneratorError(ExerciseError):
    """Raised when the external application generator cannot run or fails."""

    def __init__(self, message: str, command: str = "", returncode: int | None = None) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(message, stage="generate")


class ManifestError(ExerciseError):
    """Raised when the command manifest cannot be read, parsed or written."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message, stage="manifest")
