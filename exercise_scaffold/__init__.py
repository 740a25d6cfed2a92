"""exercise-scaffold -- creates numbered exercise applications.

Quick usage::

    from exercise_scaffold import Config, ExerciseCreator

    creator = ExerciseCreator(Config(repo_root=Path("./angular-exercises")))
    result = await creator.run("routing")
    result.allocation.name  # "exercise-06-routing"
    result.allocation.port  # 4206
"""

from exercise_scaffold.allocator import Allocation, allocate
from exercise_scaffold.config import Config, GeneratorConfig
from exercise_scaffold.errors import ExerciseError, GeneratorError, ManifestError
from exercise_scaffold.pipeline import CreationResult, ExerciseCreator, main

__version__ = "1.0.0"

__all__ = [
    "Allocation",
    "Config",
    "CreationResult",
    "ExerciseCreator",
    "ExerciseError",
    "GeneratorConfig",
    "GeneratorError",
    "ManifestError",
    "allocate",
    "main",
]
