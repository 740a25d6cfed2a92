"""Module entrypoint for `python -m exercise_scaffold`."""

from __future__ import annotations

import sys

from .pipeline import main

if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
