"""Word puzzle and fleet board generator.

This package exposes the public API surface via:

- ``wordgrid.engine.generator.PuzzleGenerator``: filters a word pool and
  retries crossword or word-search placement until a quality grid appears.
- ``wordgrid.engine.fleet.FleetPlacer``: random ship placement with CP-SAT
  completion, plus manual placement and shot queries.
- ``wordgrid.io`` helpers: word list loading and the JSON puzzle store.
"""

from .core.models import FleetLayout, GenerationFailure, PuzzleResult, WordEntry
from .engine.fleet import FleetConfig, FleetPlacer
from .engine.generator import (
    GeneratorConfig,
    PuzzleGenerator,
    generate_crossword,
    generate_fleet,
    generate_word_search,
)
from .io.puzzle_store import JsonPuzzleStore
from .io.word_list import load_word_list

__all__ = [
    "FleetConfig",
    "FleetLayout",
    "FleetPlacer",
    "GenerationFailure",
    "GeneratorConfig",
    "JsonPuzzleStore",
    "PuzzleGenerator",
    "PuzzleResult",
    "WordEntry",
    "generate_crossword",
    "generate_fleet",
    "generate_word_search",
    "load_word_list",
]

__version__ = "0.1.0"
