"""Custom exception hierarchy for puzzle generation."""


class PuzzleError(Exception):
    """Base exception for engine failures."""


class EmptyPoolError(PuzzleError):
    """Raised when no candidate words survive filtering."""


class QualityNotMetError(PuzzleError):
    """Raised when every attempt placed fewer words than required."""


class PlacementError(PuzzleError):
    """Raised when a single placement cannot be committed to the grid."""


class OutOfBoundsError(PlacementError):
    """Raised when a coordinate falls outside the grid."""


class CellConflictError(PlacementError):
    """Raised when a write would overwrite a different value."""


class FleetPlacementError(PuzzleError):
    """Raised when a ship cannot be placed on the board."""


class ValidationError(PuzzleError):
    """Raised when the puzzle integrity checks fail."""


class WordListError(PuzzleError):
    """Raised when a word list file cannot be parsed."""


class StoreError(PuzzleError):
    """Raised when a stored puzzle document is missing or unreadable."""
