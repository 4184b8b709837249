"""Exception hierarchy for the word hunt solver."""


class WordHuntError(Exception):
    """Base exception for solver and dictionary failures."""


class DictionaryLoadError(WordHuntError):
    """Raised when an existing dictionary file cannot be read or decoded."""


class BoardShapeError(WordHuntError):
    """Raised when a board is not a rectangular grid of non-empty strings."""
