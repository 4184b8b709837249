from __future__ import annotations

import logging

from wordhunt.dictionary import Dictionary
from wordhunt.exceptions import BoardShapeError
from wordhunt.trie import Trie

logger = logging.getLogger("wordhunt")

# Neighbor offsets, scanned in this order from every cell
DIRECTIONS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

Board = list[list[str]]
CellPath = list[tuple[int, int]]


def normalize_board(board) -> Board:
    """Validate a board and lowercase its cells.

    Returns an empty list for a board with no cells. Raises BoardShapeError
    for ragged rows or cells that are not non-empty strings.
    """
    rows = [list(row) for row in board]
    if not rows or all(len(row) == 0 for row in rows):
        return []

    cols = len(rows[0])
    for r, row in enumerate(rows):
        if len(row) != cols:
            raise BoardShapeError(f"Row {r} has {len(row)} cells, expected {cols}")
        for c, cell in enumerate(row):
            if not isinstance(cell, str) or not cell:
                raise BoardShapeError(f"Cell ({r}, {c}) must be a non-empty string, got {cell!r}")
    return [[cell.lower() for cell in row] for row in rows]


class Solver:
    """Finds every dictionary word traceable on a board.

    The dictionary is copied at construction, so later loads never affect a
    search in progress.
    """

    def __init__(self, dictionary: Dictionary, min_word_length: int = 3):
        self.trie: Trie = dictionary.snapshot()
        self.min_word_length = min_word_length

    def find_all_words(self, board) -> list[str]:
        """Return found words sorted longest first, then alphabetically."""
        return list(self.find_word_paths(board))

    def find_word_paths(self, board) -> dict[str, CellPath]:
        """Map each found word to the first path that spells it.

        Keys are ordered the same way as find_all_words.
        """
        grid = normalize_board(board)
        if not grid:
            return {}

        rows, cols = len(grid), len(grid[0])
        found: dict[str, CellPath] = {}
        visited = [[False] * cols for _ in range(rows)]
        current: list[str] = []
        path: CellPath = []

        for r in range(rows):
            for c in range(cols):
                self._visit(grid, r, c, visited, current, path, found)

        words = sorted(
            (w for w in found if len(w) >= self.min_word_length),
            key=lambda w: (-len(w), w),
        )
        logger.debug("Searched %dx%d board, %d words found", rows, cols, len(words))
        return {w: found[w] for w in words}

    def _visit(
        self,
        grid: Board,
        row: int,
        col: int,
        visited: list[list[bool]],
        current: list[str],
        path: CellPath,
        found: dict[str, CellPath],
    ):
        if not (0 <= row < len(grid) and 0 <= col < len(grid[0])) or visited[row][col]:
            return

        visited[row][col] = True
        current.append(grid[row][col])
        path.append((row, col))
        try:
            word = "".join(current)
            # prune: nothing in the dictionary starts with this path
            if not self.trie.has_prefix(word):
                return

            if self.trie.is_word(word) and word not in found:
                found[word] = list(path)

            for dr, dc in DIRECTIONS:
                self._visit(grid, row + dr, col + dc, visited, current, path, found)
        finally:
            visited[row][col] = False
            current.pop()
            path.pop()


def solve_words(dictionary: Dictionary, board, min_word_length: int = 3) -> list[str]:
    return Solver(dictionary, min_word_length).find_all_words(board)
