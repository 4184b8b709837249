"""
Solve a word hunt board from the command line.

Usage:
    python -m scripts.solve_board <row> [<row> ...] [--dictionary PATH] [--min-length N]

Each row is a space separated list of cells, so multi-letter tiles stay whole:
    python -m scripts.solve_board "o e t w" "i a r s" "y t o p" "r w b s"
    python -m scripts.solve_board "qu i t" "e s a" "n d r" --paths
"""
import argparse
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wordhunt.settings import settings
from wordhunt.dictionary import Dictionary
from wordhunt.exceptions import BoardShapeError
from wordhunt.solver import Solver


def main(argv=None):
    parser = argparse.ArgumentParser(description="Word Hunt Solver")
    parser.add_argument("rows", nargs="+", help="Board rows, cells separated by spaces")
    parser.add_argument("--dictionary", type=str, default=str(settings.DICTIONARY_PATH),
                        help=f"Word list, one word per line (default: {settings.DICTIONARY_PATH})")
    parser.add_argument("--min-length", type=int, default=settings.MIN_WORD_LENGTH,
                        help=f"Shortest word to report (default: {settings.MIN_WORD_LENGTH})")
    parser.add_argument("--paths", action="store_true",
                        help="Print the cell path of each word")
    args = parser.parse_args(argv)

    board = [row.split() for row in args.rows]

    dictionary = Dictionary()
    loaded = dictionary.load(args.dictionary)
    if not loaded:
        print(f"Warning: no words loaded from {args.dictionary}", file=sys.stderr)

    try:
        paths = Solver(dictionary, args.min_length).find_word_paths(board)
    except BoardShapeError as e:
        parser.error(str(e))

    for word, path in paths.items():
        if args.paths:
            print(f"{word}\t{' '.join(f'{r},{c}' for r, c in path)}")
        else:
            print(word)

    print(f"{len(paths)} words", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
