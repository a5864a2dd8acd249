"""Solve a letter grid from the command line and print the words found."""
import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from wordgrid.grid import GridShape, GridSizeError, parse_board
from wordgrid.settings import settings
from wordgrid.solver import found_words, solve, spell
from wordgrid.trie import load_trie


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("board", help='Board letters, row-major; spaces and "/" are ignored')
    parser.add_argument("--dict", type=Path, default=settings.DICTIONARY_PATH, help="Word list, one word per line")
    parser.add_argument("--width", type=int, default=settings.GRID_WIDTH)
    parser.add_argument("--height", type=int, default=settings.GRID_HEIGHT)
    parser.add_argument("--min-length", type=int, default=settings.MIN_WORD_LENGTH)
    parser.add_argument("--max-results", type=int, default=0, help="0 prints every word")
    parser.add_argument("--paths", action="store_true", help="Print every path instead of unique words")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        grid = parse_board(args.board, GridShape(args.width, args.height))
    except (GridSizeError, ValueError) as e:
        print(f"Bad board: {e}", file=sys.stderr)
        return 2

    try:
        trie = load_trie(str(args.dict), args.min_length)
    except OSError as e:
        print(f"Could not read dictionary: {e}", file=sys.stderr)
        return 2

    print(grid)
    paths = solve(trie, grid)
    if args.paths:
        for path in paths:
            cells = " -> ".join("({},{})".format(*idx.to_xy()) for idx in path)
            print(f"{spell(path, grid)}: {cells}")
        print(f"\n{len(paths)} paths")
    else:
        words = found_words(paths, grid, args.min_length, args.max_results)
        for w in words:
            print(w)
        print(f"\n{len(words)} words")
    return 0


if __name__ == "__main__":
    sys.exit(main())
