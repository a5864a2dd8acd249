from __future__ import annotations

import logging

from wordgrid.grid import Grid, GridIndex
from wordgrid.trie import TrieNode

logger = logging.getLogger("wordgrid")

Path = list[GridIndex]


def solve(root: TrieNode, grid: Grid) -> list[Path]:
    """Find every path of adjacent, distinct cells that spells a word in the trie.

    Paths come back in discovery order: starting cells row-major, then
    neighbours NW..SE at each step. The same word reached by two routes
    yields two paths.
    """
    out: list[Path] = []
    empty = Grid.empty_mask(grid.shape)
    for idx in grid.shape.all_indices_within_bounds():
        child = root.find_in_children(grid[idx])
        if child is not None:
            search(child, grid, empty, idx, [], out)
    logger.debug("Solved %s grid: %d paths", grid.shape, len(out))
    return out


def search(node: TrieNode, grid: Grid, visited: Grid, idx: GridIndex, path: Path, out: list[Path]):
    # visited is never mutated; each branch gets its own copy via with_at.
    new_visited = visited.with_at(True, idx)
    path.append(idx)
    if node.is_terminal:
        out.append(list(path))
    for n_idx in idx.get_neighbouring():
        if new_visited[n_idx]:
            continue
        child = node.find_in_children(grid[n_idx])
        if child is not None:
            search(child, grid, new_visited, n_idx, path, out)
    path.pop()


def spell(path: Path, grid: Grid) -> str:
    return "".join(grid[idx] for idx in path)


def found_words(paths: list[Path], grid: Grid, min_length: int = 1, max_results: int = 0) -> list[str]:
    """Unique words spelled by the paths: longest first, then alphabetical."""
    found = {spell(path, grid) for path in paths}
    result = sorted((w for w in found if len(w) >= min_length), key=lambda w: (-len(w), w))
    return result[:max_results] if max_results > 0 else result


def word_starts(paths: list[Path], grid: Grid) -> dict[str, tuple[int, int]]:
    """Map each word to its topmost-leftmost starting cell as (row, col)."""
    starts: dict[str, tuple[int, int]] = {}
    for path in paths:
        word = spell(path, grid)
        x, y = path[0].to_xy()
        if word not in starts or (y, x) < starts[word]:
            starts[word] = (y, x)
    return starts
