from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator

import numpy as np


class GridSizeError(ValueError):
    """Raised when a grid is built from the wrong number of cells."""


# Neighbour offsets in visitation order:  |NW|N |NE|
#                                         |W |  |E |
#                                         |SW|S |SE|
NEIGHBOUR_OFFSETS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


@dataclass(frozen=True, order=True)
class GridShape:
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.width}x{self.height}")

    @property
    def size(self) -> int:
        return self.width * self.height

    def from_xy(self, x: int, y: int) -> GridIndex:
        return GridIndex(x + self.width * y, self)

    def all_indices_within_bounds(self) -> Iterator[GridIndex]:
        """Yield every cell index in row-major order."""
        return (GridIndex(n, self) for n in range(self.size))

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


SHAPE_4X4 = GridShape(4, 4)


@dataclass(frozen=True, order=True)
class GridIndex:
    flat: int
    shape: GridShape

    def __post_init__(self):
        if not 0 <= self.flat < self.shape.size:
            raise IndexError(f"Flat index {self.flat} out of range for a {self.shape} grid")

    def to_xy(self) -> tuple[int, int]:
        return self.flat % self.shape.width, self.flat // self.shape.width

    def get_neighbouring(self) -> Iterator[GridIndex]:
        """Yield the in-bounds neighbours in NW, N, NE, W, E, SW, S, SE order."""
        x, y = self.to_xy()
        width, height = self.shape.width, self.shape.height
        for dx, dy in NEIGHBOUR_OFFSETS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height:
                yield self.shape.from_xy(nx, ny)

    def __str__(self) -> str:
        x, y = self.to_xy()
        return f"GridIndex<{self.shape}> ({x}, {y})"


class Grid:
    """Immutable W*H array of cells, addressable by GridIndex or flat int.

    Updates go through with_at(), which returns a copy; the search relies on
    this to give every branch its own visited mask.
    """

    __slots__ = ("shape", "_cells")

    def __init__(self, shape: GridShape, cells: np.ndarray):
        if cells.shape != (shape.size,):
            raise GridSizeError(f"Expected {shape.size} cells for a {shape} grid, got {cells.size}")
        cells.flags.writeable = False
        self.shape = shape
        self._cells = cells

    @classmethod
    def from_cells(cls, cells: Iterable[Any], shape: GridShape = SHAPE_4X4, dtype=object) -> Grid:
        values = list(cells)
        if len(values) != shape.size:
            raise GridSizeError(f"Expected {shape.size} cells for a {shape} grid, got {len(values)}")
        # Filled one by one so sequence-valued cells stay single elements
        arr = np.empty(shape.size, dtype=dtype)
        for n, value in enumerate(values):
            arr[n] = value
        return cls(shape, arr)

    @classmethod
    def from_string(cls, text: str, shape: GridShape = SHAPE_4X4) -> Grid:
        return cls.from_cells(text, shape)

    @classmethod
    def from_mask(cls, bits: int, shape: GridShape = SHAPE_4X4) -> Grid:
        # Most significant bit is the top-left cell, least significant the bottom-right.
        if bits < 0:
            raise ValueError(f"Mask must be non-negative, got {bits}")
        last = shape.size - 1
        return cls.from_cells(((bits >> (last - n)) & 1 == 1 for n in range(shape.size)), shape, dtype=bool)

    @classmethod
    def empty_mask(cls, shape: GridShape = SHAPE_4X4) -> Grid:
        return cls.from_mask(0, shape)

    def _flat(self, key: GridIndex | int) -> int:
        if isinstance(key, GridIndex):
            if key.shape != self.shape:
                raise ValueError(f"{key} does not belong to a {self.shape} grid")
            return key.flat
        if not 0 <= key < self.shape.size:
            raise IndexError(f"Flat index {key} out of range for a {self.shape} grid")
        return key

    def __getitem__(self, key: GridIndex | int) -> Any:
        return self._cells.item(self._flat(key))

    def __len__(self) -> int:
        return self.shape.size

    def __iter__(self) -> Iterator[Any]:
        return iter(self._cells.tolist())

    def with_at(self, value: Any, idx: GridIndex | int) -> Grid:
        cells = self._cells.copy()
        cells[self._flat(idx)] = value
        return Grid(self.shape, cells)

    def rows(self) -> list[list[Any]]:
        values = self._cells.tolist()
        width = self.shape.width
        return [values[r * width:(r + 1) * width] for r in range(self.shape.height)]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.shape == other.shape and self._cells.tolist() == other._cells.tolist()

    __hash__ = None

    def __repr__(self) -> str:
        return f"Grid({self.shape}, {self._cells.tolist()!r})"

    def __str__(self) -> str:
        return "".join("".join(str(cell) for cell in row) + "\n" for row in self.rows())


def parse_board(text: str, shape: GridShape = SHAPE_4X4) -> Grid:
    """Build an upper-case letter grid from a board string.

    Whitespace and "/" row separators are ignored, so "CATS / REPO / ..." and
    "catsrepo..." describe the same board.
    """
    letters = "".join(ch for ch in text if not ch.isspace() and ch != "/")
    return Grid.from_string(letters.upper(), shape)
