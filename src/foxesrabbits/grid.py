"""
Fixed-size 2-D grid of cells.

Storage is vectorized: one small-int array with the species code of every
cell and one object array of Python ints with its energy, both shaped
(rows, columns) and indexed [y, x]. Energies are unbounded, so they are not
kept in a fixed-width integer dtype. Cell values (``Empty``/``Fox``/``Rabbit``) are built on the
way out of ``get`` and taken apart on the way into ``set``, so callers only
ever see immutable cells while population and energy totals stay array
operations.

Neighbors are the up-to-8 surrounding in-range positions (Moore
neighborhood, no wrap-around), always listed in the same order:
dy = -1, 0, 1 and within that dx = -1, 0, 1.
"""
from __future__ import annotations

import logging
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from foxesrabbits.cells import EMPTY, Cell, Empty, Fox, Rabbit
from foxesrabbits.energy import Energy

logger = logging.getLogger(__name__)

EMPTY_CODE = 0
FOX_CODE = 1
RABBIT_CODE = 2

_NEIGHBOR_OFFSETS = [(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)]


class Position(NamedTuple):
    x: int
    y: int


class Dimensions(NamedTuple):
    rows: int
    columns: int

    @property
    def size(self) -> int:
        return self.rows * self.columns


class Populations(NamedTuple):
    foxes: int
    rabbits: int


class EnergyStat(NamedTuple):
    foxes: Energy
    rabbits: Energy


class Grid:
    def __init__(self, dimensions: Dimensions, kinds: np.ndarray, energies: np.ndarray):
        self.dimensions = Dimensions(int(dimensions[0]), int(dimensions[1]))
        if self.dimensions.rows <= 0 or self.dimensions.columns <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.dimensions.rows}x{self.dimensions.columns}")
        shape = (self.dimensions.rows, self.dimensions.columns)
        if kinds.shape != shape or energies.shape != shape:
            raise ValueError(f"Grid arrays must have shape {shape}, got {kinds.shape} and {energies.shape}")
        self.kinds = kinds
        self.energies = energies

    # ---------- construction ----------
    @classmethod
    def empty(cls, dimensions: Dimensions) -> Grid:
        shape = (int(dimensions[0]), int(dimensions[1]))
        return cls(
            dimensions,
            np.full(shape, EMPTY_CODE, dtype=np.int8),
            np.zeros(shape, dtype=object),
        )

    @classmethod
    def from_list(cls, dimensions: Dimensions, cells: Sequence[Cell]) -> Optional[Grid]:
        """
        Builds a grid from row-major cells (y outer, x inner). Returns None
        when the number of cells does not match rows * columns.
        """
        dimensions = Dimensions(int(dimensions[0]), int(dimensions[1]))
        if len(cells) != dimensions.size:
            return None
        grid = cls.empty(dimensions)
        for index, cell in enumerate(cells):
            y, x = divmod(index, dimensions.columns)
            grid.set(Position(x, y), cell)
        return grid

    def copy(self) -> Grid:
        return Grid(self.dimensions, self.kinds.copy(), self.energies.copy())

    # ---------- single cell access ----------
    def contains(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.dimensions.columns and 0 <= y < self.dimensions.rows

    def _index(self, position: Position) -> Tuple[int, int]:
        if not self.contains(position):
            raise IndexError(f"Position {tuple(position)} outside grid {self.dimensions.columns}x{self.dimensions.rows}")
        return position[1], position[0]

    def get(self, position: Position) -> Cell:
        index = self._index(position)
        code = self.kinds[index]
        if code == FOX_CODE:
            return Fox(Energy(int(self.energies[index])))
        if code == RABBIT_CODE:
            return Rabbit(Energy(int(self.energies[index])))
        return EMPTY

    def set(self, position: Position, cell: Cell) -> None:
        index = self._index(position)
        if isinstance(cell, Fox):
            self.kinds[index] = FOX_CODE
            self.energies[index] = cell.energy.value
        elif isinstance(cell, Rabbit):
            self.kinds[index] = RABBIT_CODE
            self.energies[index] = cell.energy.value
        elif isinstance(cell, Empty):
            self.kinds[index] = EMPTY_CODE
            self.energies[index] = 0
        else:
            raise TypeError(f"Not a cell: {cell!r}")

    def move(self, source: Position, destination: Position, cell: Cell) -> None:
        """Empties ``source`` and places ``cell`` on ``destination`` as one operation."""
        # both ends are checked before either is written
        self._index(source)
        self._index(destination)
        self.set(source, EMPTY)
        self.set(destination, cell)

    # ---------- iteration ----------
    def positions(self) -> Iterator[Position]:
        for y in range(self.dimensions.rows):
            for x in range(self.dimensions.columns):
                yield Position(x, y)

    def items(self) -> Iterator[Tuple[Position, Cell]]:
        for position in self.positions():
            yield position, self.get(position)

    def cells(self) -> List[Cell]:
        return [cell for _, cell in self.items()]

    # ---------- neighborhood queries ----------
    def neighbor_positions(self, position: Position) -> List[Position]:
        x, y = position
        result = []
        for dx, dy in _NEIGHBOR_OFFSETS:
            candidate = Position(x + dx, y + dy)
            if self.contains(candidate):
                result.append(candidate)
        return result

    def neighbors(self, position: Position) -> List[Tuple[Position, Cell]]:
        return [(p, self.get(p)) for p in self.neighbor_positions(position)]

    def _nearby(self, position: Position, code: int) -> List[Position]:
        return [p for p in self.neighbor_positions(position) if self.kinds[p[1], p[0]] == code]

    def nearby_rabbits(self, position: Position) -> List[Position]:
        return self._nearby(position, RABBIT_CODE)

    def nearby_foxes(self, position: Position) -> List[Position]:
        return self._nearby(position, FOX_CODE)

    def nearby_empties(self, position: Position) -> List[Position]:
        return self._nearby(position, EMPTY_CODE)

    def nearby_safe_empties(self, position: Position) -> List[Position]:
        """Empty neighbors that do not themselves border a fox."""
        return [p for p in self.nearby_empties(position) if self.is_safe(p)]

    def is_safe(self, position: Position) -> bool:
        return not self.nearby_foxes(position)

    # ---------- aggregates ----------
    def populations(self) -> Populations:
        return Populations(
            foxes=int(np.count_nonzero(self.kinds == FOX_CODE)),
            rabbits=int(np.count_nonzero(self.kinds == RABBIT_CODE)),
        )

    def empties(self) -> int:
        return int(np.count_nonzero(self.kinds == EMPTY_CODE))

    def energy_stats(self) -> EnergyStat:
        return EnergyStat(
            foxes=Energy(sum(self.energies[self.kinds == FOX_CODE].tolist())),
            rabbits=Energy(sum(self.energies[self.kinds == RABBIT_CODE].tolist())),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.dimensions == other.dimensions
            and np.array_equal(self.kinds, other.kinds)
            and np.array_equal(self.energies, other.energies)
        )

    __hash__ = None

    def __repr__(self) -> str:
        symbols = {EMPTY_CODE: ".", FOX_CODE: "F", RABBIT_CODE: "R"}
        rows = ["".join(symbols[int(code)] for code in row) for row in self.kinds]
        return f"Grid({self.dimensions.rows}x{self.dimensions.columns})\n" + "\n".join(rows)


def grid_or_empty(dimensions: Dimensions, cells: Sequence[Cell]) -> Grid:
    """``Grid.from_list`` with the empty-grid fallback on a length mismatch."""
    grid = Grid.from_list(dimensions, cells)
    if grid is None:
        dimensions = Dimensions(int(dimensions[0]), int(dimensions[1]))
        logger.warning(
            "Got %d cells for a %dx%d grid; falling back to an empty grid",
            len(cells), dimensions.rows, dimensions.columns,
        )
        return Grid.empty(dimensions)
    return grid
