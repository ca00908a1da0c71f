"""Bounded square grid of cell markers.

Each cell holds one marker: empty, the tag of the single food item lying
there, or an obstacle. Agents are not stored on the grid; they are looked up
through the registry.
"""

from enum import IntEnum
from typing import List, Optional

import numpy as np

from .entities import Position, in_bounds
from .species import FoodType


class Marker(IntEnum):
    """Content tag of one grid cell."""
    EMPTY = 0
    GRASS = 1
    FLOWER = 2
    LEAF = 3
    PLANKTON = 4
    MUSHROOM = 5
    BERRY = 6
    OBSTACLE = 7

    @classmethod
    def for_food(cls, food_type: FoodType) -> 'Marker':
        return cls[food_type.name]

    @property
    def food_type(self) -> Optional[FoodType]:
        """Food type tagged by this marker, or None for empty/obstacle."""
        if self in (Marker.EMPTY, Marker.OBSTACLE):
            return None
        return FoodType[self.name]

    @property
    def is_food(self) -> bool:
        return self.food_type is not None


class Grid:
    """worldSize x worldSize map of markers, indexed [x, y]."""

    def __init__(self, size: int):
        self.cells = np.zeros((size, size), dtype=np.int8)

    @property
    def size(self) -> int:
        return self.cells.shape[0]

    def in_bounds(self, x: int, y: int) -> bool:
        return in_bounds((x, y), self.size)

    def cell_at(self, x: int, y: int) -> Marker:
        return Marker(int(self.cells[x, y]))

    def set_cell(self, x: int, y: int, marker: Marker):
        self.cells[x, y] = marker

    def is_empty(self, x: int, y: int) -> bool:
        return self.cells[x, y] == Marker.EMPTY

    def clear(self):
        self.cells.fill(Marker.EMPTY)

    def resize(self, new_size: int):
        """Reallocate the grid. All cells become empty.

        Callers must re-populate food, obstacles and agents afterwards.
        """
        self.cells = np.zeros((new_size, new_size), dtype=np.int8)

    def count(self, marker: Marker) -> int:
        return int(np.count_nonzero(self.cells == marker))

    def empty_cells(self) -> List[Position]:
        """All empty cells, in row-major [x, y] order."""
        return [Position(int(x), int(y)) for x, y in np.argwhere(self.cells == Marker.EMPTY)]

    def copy(self) -> np.ndarray:
        return self.cells.copy()
