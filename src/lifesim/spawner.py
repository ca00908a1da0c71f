"""Random placement of food items and obstacles."""

import logging
from typing import AbstractSet, Optional, Sequence, Tuple

import numpy as np

from .entities import FoodItem, Obstacle, Position
from .errors import ConfigurationError
from .grid import Grid
from .registry import EntityRegistry
from .species import FoodType, ObstacleType

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000

# Inclusive roll ranges on a d100. A roll of 100 falls in no band.
FOOD_BANDS: Sequence[Tuple[int, int, FoodType]] = (
    (1, 24, FoodType.GRASS),
    (25, 39, FoodType.FLOWER),
    (40, 64, FoodType.LEAF),
    (65, 79, FoodType.PLANKTON),
    (80, 89, FoodType.MUSHROOM),
    (90, 99, FoodType.BERRY),
)


def food_type_for_roll(roll: int) -> Optional[FoodType]:
    """Map a roll in [1, 100] to a food type, or None for an unmapped roll."""
    for low, high, food_type in FOOD_BANDS:
        if low <= roll <= high:
            return food_type
    return None


class FoodSpawner:
    """Places new food items and obstacles at random empty cells.

    Args:
        rng: Shared random generator of the simulation
        max_attempts: Random draws before falling back to an exhaustive
            search of the empty cells
    """

    def __init__(self, rng: np.random.Generator, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.rng = rng
        self.max_attempts = max_attempts

    def random_cell(self, grid: Grid) -> Position:
        return Position(int(self.rng.integers(0, grid.size)), int(self.rng.integers(0, grid.size)))

    def random_empty_cell(self, grid: Grid, occupied: AbstractSet[Position] = frozenset()) -> Position:
        """Pick a random cell with an empty marker that is not in occupied.

        Raises:
            ConfigurationError: If the grid has no such cell left
        """
        for _ in range(self.max_attempts):
            cell = self.random_cell(grid)
            if grid.is_empty(*cell) and cell not in occupied:
                return cell

        # Crowded grid: choose among whatever is left
        candidates = [c for c in grid.empty_cells() if c not in occupied]
        if not candidates:
            raise ConfigurationError(
                f"No empty cell left on a {grid.size}x{grid.size} grid")
        return candidates[int(self.rng.integers(0, len(candidates)))]

    def roll_food_type(self) -> Optional[FoodType]:
        return food_type_for_roll(int(self.rng.integers(1, 101)))

    def spawn_food_item(self, registry: EntityRegistry, grid: Grid,
                        occupied: AbstractSet[Position] = frozenset()) -> Optional[FoodItem]:
        """Create one food item of a weighted random type at an empty cell.

        Returns:
            The new FoodItem, or None if the roll hit the unmapped value
        """
        cell = self.random_empty_cell(grid, occupied)
        food_type = self.roll_food_type()
        if food_type is None:
            logger.debug("Food roll fell outside every band, nothing added")
            return None
        food = FoodItem(food_type, cell.x, cell.y)
        registry.add_food(food, grid)
        logger.debug("Added new food item of type: %s", food_type.value)
        return food

    def spawn_obstacle(self, registry: EntityRegistry, grid: Grid,
                       occupied: AbstractSet[Position] = frozenset()) -> Obstacle:
        """Create a rock or a tree (50/50) at an empty cell."""
        cell = self.random_empty_cell(grid, occupied)
        obstacle_type = ObstacleType.ROCK if self.rng.random() < 0.5 else ObstacleType.TREE
        obstacle = Obstacle(obstacle_type, cell.x, cell.y)
        registry.add_obstacle(obstacle, grid)
        return obstacle
