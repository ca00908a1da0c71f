"""Entities that live on the world grid.

Three kinds of entity share the grid: mobile agents (life forms), food items
and obstacles. Each carries only its own fields; position handling is done
by the free functions at the bottom of this module.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, NamedTuple, Optional
from enum import Enum

from .species import Consumable, Diet, FoodType, ObstacleType, Species


class Position(NamedTuple):
    x: int
    y: int


class Direction(Enum):
    """Compass direction of a single step. North is towards y == 0."""
    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)
    NONE = (0, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


# Scan and random-choice order
CARDINAL_DIRECTIONS = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)


@dataclass
class Agent:
    """A mobile life form.

    diet and consumes default to the species profile.
    """
    uid: int
    name: str
    species: Species
    energy: int
    x: int = 0
    y: int = 0
    alive: bool = True
    diet: Optional[Diet] = None
    consumes: Optional[FrozenSet[Consumable]] = None
    # Cell of the last food/prey eaten (used by renderers to erase it)
    last_food: Optional[Position] = field(default=None, compare=False)

    def __post_init__(self):
        profile = self.species.profile
        if self.diet is None:
            self.diet = profile.diet
        if self.consumes is None:
            self.consumes = profile.consumes

    @property
    def pos(self) -> Position:
        return Position(self.x, self.y)

    def move_to(self, pos: Position):
        self.x, self.y = pos

    def can_eat(self, target: Consumable) -> bool:
        return target in self.consumes

    def __str__(self):
        return f"{self.name}: {self.energy}"


@dataclass
class FoodItem:
    food_type: FoodType
    x: int
    y: int

    @property
    def nutrition(self) -> int:
        return self.food_type.nutrition

    @property
    def pos(self) -> Position:
        return Position(self.x, self.y)


@dataclass(frozen=True)
class Obstacle:
    obstacle_type: ObstacleType
    x: int
    y: int

    @property
    def pos(self) -> Position:
        return Position(self.x, self.y)



def in_bounds(pos: Position, world_size: int) -> bool:
    """Check whether a cell lies inside a world_size x world_size grid."""
    return 0 <= pos[0] < world_size and 0 <= pos[1] < world_size


def offset(pos: Position, direction: Direction, distance: int = 1) -> Position:
    """Cell reached by walking distance steps from pos in direction."""
    return Position(pos[0] + direction.dx * distance, pos[1] + direction.dy * distance)
