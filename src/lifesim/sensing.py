"""Directional sensing for life forms.

A life form looks outward along the four compass rays for something it can
eat. How far it looks depends on its sense (feel, sight or smell), which in
turn depends on its species and diet.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Sequence, Set

import numpy as np

from .entities import Agent, CARDINAL_DIRECTIONS, Direction, Position, offset
from .grid import Grid, Marker
from .species import Diet, SenseType, sense_type_for

logger = logging.getLogger(__name__)


class Sensor(ABC):
    """Base class for the three senses.

    Subclasses only differ in range; the scan itself is shared.
    """

    @property
    @abstractmethod
    def sense_type(self) -> SenseType:
        pass

    @property
    def range(self) -> int:
        return self.sense_type.range

    def sense(self, agent: Agent, agents: Sequence[Agent], grid: Grid) -> Direction:
        """Find the direction of the nearest edible target.

        Distances are scanned nearest first and, at each distance, rays are
        tried in the order North, East, South, West, so ties go to the
        earlier direction at the smaller distance.

        An obstacle hides everything behind it on that ray. Rays are walked
        one distance level at a time rather than precomputed, so a blocked
        ray is remembered in a set and skipped at later levels.

        Args:
            agent: The life form doing the sensing
            agents: All life forms in roster order
            grid: World grid

        Returns:
            Direction of a target, or Direction.NONE if nothing is in range
        """
        blocked: Set[Direction] = set()
        for distance in range(1, self.range + 1):
            for direction in CARDINAL_DIRECTIONS:
                if direction in blocked:
                    continue
                cell = offset(agent.pos, direction, distance)
                if not grid.in_bounds(*cell):
                    continue
                if _holds_target(agent, cell, agents, grid):
                    logger.debug("%s sensed food %d cell(s) to the %s",
                                 agent.name, distance, direction.name.lower())
                    return direction
                if grid.cell_at(*cell) == Marker.OBSTACLE:
                    blocked.add(direction)
        return Direction.NONE


class FeelSensor(Sensor):
    """Touch: only the adjacent cells."""

    @property
    def sense_type(self) -> SenseType:
        return SenseType.FEEL


class SightSensor(Sensor):

    @property
    def sense_type(self) -> SenseType:
        return SenseType.SIGHT


class SmellSensor(Sensor):

    @property
    def sense_type(self) -> SenseType:
        return SenseType.SMELL


SENSORS: Dict[SenseType, Sensor] = {
    SenseType.FEEL: FeelSensor(),
    SenseType.SIGHT: SightSensor(),
    SenseType.SMELL: SmellSensor(),
}


def _holds_target(agent: Agent, cell: Position, agents: Sequence[Agent], grid: Grid) -> bool:
    if agent.diet == Diet.CARNIVORE:
        for other in agents:
            if (other is not agent and other.alive
                    and other.x == cell.x and other.y == cell.y
                    and agent.can_eat(other.species)):
                return True
        return False
    food_type = grid.cell_at(*cell).food_type
    return food_type is not None and agent.can_eat(food_type)


def sensor_for(agent: Agent) -> Sensor:
    return SENSORS[sense_type_for(agent.species, agent.diet)]


def sense_direction(agent: Agent, agents: Sequence[Agent], grid: Grid) -> Direction:
    """Direction of the nearest target using the agent's own sense."""
    return sensor_for(agent).sense(agent, agents, grid)


def random_direction(rng: np.random.Generator) -> Direction:
    """Uniformly random compass direction (never NONE)."""
    return CARDINAL_DIRECTIONS[int(rng.integers(0, len(CARDINAL_DIRECTIONS)))]


def get_direction_of_food(agent: Agent, agents: Sequence[Agent], grid: Grid,
                          rng: np.random.Generator) -> Direction:
    """Like sense_direction, but wander randomly when nothing is sensed."""
    direction = sense_direction(agent, agents, grid)
    if direction == Direction.NONE:
        direction = random_direction(rng)
    return direction
