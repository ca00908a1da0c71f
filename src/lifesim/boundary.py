"""Keep life forms from walking off the edge of the world."""

import logging

import numpy as np

from .entities import Agent, Direction, Position
from .sensing import random_direction

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 100


def crosses_boundary(pos: Position, direction: Direction, world_size: int) -> bool:
    """True if one step from pos in direction would leave the grid.

    The last valid coordinate is world_size - 1, so a step East or South is
    refused once the coordinate is past world_size - 2.
    """
    x, y = pos
    return ((x < 1 and direction == Direction.WEST)
            or (x > world_size - 2 and direction == Direction.EAST)
            or (y < 1 and direction == Direction.NORTH)
            or (y > world_size - 2 and direction == Direction.SOUTH))


def protect_boundaries(agent: Agent, direction: Direction, world_size: int,
                       rng: np.random.Generator,
                       max_retries: int = DEFAULT_MAX_RETRIES) -> Direction:
    """Replace a direction that would leave the grid with a random safe one.

    Args:
        agent: Life form about to move
        direction: Direction it wants to move in
        world_size: Side length of the grid
        rng: Random generator for replacement directions
        max_retries: Replacement attempts before giving up

    Returns:
        A direction that keeps the agent on the grid, or Direction.NONE (stay
        in place) if no safe direction was drawn within max_retries. A 1x1
        world has no safe direction at all.
    """
    retries = 0
    while crosses_boundary(agent.pos, direction, world_size):
        if retries >= max_retries:
            logger.debug("%s found no way off the boundary, staying put", agent.name)
            return Direction.NONE
        direction = random_direction(rng)
        retries += 1
        logger.debug("%s reached the world boundary, changing direction to %s",
                     agent.name, direction.name)
    return direction
