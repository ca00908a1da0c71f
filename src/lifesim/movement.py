"""Movement resolution: eating, collisions and free moves.

A single call resolves one life form's step into a target cell and returns
the change to its energy. Agents are resolved one at a time in roster order,
so when two agents want the same cell the first one processed gets it and
the later one collides.
"""

import logging

from .entities import Agent, Direction, Position, offset
from .grid import Grid, Marker
from .registry import EntityRegistry
from .species import Diet

logger = logging.getLogger(__name__)

COLLISION_PENALTY = -1


def resolve_move(agent: Agent, registry: EntityRegistry, grid: Grid, target: Position) -> int:
    """Apply one step of agent into target.

    Rules, first match wins:
        1. A carnivore eats a live, edible agent on the target and gains its energy.
        2. A herbivore eats the edible food item on the target and gains its
           nutrition (which may be negative).
        3. Another live agent on the target: no move, energy -1.
        4. An obstacle on the target: no move, energy -1.
        5. Otherwise the agent moves, energy unchanged.

    Args:
        agent: Life form being moved
        registry: Entity registry (roster, food items)
        grid: World grid
        target: Cell being stepped into

    Returns:
        Energy delta for the agent
    """
    if agent.diet == Diet.CARNIVORE:
        for prey in registry.agents_at(target):
            if prey is not agent and agent.can_eat(prey.species):
                energy = prey.energy
                registry.kill(prey)
                agent.move_to(target)
                agent.last_food = target
                logger.debug("%s eaten by %s", prey.name, agent.name)
                return energy

    marker = grid.cell_at(*target)

    if agent.diet == Diet.HERBIVORE and marker.is_food and agent.can_eat(marker.food_type):
        food = registry.food_at(target)
        if food is not None:
            energy = food.nutrition
            registry.remove_food(food, grid)
            agent.move_to(target)
            agent.last_food = target
            logger.debug("%s eaten by %s", food.food_type.value, agent.name)
            return energy

    for other in registry.agents_at(target):
        if other is not agent:
            logger.debug("%s hit another life form", agent.name)
            return COLLISION_PENALTY

    if marker == Marker.OBSTACLE:
        logger.debug("%s hit an obstacle", agent.name)
        return COLLISION_PENALTY

    agent.move_to(target)
    return 0


def move(agent: Agent, direction: Direction, registry: EntityRegistry, grid: Grid) -> int:
    """Resolve a one-cell step in direction. Direction.NONE is a no-op."""
    if direction == Direction.NONE:
        return 0
    return resolve_move(agent, registry, grid, offset(agent.pos, direction))
