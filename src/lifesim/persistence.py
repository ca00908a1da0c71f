"""Saving and loading the agent roster and world configuration.

Only the roster and the world parameters are stored. Food items and
obstacles are regenerated by init_world after a load.
"""

import json
import logging
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from .config import WorldConfig
from .entities import Agent, in_bounds
from .errors import PersistenceError
from .species import Species

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
DEFAULT_SAVE_PATH = "simulationData.json"

PathLike = Union[str, Path]


def agent_to_dict(agent: Agent) -> dict:
    return {
        'uid': agent.uid,
        'name': agent.name,
        'species': agent.species.name,
        'energy': agent.energy,
        'x': agent.x,
        'y': agent.y,
        'alive': agent.alive,
    }


def agent_from_dict(data: dict) -> Agent:
    return Agent(
        uid=int(data['uid']),
        name=str(data['name']),
        species=Species[data['species']],
        energy=int(data['energy']),
        x=int(data['x']),
        y=int(data['y']),
        alive=bool(data.get('alive', True)),
    )


def save_state(path: PathLike, world: WorldConfig, agents: Sequence[Agent]):
    """Write the roster and world configuration as JSON.

    Raises:
        PersistenceError: If the file cannot be written
    """
    document = {
        'version': FORMAT_VERSION,
        'config': {
            'simulation_cycles': world.simulation_cycles,
            'world_size': world.world_size,
            'food_density': world.food_density,
            'object_density': world.object_density,
        },
        'agents': [agent_to_dict(a) for a in agents],
    }
    try:
        Path(path).write_text(json.dumps(document, indent=2))
    except OSError as e:
        raise PersistenceError(f"Failed to save configuration to {path}: {e}") from e
    logger.info("Data written to %s", path)


def load_state(path: PathLike) -> Tuple[WorldConfig, List[Agent]]:
    """Read a file written by save_state.

    Returns:
        (world configuration, agent roster in saved order)

    Raises:
        PersistenceError: If the file is missing, unreadable or malformed, or
            places an agent off the grid
    """
    try:
        document = json.loads(Path(path).read_text())
    except (OSError, ValueError) as e:
        raise PersistenceError(f"Cannot read {path}: {e}") from e

    if not isinstance(document, dict) or document.get('version') != FORMAT_VERSION:
        raise PersistenceError(f"{path} is not a version {FORMAT_VERSION} save file")

    try:
        world = WorldConfig(**document['config'])
        agents = [agent_from_dict(a) for a in document['agents']]
    except (KeyError, TypeError, ValueError) as e:
        raise PersistenceError(f"Corrupt save file {path}: {e}") from e

    for agent in agents:
        if not in_bounds(agent.pos, world.world_size):
            raise PersistenceError(
                f"Corrupt save file {path}: {agent.name} at ({agent.x}, {agent.y}) "
                f"is outside a {world.world_size}x{world.world_size} world")

    logger.info("Data read from %s (%d life forms)", path, len(agents))
    return world, agents
