"""Simulation engine: world initialisation and the per-cycle loop.

The Simulation owns the grid, the entity registry and the single random
generator. Everything that mutates the world goes through it, one tick at a
time; callers only read snapshots between ticks.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import numpy as np

from .boundary import protect_boundaries
from .config import SimulationConfig, WorldConfig
from .entities import Agent, FoodItem, Obstacle, Position, in_bounds
from .errors import ConfigurationError, InvalidRequestError, LifeSimError, PersistenceError
from .grid import Grid
from .movement import move
from .persistence import DEFAULT_SAVE_PATH, load_state, save_state
from .registry import EntityRegistry
from .sensing import get_direction_of_food
from .spawner import FoodSpawner
from .species import Species

logger = logging.getLogger(__name__)


class SimulationState(Enum):
    IDLE = "idle"          # Before init_world
    RUNNING = "running"    # Cycle counter advancing


@dataclass
class WorldSnapshot:
    """Copy of the world state handed to renderers and reports.

    Agents are in roster order and only live ones are included.
    """
    cycle: int
    total_cycles: int
    world_size: int
    agents: List[Agent]
    food_items: List[FoodItem]
    obstacles: List[Obstacle]
    grid: np.ndarray
    populations: Dict[str, int] = field(default_factory=dict)


class Simulation:
    """A bounded grid world of foraging life forms.

    Args:
        config: Simulation configuration (defaults to SimulationConfig.default())
        rng: Random generator to use instead of one seeded from config.engine.seed
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        self.config = config if config is not None else SimulationConfig.default()
        self.config.engine.validate()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.engine.seed)

        self.grid = Grid(self.config.world.world_size)
        self.registry = EntityRegistry()
        self.spawner = FoodSpawner(self.rng, self.config.engine.max_placement_attempts)

        self.state = SimulationState.IDLE
        self.current_cycle = 0

        # Statistics, one entry per tick
        self.stats = {
            'cycle': [],
            'agent_count': [],
            'food_count': [],
            'mean_energy': [],
            'eaten': [],
            'starved': [],
        }

    # -- read access ----------------------------------------------------------

    @property
    def world(self) -> WorldConfig:
        return self.config.world

    @property
    def agents(self) -> List[Agent]:
        return self.registry.agents

    @property
    def food_items(self) -> List[FoodItem]:
        return self.registry.food_items

    @property
    def obstacles(self) -> List[Obstacle]:
        return self.registry.obstacles

    def _occupied(self) -> set:
        return {a.pos for a in self.registry.live_agents()}

    # -- world setup ----------------------------------------------------------

    def init_world(self, place_agents: bool = True):
        """Regenerate food and obstacles and (re)place the agents.

        Args:
            place_agents: Move every agent to a random empty cell. Pass False
                to keep the agents where they are (after a load), in which
                case food and obstacles avoid their cells.

        Raises:
            ConfigurationError: If the densities and agents do not fit the grid
        """
        logger.info("Initialising world...")
        self.world.validate(len(self.registry.agents))
        if self.grid.size != self.world.world_size:
            self.grid.resize(self.world.world_size)

        self.current_cycle = 0
        self.registry.clear_world(self.grid)

        occupied = set() if place_agents else self._occupied()
        for _ in range(self.world.food_density):
            self.spawner.spawn_food_item(self.registry, self.grid, occupied)
        for _ in range(self.world.object_density):
            self.spawner.spawn_obstacle(self.registry, self.grid, occupied)

        if place_agents:
            placed = set()
            for agent in self.registry.agents:
                cell = self.spawner.random_empty_cell(self.grid, placed)
                agent.move_to(cell)
                placed.add(cell)

        self.state = SimulationState.RUNNING
        logger.info("World ready: %dx%d, %d food items, %d obstacles, %d life forms",
                    self.grid.size, self.grid.size, len(self.food_items),
                    len(self.obstacles), len(self.agents))

    # -- the cycle ------------------------------------------------------------

    def tick(self):
        """Run one cycle.

        Tops up food with probability spawn_probability when below
        food_density, moves every living agent with energy in roster order,
        marks agents with no energy dead and advances the cycle counter.

        Raises:
            LifeSimError: If init_world has not been called yet
        """
        if self.state != SimulationState.RUNNING:
            raise LifeSimError("init_world must be called before tick")

        engine = self.config.engine
        if len(self.food_items) < self.world.food_density:
            if self.rng.random() < engine.spawn_probability:
                self.spawner.spawn_food_item(self.registry, self.grid, self._occupied())

        alive_before = self.registry.total_population()
        for agent in self.registry.agents:
            if not agent.alive or agent.energy == 0:
                continue
            direction = get_direction_of_food(agent, self.registry.agents, self.grid, self.rng)
            direction = protect_boundaries(agent, direction, self.grid.size, self.rng,
                                           engine.max_direction_retries)
            agent.energy += move(agent, direction, self.registry, self.grid)
        eaten = alive_before - self.registry.total_population()

        starved = 0
        for agent in self.registry.agents:
            if not agent.alive:
                continue
            if agent.energy == 0 or (engine.starve_below_zero and agent.energy < 0):
                self.registry.kill(agent)
                starved += 1
                logger.debug("%s ran out of energy", agent.name)

        self.current_cycle += 1
        self._record_stats(eaten, starved)

    def _record_stats(self, eaten: int, starved: int):
        live = self.registry.live_agents()
        self.stats['cycle'].append(self.current_cycle)
        self.stats['agent_count'].append(len(live))
        self.stats['food_count'].append(len(self.food_items))
        self.stats['mean_energy'].append(float(np.mean([a.energy for a in live])) if live else 0.0)
        self.stats['eaten'].append(eaten)
        self.stats['starved'].append(starved)

    def run(self, cycles: Optional[int] = None,
            on_tick: Optional[Callable[['Simulation'], None]] = None) -> int:
        """Tick until the cycle target is met or every agent is dead.

        Dead agents are removed from the roster after each tick (after
        on_tick has seen them). When the full cycle target is reached the
        cycle counter is reset so the run can be replayed.

        Args:
            cycles: Cycle target (defaults to world.simulation_cycles)
            on_tick: Called with the simulation after every tick

        Returns:
            Number of ticks run
        """
        if self.state == SimulationState.IDLE:
            self.init_world()
        target = cycles if cycles is not None else self.world.simulation_cycles

        ran = 0
        while self.current_cycle < target and self.registry.total_population() > 0:
            self.tick()
            ran += 1
            if on_tick is not None:
                on_tick(self)
            self.registry.remove_dead()

        if self.current_cycle >= target:
            logger.info("Simulation finished after %d cycles", self.current_cycle)
            self.reset_cycle()
        else:
            logger.info("All life forms died at cycle %d", self.current_cycle)
        return ran

    def reset_cycle(self):
        self.current_cycle = 0

    # -- agent requests -------------------------------------------------------

    def add_agent(self, species: Union[Species, str], name: str, energy: Union[int, str],
                  x: Optional[int] = None, y: Optional[int] = None) -> Agent:
        """Create a life form.

        Without coordinates the agent starts at a random cell in
        [1, world_size - 1] on both axes.

        Raises:
            InvalidRequestError: On an unknown species, a blank name, a
                non-integer energy, only one coordinate, or a cell off the grid
        """
        if not isinstance(species, Species):
            try:
                species = Species.parse(str(species))
            except ValueError as e:
                raise InvalidRequestError(str(e)) from e
        if not name or not name.strip():
            raise InvalidRequestError("Life form name must not be blank")
        energy = _parse_int(energy, "energy")

        if (x is None) != (y is None):
            raise InvalidRequestError("Give both x and y or neither")
        if x is None:
            size = self.grid.size
            low = 1 if size > 1 else 0
            pos = Position(int(self.rng.integers(low, size)), int(self.rng.integers(low, size)))
        else:
            pos = Position(_parse_int(x, "x"), _parse_int(y, "y"))
            if not in_bounds(pos, self.grid.size):
                raise InvalidRequestError(f"({pos.x}, {pos.y}) is outside the world")

        agent = self.registry.create_agent(species, name.strip(), energy, pos)
        logger.info("Added %s %s (energy %d) at (%d, %d)",
                    species.value, agent.name, energy, pos.x, pos.y)
        return agent

    def remove_agent(self, name: str) -> Agent:
        return self.registry.remove_agent(name)

    def modify_agent(self, name: str, new_name: str, new_energy: Union[int, str]) -> Agent:
        if not new_name or not new_name.strip():
            raise InvalidRequestError("Life form name must not be blank")
        return self.registry.modify_agent(name, new_name.strip(), _parse_int(new_energy, "energy"))

    def remove_dead(self) -> int:
        return self.registry.remove_dead()

    # -- configuration --------------------------------------------------------

    def new_configuration(self):
        """Forget every entity and go back to the default world."""
        self.registry = EntityRegistry()
        self.config.world = SimulationConfig.default().world
        self.grid.resize(self.world.world_size)
        self.current_cycle = 0
        self.state = SimulationState.IDLE

    def edit_configuration(self, simulation_cycles: int, world_size: int,
                           food_density: int, object_density: int):
        """Apply new world parameters and rebuild the world.

        Raises:
            ConfigurationError: If the new parameters are invalid; the old
                configuration is kept
        """
        new_world = WorldConfig(simulation_cycles, world_size, food_density, object_density)
        new_world.validate(len(self.registry.agents))
        self.config.world = new_world
        self.grid.resize(world_size)
        self.init_world()

    # -- reporting ------------------------------------------------------------

    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot(
            cycle=self.current_cycle,
            total_cycles=self.world.simulation_cycles,
            world_size=self.grid.size,
            agents=[dataclasses.replace(a) for a in self.registry.live_agents()],
            food_items=[dataclasses.replace(f) for f in self.food_items],
            obstacles=list(self.obstacles),
            grid=self.grid.copy(),
            populations=self.registry.stats_summary(),
        )

    def describe(self) -> str:
        """Plain-text summary of the configuration and roster."""
        lines = [
            f"Number of simulation cycles: {self.world.simulation_cycles}",
            f"World size: {self.world.world_size}",
            f"Food Density: {self.world.food_density}",
            f"Obstacle Density: {self.world.object_density}",
            f"Number of life forms: {len(self.agents)}",
            f"Current cycle: {self.current_cycle}",
        ]
        for agent in self.agents:
            status = "" if agent.alive else " (dead)"
            lines.append(f"  #{agent.uid} {agent.name} [{agent.species.value}] "
                         f"energy={agent.energy} at ({agent.x}, {agent.y}){status}")
        return "\n".join(lines)

    # -- persistence ----------------------------------------------------------

    def save(self, path: Optional[Union[str, Path]] = None) -> bool:
        """Save roster and world configuration. Food and obstacles are not saved.

        Returns:
            True on success, False if the file could not be written
        """
        try:
            save_state(path or DEFAULT_SAVE_PATH, self.world, self.agents)
        except PersistenceError as e:
            logger.error("Failed to save configuration: %s", e)
            return False
        return True

    def load(self, path: Union[str, Path]) -> bool:
        """Restore roster and world configuration from a save file.

        Food items and obstacles are left empty; call init_world next. A
        missing or corrupt file falls back to the default configuration.

        Returns:
            True if the file was loaded, False if the default was applied
        """
        try:
            world, agents = load_state(path)
            world.validate()
        except (PersistenceError, ConfigurationError, TypeError) as e:
            logger.warning("No usable configuration in %s (%s), using defaults", path, e)
            self.new_configuration()
            return False

        self.config.world = world
        self.registry = EntityRegistry()
        for agent in agents:
            self.registry.add_agent(agent)
        self.grid.resize(world.world_size)
        self.current_cycle = 0
        self.state = SimulationState.IDLE
        return True

    def save_stats(self, path: Union[str, Path]):
        """Write the per-tick statistics as a NumPy .npz archive."""
        np.savez(path, **{key: np.array(values) for key, values in self.stats.items()})
        logger.info("Statistics saved to %s", path)


def _parse_int(value: Union[int, str], what: str) -> int:
    if isinstance(value, bool):
        raise InvalidRequestError(f"{what} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise InvalidRequestError(f"{what} must be an integer, got {value!r}") from e
