"""Configuration system for the life simulation.

This module provides a dataclass-based configuration that supports:
- World parameters (cycles, size, food and obstacle densities)
- Engine tuning (random seed, spawn probability, retry bounds)
- JSON serialization for saving experiments
- Validation of configuration values
"""

from dataclasses import dataclass, field
from typing import Optional
import dataclasses
import json

from .errors import ConfigurationError


@dataclass
class WorldConfig:
    """World parameters as entered by the user."""
    simulation_cycles: int = 1000
    world_size: int = 10
    food_density: int = 20     # Standing number of food items to maintain
    object_density: int = 10   # Number of obstacles

    @property
    def capacity(self) -> int:
        return self.world_size * self.world_size

    def validate(self, agent_count: int = 0):
        """Check the values make a world that can be populated.

        Args:
            agent_count: Number of agents that also need a cell

        Raises:
            ConfigurationError: On a non-positive size or cycle count, a
                negative density, or more entities than cells
        """
        if self.world_size < 1:
            raise ConfigurationError("world_size must be positive")
        if self.simulation_cycles < 1:
            raise ConfigurationError("simulation_cycles must be positive")
        if self.food_density < 0 or self.object_density < 0:
            raise ConfigurationError("densities must be non-negative")
        needed = self.food_density + self.object_density + agent_count
        if needed > self.capacity:
            raise ConfigurationError(
                f"{needed} entities do not fit on a {self.world_size}x{self.world_size} grid")


@dataclass
class EngineConfig:
    """Engine tuning that is not part of a saved world."""
    seed: Optional[int] = None
    spawn_probability: float = 0.5     # Chance per cycle of topping up food
    max_placement_attempts: int = 1000
    max_direction_retries: int = 100
    # Literal behaviour only kills at exactly zero energy
    starve_below_zero: bool = False

    def validate(self):
        if not 0.0 <= self.spawn_probability <= 1.0:
            raise ConfigurationError("spawn_probability must be in [0, 1]")
        if self.max_placement_attempts < 1 or self.max_direction_retries < 1:
            raise ConfigurationError("retry bounds must be positive")


@dataclass
class SimulationConfig:
    """Complete simulation configuration."""
    world: WorldConfig = field(default_factory=WorldConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)

    def validate(self, agent_count: int = 0):
        self.world.validate(agent_count)
        self.engine.validate()

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return dataclasses.asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> 'SimulationConfig':
        return cls(
            world=WorldConfig(**data.get('world', {})),
            engine=EngineConfig(**data.get('engine', {})),
        )

    @classmethod
    def from_json(cls, json_str: str) -> 'SimulationConfig':
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def default(cls) -> 'SimulationConfig':
        """Configuration used for a fresh "new configuration"."""
        return cls(world=WorldConfig(simulation_cycles=1000, world_size=10,
                                     food_density=20, object_density=10))

    @classmethod
    def minimal(cls) -> 'SimulationConfig':
        """Smaller starter world with a short run."""
        return cls(world=WorldConfig(simulation_cycles=100, world_size=10,
                                     food_density=10, object_density=10))
