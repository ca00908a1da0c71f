"""Artificial life simulation: foraging life forms on a bounded grid."""

from .config import EngineConfig, SimulationConfig, WorldConfig
from .entities import Agent, Direction, FoodItem, Obstacle, Position
from .errors import ConfigurationError, InvalidRequestError, LifeSimError, PersistenceError
from .grid import Grid, Marker
from .registry import EntityRegistry
from .simulation import Simulation, SimulationState, WorldSnapshot
from .species import Diet, FoodType, ObstacleType, SenseType, Species

__version__ = "1.0.0"
