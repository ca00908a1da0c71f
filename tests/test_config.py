"""Unit tests for the configuration system."""

import sys
import os
import json

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from lifesim.config import EngineConfig, SimulationConfig, WorldConfig
from lifesim.errors import ConfigurationError


def test_defaults():
    """Factories match the stock worlds."""
    config = SimulationConfig.default()
    assert (config.world.simulation_cycles, config.world.world_size,
            config.world.food_density, config.world.object_density) == (1000, 10, 20, 10)

    config = SimulationConfig.minimal()
    assert (config.world.simulation_cycles, config.world.food_density) == (100, 10)

    assert config.engine.spawn_probability == 0.5
    assert config.engine.starve_below_zero is False
    config.validate()
    print("✓ test_defaults passed")


def test_world_validation():
    """Invalid worlds raise ConfigurationError."""
    WorldConfig(50, 8, 10, 5).validate(agent_count=3)  # Should not raise

    bad_worlds = [
        WorldConfig(10, 0, 0, 0),    # No cells
        WorldConfig(0, 5, 1, 1),     # No cycles
        WorldConfig(10, 5, -1, 0),   # Negative density
        WorldConfig(10, 2, 3, 2),    # 5 entities, 4 cells
    ]
    for world in bad_worlds:
        try:
            world.validate()
            assert False, f"Should have rejected {world}"
        except ConfigurationError:
            pass

    # Agents need cells too
    try:
        WorldConfig(10, 3, 4, 4).validate(agent_count=2)
        assert False, "Should have rejected overcrowded world"
    except ConfigurationError as e:
        assert "10 entities" in str(e)
    print("✓ test_world_validation passed")


def test_engine_validation():
    try:
        EngineConfig(spawn_probability=1.5).validate()
        assert False, "Should have rejected probability > 1"
    except ConfigurationError:
        pass
    try:
        EngineConfig(max_direction_retries=0).validate()
        assert False, "Should have rejected zero retries"
    except ConfigurationError:
        pass
    print("✓ test_engine_validation passed")


def test_json_serialization():
    """Serialize to JSON and back."""
    original = SimulationConfig(world=WorldConfig(50, 8, 10, 5),
                                engine=EngineConfig(seed=42, starve_below_zero=True))
    json_str = original.to_json()

    data = json.loads(json_str)
    assert data['world']['world_size'] == 8
    assert data['engine']['seed'] == 42

    restored = SimulationConfig.from_json(json_str)
    assert restored == original

    # Missing sections fall back to defaults
    partial = SimulationConfig.from_dict({'world': {'world_size': 12}})
    assert partial.world.world_size == 12
    assert partial.engine == EngineConfig()
    print("✓ test_json_serialization passed")


if __name__ == "__main__":
    print("Running config tests...\n")

    test_defaults()
    test_world_validation()
    test_engine_validation()
    test_json_serialization()

    print("\n✅ All config tests passed!")
