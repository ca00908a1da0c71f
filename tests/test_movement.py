"""Tests for movement resolution: eating, collisions and free moves."""

import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from lifesim.entities import Direction, FoodItem, Obstacle, Position
from lifesim.grid import Grid, Marker
from lifesim.movement import COLLISION_PENALTY, move, resolve_move
from lifesim.registry import EntityRegistry
from lifesim.sensing import sense_direction
from lifesim.species import FoodType, ObstacleType, Species


def make_world(size=5):
    return EntityRegistry(), Grid(size)


def test_carnivore_eats_prey_before_food():
    """Fox next to a rabbit eats it rather than heading for grass."""
    registry, grid = make_world()
    fox = registry.create_agent(Species.FOX, "Reynard", 5, Position(2, 2))
    rabbit = registry.create_agent(Species.RABBIT, "Flopsy", 12, Position(3, 2))
    registry.add_food(FoodItem(FoodType.GRASS, 2, 3), grid)

    direction = sense_direction(fox, registry.agents, grid)
    assert direction == Direction.EAST

    delta = move(fox, direction, registry, grid)
    assert delta == 12
    assert not rabbit.alive
    assert fox.pos == (3, 2)
    assert fox.last_food == (3, 2)
    assert grid.cell_at(2, 3) == Marker.GRASS  # Grass untouched
    print("✓ test_carnivore_eats_prey_before_food passed")


def test_herbivore_eats_food():
    """Eating removes the food item and clears its cell."""
    registry, grid = make_world()
    rabbit = registry.create_agent(Species.RABBIT, "Flopsy", 10, Position(1, 1))
    registry.add_food(FoodItem(FoodType.FLOWER, 2, 1), grid)

    delta = resolve_move(rabbit, registry, grid, Position(2, 1))
    assert delta == FoodType.FLOWER.nutrition
    assert rabbit.pos == (2, 1)
    assert rabbit.last_food == (2, 1)
    assert registry.food_items == []
    assert grid.cell_at(2, 1) == Marker.EMPTY
    print("✓ test_herbivore_eats_food passed")


def test_poisonous_food_costs_energy():
    """Berries have negative nutrition."""
    registry, grid = make_world()
    cow = registry.create_agent(Species.COW, "Daisy", 10, Position(0, 0))
    registry.add_food(FoodItem(FoodType.BERRY, 0, 1), grid)

    assert resolve_move(cow, registry, grid, Position(0, 1)) == -3
    assert cow.pos == (0, 1)
    print("✓ test_poisonous_food_costs_energy passed")


def test_inedible_food_is_walked_over():
    """A herbivore steps onto food it does not eat without eating it."""
    registry, grid = make_world()
    fish = registry.create_agent(Species.FISH, "Nemo", 10, Position(0, 0))
    registry.add_food(FoodItem(FoodType.GRASS, 1, 0), grid)

    assert resolve_move(fish, registry, grid, Position(1, 0)) == 0
    assert fish.pos == (1, 0)
    assert len(registry.food_items) == 1
    assert grid.cell_at(1, 0) == Marker.GRASS
    print("✓ test_inedible_food_is_walked_over passed")


def test_collision_with_agent():
    """Bumping into a live agent costs one energy and does not move."""
    registry, grid = make_world()
    a = registry.create_agent(Species.RABBIT, "Flopsy", 10, Position(1, 1))
    registry.create_agent(Species.RABBIT, "Mopsy", 10, Position(2, 1))

    assert resolve_move(a, registry, grid, Position(2, 1)) == COLLISION_PENALTY
    assert a.pos == (1, 1)

    # A fox cannot eat a cow, so it collides too
    fox = registry.create_agent(Species.FOX, "Reynard", 10, Position(3, 3))
    cow = registry.create_agent(Species.COW, "Daisy", 10, Position(3, 4))
    assert resolve_move(fox, registry, grid, cow.pos) == COLLISION_PENALTY
    assert cow.alive
    print("✓ test_collision_with_agent passed")


def test_dead_agents_do_not_block():
    """Corpses awaiting removal are not obstacles."""
    registry, grid = make_world()
    a = registry.create_agent(Species.RABBIT, "Flopsy", 10, Position(1, 1))
    b = registry.create_agent(Species.RABBIT, "Mopsy", 10, Position(2, 1))
    b.alive = False

    assert resolve_move(a, registry, grid, Position(2, 1)) == 0
    assert a.pos == (2, 1)
    print("✓ test_dead_agents_do_not_block passed")


def test_collision_with_obstacle():
    registry, grid = make_world()
    a = registry.create_agent(Species.PIG, "Babe", 10, Position(1, 1))
    registry.add_obstacle(Obstacle(ObstacleType.TREE, 1, 2), grid)

    assert resolve_move(a, registry, grid, Position(1, 2)) == COLLISION_PENALTY
    assert a.pos == (1, 1)
    print("✓ test_collision_with_obstacle passed")


def test_free_move_and_no_move():
    registry, grid = make_world()
    a = registry.create_agent(Species.MOUSE, "Jerry", 10, Position(1, 1))

    assert move(a, Direction.SOUTH, registry, grid) == 0
    assert a.pos == (1, 2)
    assert a.last_food is None

    assert move(a, Direction.NONE, registry, grid) == 0
    assert a.pos == (1, 2)
    print("✓ test_free_move_and_no_move passed")


def test_first_mover_wins_contended_cell():
    """Two agents heading for the same cell: resolution order decides."""
    registry, grid = make_world()
    first = registry.create_agent(Species.RABBIT, "Flopsy", 10, Position(1, 2))
    second = registry.create_agent(Species.RABBIT, "Mopsy", 10, Position(3, 2))

    assert resolve_move(first, registry, grid, Position(2, 2)) == 0
    assert resolve_move(second, registry, grid, Position(2, 2)) == COLLISION_PENALTY
    assert first.pos == (2, 2)
    assert second.pos == (3, 2)
    print("✓ test_first_mover_wins_contended_cell passed")


if __name__ == "__main__":
    print("Running movement tests...\n")

    test_carnivore_eats_prey_before_food()
    test_herbivore_eats_food()
    test_poisonous_food_costs_energy()
    test_inedible_food_is_walked_over()
    test_collision_with_agent()
    test_dead_agents_do_not_block()
    test_collision_with_obstacle()
    test_free_move_and_no_move()
    test_first_mover_wins_contended_cell()

    print("\n✅ All movement tests passed!")
