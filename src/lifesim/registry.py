"""Entity registry for the life simulation.

Owns the ordered roster of agents plus the food items and obstacles on the
grid. Roster order is the order agents act in each cycle, so it is never
re-sorted.
"""

from typing import Dict, Iterator, List, Optional

from .entities import Agent, FoodItem, Obstacle, Position
from .errors import InvalidRequestError
from .grid import Grid, Marker
from .species import Species


class EntityRegistry:
    """Collections of agents, food items and obstacles.

    Food and obstacle methods take the grid so the cell marker is updated in
    the same call as the registry entry.
    """

    def __init__(self):
        self.agents: List[Agent] = []
        self.food_items: List[FoodItem] = []
        self.obstacles: List[Obstacle] = []

    # -- agents ---------------------------------------------------------------

    def next_uid(self) -> int:
        """Smallest id larger than every id on the roster."""
        return max((a.uid for a in self.agents), default=-1) + 1

    def create_agent(self, species: Species, name: str, energy: int, pos: Position) -> Agent:
        agent = Agent(self.next_uid(), name, species, energy, pos[0], pos[1])
        self.agents.append(agent)
        return agent

    def add_agent(self, agent: Agent):
        self.agents.append(agent)

    def find_agent(self, name: str) -> Optional[Agent]:
        for agent in self.agents:
            if agent.name == name:
                return agent
        return None

    def _require_agent(self, name: str) -> Agent:
        agent = self.find_agent(name)
        if agent is None:
            raise InvalidRequestError(f"No life form named {name!r}")
        return agent

    def remove_agent(self, name: str) -> Agent:
        """Remove the first agent called name.

        Raises:
            InvalidRequestError: If no agent has that name
        """
        agent = self._require_agent(name)
        self.agents.remove(agent)
        return agent

    def modify_agent(self, name: str, new_name: str, new_energy: int) -> Agent:
        agent = self._require_agent(name)
        agent.name = new_name
        agent.energy = new_energy
        return agent

    def kill(self, agent: Agent):
        agent.alive = False

    def live_agents(self) -> List[Agent]:
        return [a for a in self.agents if a.alive]

    def agents_at(self, pos: Position, alive_only: bool = True) -> Iterator[Agent]:
        for agent in self.agents:
            if agent.x == pos[0] and agent.y == pos[1] and (agent.alive or not alive_only):
                yield agent

    def remove_dead(self) -> int:
        """Drop dead agents from the roster.

        Returns:
            Number of agents removed
        """
        before = len(self.agents)
        self.agents = [a for a in self.agents if a.alive]
        return before - len(self.agents)

    def total_population(self) -> int:
        return len(self.live_agents())

    def stats_summary(self) -> Dict[str, int]:
        """Live population per species display name."""
        summary: Dict[str, int] = {}
        for agent in self.live_agents():
            summary[agent.species.value] = summary.get(agent.species.value, 0) + 1
        return summary

    # -- food -----------------------------------------------------------------

    def add_food(self, food: FoodItem, grid: Grid):
        self.food_items.append(food)
        grid.set_cell(food.x, food.y, Marker.for_food(food.food_type))

    def food_at(self, pos: Position) -> Optional[FoodItem]:
        for food in self.food_items:
            if food.x == pos[0] and food.y == pos[1]:
                return food
        return None

    def remove_food(self, food: FoodItem, grid: Grid):
        self.food_items.remove(food)
        grid.set_cell(food.x, food.y, Marker.EMPTY)

    # -- obstacles ------------------------------------------------------------

    def add_obstacle(self, obstacle: Obstacle, grid: Grid):
        self.obstacles.append(obstacle)
        grid.set_cell(obstacle.x, obstacle.y, Marker.OBSTACLE)

    def clear_world(self, grid: Grid):
        """Forget all food and obstacles and blank the grid. Agents stay."""
        self.food_items.clear()
        self.obstacles.clear()
        grid.clear()
