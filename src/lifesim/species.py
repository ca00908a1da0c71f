"""Species catalogue for the life simulation.

Every life form belongs to one of a fixed set of species. A species decides
what the life form eats (its diet and the set of things it consumes) and,
through that, how far it can sense.
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Union
from enum import Enum

from .errors import ConfigurationError


class Diet(Enum):
    """What class of target a life form hunts for."""
    HERBIVORE = "herbivore"  # Eats food items on the grid
    CARNIVORE = "carnivore"  # Eats other life forms


class FoodType(Enum):
    """Stationary food items. The value is the display tag."""
    GRASS = "Grass"
    FLOWER = "Flower"
    LEAF = "Leaf"
    PLANKTON = "Plankton"
    MUSHROOM = "Mushroom"
    BERRY = "Berry"

    @property
    def nutrition(self) -> int:
        return FOOD_NUTRITION[self]


# Energy gained by a herbivore eating each food type (berries are poisonous)
FOOD_NUTRITION: Dict[FoodType, int] = {
    FoodType.GRASS: 3,
    FoodType.FLOWER: 5,
    FoodType.LEAF: 2,
    FoodType.PLANKTON: 2,
    FoodType.MUSHROOM: 4,
    FoodType.BERRY: -3,
}


class ObstacleType(Enum):
    ROCK = "Rock"
    TREE = "Tree"


class SenseType(Enum):
    """Sense used to look for food. The value is the maximum range in cells."""
    FEEL = 1
    SIGHT = 2
    SMELL = 4

    @property
    def range(self) -> int:
        return self.value


class Species(Enum):
    """Available species. The value is the display name."""
    BEAR = "Bear"
    BIRD = "Bird"
    BUG = "Bug"
    COW = "Cow"
    FISH = "Fish"
    FOX = "Fox"
    LION = "Lion"
    MOUSE = "Mouse"
    PIG = "Pig"
    RABBIT = "Rabbit"
    WHALE = "Killer Whale"

    @classmethod
    def parse(cls, name: str) -> 'Species':
        """Look up a species by display name or enum name, ignoring case.

        Raises:
            ValueError: If no species matches
        """
        key = name.strip().lower()
        for sp in cls:
            if key in (sp.value.lower(), sp.name.lower()):
                return sp
        raise ValueError(f"Unknown species: {name!r}")

    @property
    def profile(self) -> 'SpeciesProfile':
        return SPECIES_PROFILES[self]


# A consumable is either a food type (herbivores) or a prey species (carnivores)
Consumable = Union[FoodType, Species]


@dataclass(frozen=True)
class SpeciesProfile:
    """Diet and menu of a species."""
    diet: Diet
    consumes: FrozenSet[Consumable]

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Raise ConfigurationError if the menu does not match the diet."""
        wanted = FoodType if self.diet == Diet.HERBIVORE else Species
        if not self.consumes:
            raise ConfigurationError(f"{self.diet.value} profile consumes nothing")
        for item in self.consumes:
            if not isinstance(item, wanted):
                raise ConfigurationError(f"{self.diet.value} cannot consume {item!r}")


def _herbivore(*foods: FoodType) -> SpeciesProfile:
    return SpeciesProfile(Diet.HERBIVORE, frozenset(foods))


def _carnivore(*prey: Species) -> SpeciesProfile:
    return SpeciesProfile(Diet.CARNIVORE, frozenset(prey))


SPECIES_PROFILES: Dict[Species, SpeciesProfile] = {
    Species.BEAR: _carnivore(Species.FISH, Species.PIG),
    Species.BIRD: _herbivore(FoodType.BERRY, FoodType.FLOWER),
    Species.BUG: _herbivore(FoodType.LEAF, FoodType.FLOWER),
    Species.COW: _herbivore(FoodType.GRASS, FoodType.MUSHROOM, FoodType.BERRY),
    Species.FISH: _herbivore(FoodType.PLANKTON),
    Species.FOX: _carnivore(Species.RABBIT),
    Species.LION: _carnivore(Species.COW, Species.PIG),
    Species.MOUSE: _herbivore(FoodType.GRASS, FoodType.BERRY),
    Species.PIG: _herbivore(FoodType.GRASS, FoodType.MUSHROOM, FoodType.LEAF),
    Species.RABBIT: _herbivore(FoodType.GRASS, FoodType.FLOWER,
                               FoodType.MUSHROOM, FoodType.BERRY),
    Species.WHALE: _carnivore(Species.FISH),
}


def sense_type_for(species: Species, diet: Optional[Diet] = None) -> SenseType:
    """Pick the sense a life form uses to look for food.

    Bugs feel (range 1), other herbivores look (range 2) and everything
    else smells (range 4).

    Args:
        species: Species of the life form
        diet: Diet override (defaults to the species profile)

    Returns:
        SenseType to use
    """
    if diet is None:
        diet = species.profile.diet
    if species == Species.BUG:
        return SenseType.FEEL
    if diet == Diet.HERBIVORE:
        return SenseType.SIGHT
    return SenseType.SMELL
