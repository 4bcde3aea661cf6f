"""Core data types for worldsim.

  - Gender enumeration
  - Seed: one simulated individual
  - WorldStatistics: the shared per-world aggregate mutated every year
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


# Age (years) from which a seed counts as a man / woman instead of boy / girl
ADULT_AGE = 15


class Gender(IntEnum):
    MALE = 0
    FEMALE = 1


@dataclass
class Seed:
    """One individual of the world."""
    age: int = 0
    gender: Gender = Gender.MALE
    iq: int = 0

    @property
    def is_adult(self) -> bool:
        return self.age >= ADULT_AGE


@dataclass
class WorldStatistics:
    """Aggregate state of a world.

    All counts are non-negative integers. food may go negative (deficit)
    but is floored at rules.food.minimum by the RuleEngine each year.
    """
    year: int = 0
    food: float = 0
    food_resource: float = 0
    population: int = 0
    men: int = 0
    women: int = 0
    boys: int = 0
    girls: int = 0

    @property
    def total_adults(self) -> int:
        return self.men + self.women

    @property
    def total_children(self) -> int:
        return self.boys + self.girls

    def count_seed(self, seed: Seed) -> None:
        """Add one seed to the population and its age/gender bucket."""
        self.population += 1
        if seed.is_adult:
            if seed.gender == Gender.MALE:
                self.men += 1
            else:
                self.women += 1
        elif seed.gender == Gender.MALE:
            self.boys += 1
        else:
            self.girls += 1
