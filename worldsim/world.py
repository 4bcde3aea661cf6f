"""World: host of the statistics, the event bus and the rules.

The world owns the single copy of WorldStatistics and advances it one year
at a time. Everything that reacts to a new year or a new seed subscribes to
the world's event bus:

  yearPassed  (no payload)      → rules.change(), history recording
  seedAdded   (payload: seed)   → rules IQ bonus

Aging, reproduction and death live outside this package; they are expected
to keep the population counts in `statistic` up to date between years.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from worldsim.config import WorldConfig, default_config, validate_config
from worldsim.events import EventBus
from worldsim.history import WorldRunResult, YearlyRecorder
from worldsim.rules import RuleEngine
from worldsim.types import Seed, WorldStatistics

logger = logging.getLogger(__name__)

# Food resource regrowth happens once per decade
RESOURCE_GROWTH_INTERVAL = 10

# Private slot so run() never displaces a recorder attached by the caller
RUN_HISTORY_NAMESPACE = 'history.run'


class World:
    """A single simulated world."""

    def __init__(self, config: Optional[WorldConfig] = None):
        """Raises ValueError if a given config fails validate_config()."""
        if config is None:
            config = default_config()
        else:
            validate_config(config)
        self.config = config
        sim = self.config.simulation

        self.event = EventBus()
        self.statistic = WorldStatistics(
            year=sim.start_year,
            food=sim.initial_food,
            food_resource=sim.initial_food_resource,
        )
        self.seeds: List[Seed] = []
        self.rules = RuleEngine(self, self.config.rules)

    def add_seed(self, seed: Seed) -> Seed:
        """Add an individual to the world and announce it."""
        self.seeds.append(seed)
        self.statistic.count_seed(seed)
        self.event.trigger('seedAdded', seed=seed)
        return seed

    def grow_food_resource(self) -> None:
        """Regrow the food resource on decade years, if growth is enabled."""
        rate = self.rules.config.food.resource_growth_rate
        s = self.statistic
        if rate > 0 and s.year % RESOURCE_GROWTH_INTERVAL == 0:
            s.food_resource += math.floor(s.food_resource * rate)

    def advance_year(self) -> None:
        """Move to the next year and run every yearPassed handler."""
        self.statistic.year += 1
        self.grow_food_resource()
        self.event.trigger('yearPassed')

    def run(self, n_years: int) -> WorldRunResult:
        """Advance n_years years, recording the statistics of each.

        Args:
            n_years: Number of years to simulate.

        Returns:
            WorldRunResult with one row per simulated year.

        Raises:
            ValueError: If n_years is negative.
        """
        if n_years < 0:
            raise ValueError(f"n_years must be non-negative, got {n_years}")

        recorder = YearlyRecorder(self, namespace=RUN_HISTORY_NAMESPACE)
        logger.info("running world from year %d for %d years",
                    self.statistic.year, n_years)
        try:
            for _ in range(n_years):
                self.advance_year()
        finally:
            recorder.detach()

        result = recorder.result()
        logger.info("world reached year %d: food=%s, peak death chance %.3f",
                    self.statistic.year, self.statistic.food,
                    result.peak_death_chance)
        return result
