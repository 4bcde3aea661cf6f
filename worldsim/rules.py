"""Yearly world rules: food balance, famine, spoilage and crowding.

Every year the RuleEngine recomputes:
  1. Food harvest (adults, capped by the remaining food resource)
  2. Food consumption (children, never capped)
  3. Famine death chance (one increment per famine unit of deficit)
  4. Food spoilage (positive food only, on spoilage years)
  5. Crowding death chance (one increment per person above the limit)

The death-chance contributions do not accumulate across years: chance.death
is rebuilt from scratch each year, plus the externally set
chance_increment.death offset.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from worldsim.config import RulesConfig
from worldsim.types import Seed, WorldStatistics

if TYPE_CHECKING:
    from worldsim.world import World

logger = logging.getLogger(__name__)

RULES_NAMESPACE = 'rules'


@dataclass
class RuleUpdate:
    """Outcome of one yearly rules evaluation."""
    food: float
    food_resource: float
    death_chance: float      # famine + crowding, before chance_increment
    food_produced: float = 0.0
    food_consumed: float = 0.0
    famine_steps: int = 0
    famine_death_chance: float = 0.0
    food_spoiled: int = 0
    crowding_excess: int = 0
    crowding_death_chance: float = 0.0


# ═══════════════════════════════════════════════════════════════════════
# PURE RULE EVALUATION
# ═══════════════════════════════════════════════════════════════════════

def compute_rule_update(statistic: WorldStatistics,
                        rules: RulesConfig) -> RuleUpdate:
    """Evaluate one year of rules without mutating anything.

    Args:
        statistic: Current world statistics.
        rules: Rules configuration.

    Returns:
        RuleUpdate with the new food, food resource and death chance.
    """
    food = statistic.food
    food_resource = statistic.food_resource

    food_produced = min(food_resource,
                        statistic.total_adults * rules.food.adult_production)
    food_consumed = statistic.total_children * rules.food.child_consumption

    # Harvest depletes the resource by what was actually produced
    food_resource = max(0, food_resource - food_produced)
    food += food_produced + food_consumed
    if food < rules.food.minimum:
        food = rules.food.minimum

    famine_steps = 0
    famine_death_chance = 0.0
    if food <= rules.famine.unit:
        famine_steps = math.floor(food / rules.famine.unit)
        famine_death_chance = famine_steps * rules.famine.death_chance_incr

    food_spoiled = 0
    spoilage = rules.food_spoilage
    if statistic.year % spoilage.interval_years == 0 and food > 0:
        food_spoiled = math.floor(food * spoilage.decay_fraction)
        food -= food_spoiled

    crowding_excess = 0
    crowding_death_chance = 0.0
    if statistic.population > rules.population.limit:
        crowding_excess = statistic.population - rules.population.limit
        crowding_death_chance = crowding_excess * rules.crowding.death_chance_incr

    return RuleUpdate(
        food=food,
        food_resource=food_resource,
        death_chance=famine_death_chance + crowding_death_chance,
        food_produced=food_produced,
        food_consumed=food_consumed,
        famine_steps=famine_steps,
        famine_death_chance=famine_death_chance,
        food_spoiled=food_spoiled,
        crowding_excess=crowding_excess,
        crowding_death_chance=crowding_death_chance,
    )


def apply_rule_update(update: RuleUpdate, statistic: WorldStatistics,
                      rules: RulesConfig) -> None:
    """Commit a RuleUpdate to the statistics and the live death chance."""
    statistic.food = update.food
    statistic.food_resource = update.food_resource
    rules.chance.death = update.death_chance + rules.chance_increment.death


# ═══════════════════════════════════════════════════════════════════════
# RULE ENGINE
# ═══════════════════════════════════════════════════════════════════════

class RuleEngine:
    """Rules of one world, hooked to its yearPassed and seedAdded signals."""

    def __init__(self, world: 'World', config: Optional[RulesConfig] = None):
        self.world = world
        self.config = config if config is not None else RulesConfig()
        self.last_update: Optional[RuleUpdate] = None

        world.event.add('yearPassed', RULES_NAMESPACE, self._on_year_passed)
        world.event.add('seedAdded', RULES_NAMESPACE, self._on_seed_added)

    def _on_year_passed(self, signal_name: str, data: Dict[str, Any]) -> None:
        self.change()

    def _on_seed_added(self, signal_name: str, data: Dict[str, Any]) -> None:
        self.on_seed_added(data['seed'])

    def on_seed_added(self, seed: Seed) -> None:
        seed.iq += self.config.base_iq

    def change(self) -> None:
        """Recompute food and death chance for the current year."""
        statistic = self.world.statistic
        update = compute_rule_update(statistic, self.config)
        apply_rule_update(update, statistic, self.config)
        self.last_update = update
        logger.debug(
            "year %d: food=%s resource=%s death=%.3f "
            "(famine x%d, spoiled %d, crowding +%d)",
            statistic.year, update.food, update.food_resource,
            self.config.chance.death, update.famine_steps,
            update.food_spoiled, update.crowding_excess,
        )
