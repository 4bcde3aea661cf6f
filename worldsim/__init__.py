"""worldsim: yearly rules of a population simulation.

Each simulated year the rules:
  - harvest food from a depletable food resource (adults) and feed children
  - raise the death chance under famine and overcrowding
  - spoil stored food on spoilage years

New individuals receive the configured base IQ bonus when they are added.
"""

from worldsim.config import RulesConfig, WorldConfig, default_config, load_config
from worldsim.events import EventBus
from worldsim.rules import RuleEngine, RuleUpdate, compute_rule_update
from worldsim.types import Gender, Seed, WorldStatistics
from worldsim.world import World

__version__ = "0.1.0"

__all__ = [
    "EventBus",
    "Gender",
    "RuleEngine",
    "RuleUpdate",
    "RulesConfig",
    "Seed",
    "World",
    "WorldConfig",
    "WorldStatistics",
    "compute_rule_update",
    "default_config",
    "load_config",
]
