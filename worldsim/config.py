"""Configuration system for worldsim.

Hierarchical YAML configuration with deep-merge support:
  base.yaml → scenario override → ad-hoc overrides

Two top-level sections:
  - simulation: starting values of the world statistics
  - rules:      thresholds and rates read by the RuleEngine every year

Every rules field stays a plain mutable attribute after loading, so a caller
can retune the world between years (e.g. raise population.limit).
"""

from __future__ import annotations

import dataclasses
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


# ═══════════════════════════════════════════════════════════════════════
# CONFIGURATION DATACLASSES
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class SimulationSection:
    """Starting values of the world statistics."""
    start_year: int = 0
    initial_food: int = 0
    initial_food_resource: int = 10000


@dataclass
class PopulationSection:
    """Soft population cap; crowding penalty applies above it."""
    limit: int = 100


@dataclass
class ChanceSection:
    """Per-year chances of the three life events."""
    death: float = 0.0
    marriage: float = 0.0
    childbirth: float = 0.0


@dataclass
class FoodSection:
    """Food production and consumption rates (per person per year)."""
    adult_production: float = 1.0      # Produced by each adult
    child_consumption: float = -1.0    # Eaten by each child (negative)
    resource_growth_rate: float = 0.0  # Fraction of resource regrown per decade; 0 = off
    minimum: float = -10000.0          # Floor of the accumulated food balance


@dataclass
class FamineSection:
    """Famine: death chance rises by death_chance_incr every `unit` of deficit."""
    death_chance_incr: float = 0.1
    unit: float = -100.0               # Must be negative


@dataclass
class FoodSpoilageSection:
    """Food spoilage: lose decay_fraction of positive food every interval."""
    decay_fraction: float = 0.9
    interval_years: int = 1


@dataclass
class CrowdingSection:
    """Large-cooperation penalty: death chance per person above the limit."""
    death_chance_incr: float = 0.1
    unit: int = 1


@dataclass
class RulesConfig:
    """Rules of the world, owned by the RuleEngine.

    chance holds the live values (chance.death is rewritten every year);
    chance_increment holds offsets set from outside, e.g. by a disaster.
    """
    base_iq: int = 0
    population: PopulationSection = field(default_factory=PopulationSection)
    chance: ChanceSection = field(default_factory=ChanceSection)
    chance_increment: ChanceSection = field(default_factory=ChanceSection)
    food: FoodSection = field(default_factory=FoodSection)
    famine: FamineSection = field(default_factory=FamineSection)
    food_spoilage: FoodSpoilageSection = field(default_factory=FoodSpoilageSection)
    crowding: CrowdingSection = field(default_factory=CrowdingSection)


@dataclass
class WorldConfig:
    """Complete world configuration.

    Load from YAML via `load_config()`. Sections map 1:1 to YAML top-level keys.
    """
    simulation: SimulationSection = field(default_factory=SimulationSection)
    rules: RulesConfig = field(default_factory=RulesConfig)


# ═══════════════════════════════════════════════════════════════════════
# YAML LOADING & MERGING
# ═══════════════════════════════════════════════════════════════════════

_RULES_SECTION_MAP = {
    'population': PopulationSection,
    'chance': ChanceSection,
    'chance_increment': ChanceSection,
    'food': FoodSection,
    'famine': FamineSection,
    'food_spoilage': FoodSpoilageSection,
    'crowding': CrowdingSection,
}


def deep_merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge override into base. Modifies base in place.

    - Dict values are merged recursively
    - Non-dict values are replaced
    - Keys in override but not base are added

    Args:
        base: Base dictionary (modified in place).
        override: Override dictionary.

    Returns:
        The merged base dictionary.
    """
    for key, value in override.items():
        if (
            key in base
            and isinstance(base[key], dict)
            and isinstance(value, dict)
        ):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _dict_to_section(section_cls, data: Dict) -> Any:
    """Convert a dict to a dataclass, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(section_cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}
    return section_cls(**filtered)


def _rules_from_dict(data: Dict) -> RulesConfig:
    sections: Dict[str, Any] = {}
    for key, cls in _RULES_SECTION_MAP.items():
        if key in data and isinstance(data[key], dict):
            sections[key] = _dict_to_section(cls, data[key])
        else:
            sections[key] = cls()
    if 'base_iq' in data:
        sections['base_iq'] = data['base_iq']
    return RulesConfig(**sections)


def _yaml_to_config(data: Dict) -> WorldConfig:
    """Convert a merged YAML dict to a WorldConfig."""
    simulation = data.get('simulation')
    rules = data.get('rules')
    return WorldConfig(
        simulation=(
            _dict_to_section(SimulationSection, simulation)
            if isinstance(simulation, dict) else SimulationSection()
        ),
        rules=_rules_from_dict(rules) if isinstance(rules, dict) else RulesConfig(),
    )


def validate_config(config: WorldConfig) -> None:
    """Validate configuration constraints. Raises ValueError on failure.

    Checks:
      - Famine unit is a negative deficit step
      - Spoilage interval and fraction are usable
      - Crowding unit and population limit are sane
      - Starting food resource is non-negative

    Legal but suspicious food rates only emit a UserWarning.
    """
    rules = config.rules

    if rules.famine.unit >= 0:
        raise ValueError(
            f"rules.famine.unit must be negative, got {rules.famine.unit}"
        )

    fs = rules.food_spoilage
    if fs.interval_years < 1:
        raise ValueError(
            f"rules.food_spoilage.interval_years must be >= 1, "
            f"got {fs.interval_years}"
        )
    if not (0.0 <= fs.decay_fraction <= 1.0):
        raise ValueError(
            f"rules.food_spoilage.decay_fraction must be in [0, 1], "
            f"got {fs.decay_fraction}"
        )

    if rules.crowding.unit < 1:
        raise ValueError(
            f"rules.crowding.unit must be >= 1, got {rules.crowding.unit}"
        )
    if rules.population.limit < 0:
        raise ValueError(
            f"rules.population.limit must be non-negative, "
            f"got {rules.population.limit}"
        )

    if rules.food.resource_growth_rate < 0:
        raise ValueError(
            f"rules.food.resource_growth_rate must be >= 0, "
            f"got {rules.food.resource_growth_rate}"
        )
    if config.simulation.initial_food_resource < 0:
        raise ValueError("simulation.initial_food_resource must be non-negative")

    if rules.food.child_consumption > 0:
        warnings.warn(
            f"rules.food.child_consumption is positive "
            f"({rules.food.child_consumption}); children will produce food.",
            UserWarning,
            stacklevel=2,
        )
    if rules.food.adult_production < 0:
        warnings.warn(
            f"rules.food.adult_production is negative "
            f"({rules.food.adult_production}); adults will not harvest.",
            UserWarning,
            stacklevel=2,
        )


def load_config(
    base_path: Union[str, Path],
    scenario_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict] = None,
) -> WorldConfig:
    """Load and merge hierarchical YAML configuration.

    Merge order: base → scenario → overrides.
    Each layer overrides only the fields it specifies.

    Args:
        base_path: Path to base configuration YAML.
        scenario_path: Optional scenario override YAML (skipped if missing).
        overrides: Optional dict of ad-hoc overrides.

    Returns:
        Validated WorldConfig.

    Raises:
        FileNotFoundError: If base_path doesn't exist.
        ValueError: If validation fails.
    """
    base_path = Path(base_path)
    if not base_path.exists():
        raise FileNotFoundError(f"Config file not found: {base_path}")

    with open(base_path) as f:
        config_dict = yaml.safe_load(f) or {}

    if scenario_path is not None:
        scenario_path = Path(scenario_path)
        if scenario_path.exists():
            with open(scenario_path) as f:
                scenario = yaml.safe_load(f) or {}
            deep_merge(config_dict, scenario)

    if overrides is not None:
        deep_merge(config_dict, overrides)

    config = _yaml_to_config(config_dict)
    validate_config(config)
    return config


def default_config() -> WorldConfig:
    """Return a WorldConfig with all default values."""
    config = WorldConfig()
    validate_config(config)
    return config
