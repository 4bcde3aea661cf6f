"""Yearly run history.

Records the world statistics after every rules update and packs them into
NumPy time series for analysis.

Usage:
    recorder = YearlyRecorder(world)   # hooks yearPassed
    for _ in range(50):
        world.advance_year()
    result = recorder.result()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import numpy as np

if TYPE_CHECKING:
    from worldsim.world import World

HISTORY_NAMESPACE = 'history'


@dataclass
class WorldRunResult:
    """Results of a multi-year run."""
    n_years: int = 0
    # Annual timeseries (length = n_years)
    years: Optional[np.ndarray] = None
    yearly_food: Optional[np.ndarray] = None
    yearly_food_resource: Optional[np.ndarray] = None
    yearly_population: Optional[np.ndarray] = None
    yearly_death_chance: Optional[np.ndarray] = None
    yearly_famine_steps: Optional[np.ndarray] = None   # Famine units of deficit per year

    # Summary
    final_food: float = 0.0
    min_food: float = 0.0
    famine_years: int = 0
    peak_death_chance: float = 0.0


class YearlyRecorder:
    """Appends one row per yearPassed signal.

    Registered after the rules, so each row sees the statistics as the rules
    left them for that year. Recorders under different namespaces record
    side by side; one under a taken namespace replaces the previous one.
    """

    def __init__(self, world: 'World', namespace: str = HISTORY_NAMESPACE):
        """
        Args:
            world: World whose yearPassed signal is recorded.
            namespace: Event-bus slot of this recorder.
        """
        self.world = world
        self.namespace = namespace
        self._rows: List[tuple] = []
        world.event.add('yearPassed', namespace, self._on_year_passed)

    def detach(self) -> None:
        """Stop recording; rows recorded so far are kept."""
        self.world.event.remove('yearPassed', self.namespace)

    def _on_year_passed(self, signal_name: str, data: Dict[str, Any]) -> None:
        self.record()

    def record(self) -> None:
        s = self.world.statistic
        rules = self.world.rules
        famine_steps = rules.last_update.famine_steps if rules.last_update else 0
        self._rows.append((
            s.year, s.food, s.food_resource, s.population,
            rules.config.chance.death, famine_steps,
        ))

    def __len__(self) -> int:
        return len(self._rows)

    def result(self) -> WorldRunResult:
        """Pack the recorded rows into a WorldRunResult."""
        n = len(self._rows)
        if n == 0:
            return WorldRunResult()

        table = np.asarray(self._rows, dtype=np.float64)
        food = table[:, 1]
        death = table[:, 4]
        famine_steps = table[:, 5].astype(np.int64)
        return WorldRunResult(
            n_years=n,
            years=table[:, 0].astype(np.int64),
            yearly_food=food,
            yearly_food_resource=table[:, 2],
            yearly_population=table[:, 3].astype(np.int64),
            yearly_death_chance=death,
            yearly_famine_steps=famine_steps,
            final_food=float(food[-1]),
            min_food=float(food.min()),
            famine_years=int(np.count_nonzero(famine_steps)),
            peak_death_chance=float(death.max()),
        )
