"""Bounded player stats and the single stat mutation rule."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict

from jukudeck.cards.describe import format_realized_change
from jukudeck.cards.effects import ChangeBy, SetTo, StatDelta
from jukudeck.cards.schema import ACCOUNTING_MAX, INITIAL_STATS, STAT_LABELS, Stat

logger = logging.getLogger(__name__)


@dataclass
class StatBlock:
    """The four player stats.

    Invariants hold after every mutation made through :meth:`apply`,
    :meth:`set_to` or :meth:`change_by`:

    - ``0 <= accounting <= ACCOUNTING_MAX``
    - every stat ``>= 0``
    - ``enrollment <= experience``
    """

    experience: int = INITIAL_STATS[Stat.EXPERIENCE]
    enrollment: int = INITIAL_STATS[Stat.ENROLLMENT]
    satisfaction: int = INITIAL_STATS[Stat.SATISFACTION]
    accounting: int = INITIAL_STATS[Stat.ACCOUNTING]
    # Trial copies used for scoring stay quiet
    log_changes: bool = field(default=True, compare=False, repr=False)

    def get(self, stat: Stat) -> int:
        return getattr(self, stat.value)

    def __getitem__(self, stat: Stat) -> int:
        return self.get(stat)

    def snapshot(self) -> Dict[Stat, int]:
        """Current values keyed by stat."""
        return {stat: self.get(stat) for stat in Stat}

    def copy(self) -> "StatBlock":
        """Detached copy that does not log its changes."""
        return StatBlock(**{stat.value: self.get(stat) for stat in Stat}, log_changes=False)

    def in_bounds(self) -> bool:
        """Whether the current values already satisfy the invariants."""
        clamped = self.copy()
        clamped._clamp()
        return clamped == self

    def set_to(self, stat: Stat, value: int) -> int:
        """Assign then clamp. Returns the realized delta of ``stat``."""
        return self._mutate(stat, value)

    def change_by(self, stat: Stat, delta: int) -> int:
        """Add then clamp. Returns the realized delta of ``stat``."""
        return self._mutate(stat, self.get(stat) + delta)

    def apply(self, effect: StatDelta) -> int:
        """Apply one parsed stat delta. Returns the realized delta."""
        if isinstance(effect, SetTo):
            return self.set_to(effect.stat, effect.value)
        if isinstance(effect, ChangeBy):
            return self.change_by(effect.stat, effect.delta)
        raise TypeError(f"Unsupported stat delta: {effect!r}")

    def _mutate(self, stat: Stat, raw_value: int) -> int:
        before = self.snapshot()
        setattr(self, stat.value, raw_value)
        self._clamp()
        after = self.snapshot()

        for changed in Stat:
            if self.log_changes and before[changed] != after[changed]:
                logger.info(
                    format_realized_change(STAT_LABELS[changed], before[changed], after[changed])
                )

        return after[stat] - before[stat]

    def _clamp(self) -> None:
        # Order matters: the enrollment cap reads the already-clamped experience
        self.accounting = max(0, min(ACCOUNTING_MAX, self.accounting))
        self.experience = max(0, self.experience)
        self.enrollment = max(0, self.enrollment)
        self.satisfaction = max(0, self.satisfaction)
        self.enrollment = min(self.enrollment, self.experience)
