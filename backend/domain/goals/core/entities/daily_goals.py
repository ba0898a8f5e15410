"""DailyGoals entity - one calculated set of daily targets."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from ..value_objects.calculation_source import CalculationSource
from ..value_objects.goal_bounds import STANDARD_BOUNDS

FRESHNESS_WINDOW = timedelta(hours=24)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class DailyGoals:
    """Daily steps, calories and heart points targets for one owner.

    A goal set is never edited: a later calculation produces a new
    instance that supersedes this one.

    Attributes:
        owner_id: Identifier of the user the goals belong to
        steps_goal: Daily steps target (5000-20000)
        calories_goal: Daily calories target in kcal (1200-4000)
        heart_points_goal: Daily heart points target (15-50)
        calculated_at: UTC timestamp of the calculation
        calculation_source: How the goals were produced
    """

    owner_id: str
    steps_goal: int
    calories_goal: int
    heart_points_goal: int
    calculation_source: CalculationSource
    calculated_at: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        # Storage adapters may hand back naive UTC timestamps
        object.__setattr__(self, "calculated_at", as_utc(self.calculated_at))

    def is_fresh(
        self,
        now: Optional[datetime] = None,
        max_age: timedelta = FRESHNESS_WINDOW,
    ) -> bool:
        """Check whether the goals are recent enough to reuse.

        Args:
            now: Reference time, defaults to current UTC time
            max_age: Freshness window, 24 hours by default

        Returns:
            bool: True if calculated strictly less than max_age ago

        Example:
            >>> goals.is_fresh(now=goals.calculated_at + timedelta(hours=23, minutes=59))
            True
            >>> goals.is_fresh(now=goals.calculated_at + timedelta(hours=24))
            False
        """
        reference = as_utc(now) if now is not None else _now()
        return reference - self.calculated_at < max_age

    def validation_issues(self) -> List[str]:
        """Range violations against the standard goal bounds."""
        return STANDARD_BOUNDS.violations(self)

    def is_valid(self) -> bool:
        return not self.validation_issues()

    @property
    def is_fallback(self) -> bool:
        return self.calculation_source == CalculationSource.FALLBACK_DEFAULT

    def sanitize_for_logging(self) -> Dict[str, Any]:
        return {
            "steps_goal": self.steps_goal,
            "calories_goal": self.calories_goal,
            "heart_points_goal": self.heart_points_goal,
            "source": self.calculation_source.value,
            "calculated_at": self.calculated_at.isoformat(),
        }
