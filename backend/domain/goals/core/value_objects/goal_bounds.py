"""GoalBounds value object - inclusive ranges for each daily goal."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from ..entities.daily_goals import DailyGoals


@dataclass(frozen=True)
class GoalBounds:
    """Inclusive (min, max) range for steps, calories and heart points."""

    steps: Tuple[int, int]
    calories: Tuple[int, int]
    heart_points: Tuple[int, int]

    def clamp_steps(self, value: int) -> int:
        return _clamp(value, self.steps)

    def clamp_calories(self, value: int) -> int:
        return _clamp(value, self.calories)

    def clamp_heart_points(self, value: int) -> int:
        return _clamp(value, self.heart_points)

    def violations(self, goals: "DailyGoals") -> List[str]:
        """List human-readable range violations for a goal set.

        Returns:
            List[str]: Empty when every goal is within bounds
        """
        checks = (
            ("Steps goal", goals.steps_goal, self.steps),
            ("Calories goal", goals.calories_goal, self.calories),
            ("Heart points goal", goals.heart_points_goal, self.heart_points),
        )
        return [
            f"{label} {value} outside range {low}-{high}"
            for label, value, (low, high) in checks
            if not (low <= value <= high)
        ]

    def contains(self, goals: "DailyGoals") -> bool:
        return not self.violations(goals)


def _clamp(value: int, bounds: Tuple[int, int]) -> int:
    low, high = bounds
    return max(low, min(high, value))


STANDARD_BOUNDS = GoalBounds(
    steps=(5000, 20000),
    calories=(1200, 4000),
    heart_points=(15, 50),
)

# Tighter band for goals produced without a personalised calculation
FALLBACK_BOUNDS = GoalBounds(
    steps=(6000, 9000),
    calories=(1400, 2400),
    heart_points=(17, 25),
)
