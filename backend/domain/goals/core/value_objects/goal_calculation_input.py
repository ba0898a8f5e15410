"""GoalCalculationInput value object - validated biometrics for calculators."""

from dataclasses import dataclass, field
from typing import Any, Dict

from .activity_level import ActivityLevel
from .age_group import AgeGroup
from .gender import Gender

MIN_AGE = 13
MAX_AGE = 120
MIN_HEIGHT_CM = 100
MAX_HEIGHT_CM = 250
MIN_WEIGHT_KG = 30.0
MAX_WEIGHT_KG = 300.0


def _band(value: float, width: int) -> str:
    lower = int(value // width) * width
    return f"{lower}-{lower + width - 1}"


@dataclass(frozen=True)
class GoalCalculationInput:
    """Biometric parameters consumed by every goal calculator.

    Construction fails for out-of-range values, so a calculator never
    receives unusable input.

    Attributes:
        age: Age in years (13-120)
        gender: Gender selecting the formula variant
        height_in_cm: Height in centimeters (100-250)
        weight_in_kg: Body weight in kilograms (30-300)
        activity_level: Activity tier, ActivityLevel.default() when unknown
    """

    age: int
    gender: Gender
    height_in_cm: int
    weight_in_kg: float
    activity_level: ActivityLevel = field(default_factory=ActivityLevel.default)

    def __post_init__(self) -> None:
        """Validate biometric ranges.

        Raises:
            InvalidGoalInputError: If any value is out of range
        """
        from ..exceptions.domain_errors import InvalidGoalInputError

        if not (MIN_AGE <= self.age <= MAX_AGE):
            raise InvalidGoalInputError(
                f"Age must be {MIN_AGE}-{MAX_AGE} years, got {self.age}"
            )

        if not (MIN_HEIGHT_CM <= self.height_in_cm <= MAX_HEIGHT_CM):
            raise InvalidGoalInputError(
                f"Height must be {MIN_HEIGHT_CM}-{MAX_HEIGHT_CM} cm, "
                f"got {self.height_in_cm}"
            )

        if not (MIN_WEIGHT_KG <= self.weight_in_kg <= MAX_WEIGHT_KG):
            raise InvalidGoalInputError(
                f"Weight must be {MIN_WEIGHT_KG:g}-{MAX_WEIGHT_KG:g} kg, "
                f"got {self.weight_in_kg}"
            )

    @property
    def age_group(self) -> AgeGroup:
        return AgeGroup.from_age(self.age)

    def sanitize_for_logging(self) -> Dict[str, Any]:
        """Coarse view of the input with exact biometrics removed.

        Example:
            >>> GoalCalculationInput(
            ...     age=30, gender=Gender.MALE, height_in_cm=175, weight_in_kg=70.0
            ... ).sanitize_for_logging()["height_range"]
            '170-179'
        """
        return {
            "age_group": self.age_group.value,
            "gender": self.gender.value,
            "height_range": _band(self.height_in_cm, 10),
            "weight_range": _band(self.weight_in_kg, 10),
            "activity_level": self.activity_level.value,
        }
