"""UserProfile entity - the biometric profile goals are derived from."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from ..value_objects.activity_level import ActivityLevel
from ..value_objects.age_group import AgeGroup
from ..value_objects.gender import Gender
from ..value_objects.goal_calculation_input import (
    MAX_AGE,
    MAX_HEIGHT_CM,
    MAX_WEIGHT_KG,
    MIN_AGE,
    MIN_HEIGHT_CM,
    MIN_WEIGHT_KG,
    GoalCalculationInput,
)
from ..value_objects.unit_system import UnitSystem


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class UserProfile:
    """User profile as stored by the profile repository.

    Fields may be incomplete while onboarding is in progress; use
    is_valid_for_goal_calculation() before relying on biometrics.

    Attributes:
        owner_id: Unique user identifier
        email: Account email
        display_name: Name shown in the app
        first_name: Optional first name
        last_name: Optional last name
        birthday: Date of birth, None until provided
        gender: Gender, UNSPECIFIED until provided
        unit_system: Measurement display preference
        height_in_cm: Height in centimeters, 0 until provided
        weight_in_kg: Weight in kilograms, 0 until provided
        has_completed_onboarding: Onboarding flow finished
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    owner_id: str
    email: str = ""
    display_name: str = ""
    first_name: str = ""
    last_name: str = ""
    birthday: Optional[date] = None
    gender: Gender = Gender.UNSPECIFIED
    unit_system: UnitSystem = UnitSystem.METRIC
    height_in_cm: int = 0
    weight_in_kg: float = 0.0
    has_completed_onboarding: bool = False
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def age(self, today: Optional[date] = None) -> Optional[int]:
        """Age in whole years, or None without a birthday."""
        if self.birthday is None:
            return None
        today = today or _now().date()
        years = today.year - self.birthday.year
        if (today.month, today.day) < (self.birthday.month, self.birthday.day):
            years -= 1
        return years

    def age_group(self, today: Optional[date] = None) -> Optional[AgeGroup]:
        age = self.age(today)
        return AgeGroup.from_age(age) if age is not None else None

    def bmi(self) -> Optional[float]:
        """Body Mass Index, or None when height or weight is missing."""
        if self.height_in_cm <= 0 or self.weight_in_kg <= 0:
            return None
        height_m = self.height_in_cm / 100.0
        return self.weight_in_kg / (height_m ** 2)

    def is_onboarding_data_complete(self) -> bool:
        return (
            bool(self.display_name.strip())
            and self.birthday is not None
            and self.height_in_cm > 0
            and self.weight_in_kg > 0
        )

    def is_valid_for_goal_calculation(self, today: Optional[date] = None) -> bool:
        """Check the profile holds complete, in-range biometrics.

        Returns:
            bool: True if to_goal_calculation_input() would succeed
        """
        if not self.is_onboarding_data_complete():
            return False
        age = self.age(today)
        return (
            age is not None
            and MIN_AGE <= age <= MAX_AGE
            and MIN_HEIGHT_CM <= self.height_in_cm <= MAX_HEIGHT_CM
            and MIN_WEIGHT_KG <= self.weight_in_kg <= MAX_WEIGHT_KG
        )

    def to_goal_calculation_input(
        self,
        activity_level: Optional[ActivityLevel] = None,
        today: Optional[date] = None,
    ) -> Optional[GoalCalculationInput]:
        """Convert to calculator input.

        Args:
            activity_level: Activity tier, ActivityLevel.default() when omitted
            today: Reference date for the age

        Returns:
            GoalCalculationInput, or None if the profile is not valid
        """
        age = self.age(today)
        if age is None or not self.is_valid_for_goal_calculation(today):
            return None
        return GoalCalculationInput(
            age=age,
            gender=self.gender,
            height_in_cm=self.height_in_cm,
            weight_in_kg=self.weight_in_kg,
            activity_level=activity_level or ActivityLevel.default(),
        )

    def with_updates(self, **changes: Any) -> "UserProfile":
        """Copy with the given fields replaced and updated_at refreshed."""
        changes.setdefault("updated_at", _now())
        return replace(self, **changes)

    def sanitize_for_logging(self) -> Dict[str, Any]:
        age_group = self.age_group()
        return {
            "owner_id": self.owner_id,
            "has_birthday": self.birthday is not None,
            "age_group": age_group.value if age_group else None,
            "gender": self.gender.value,
            "has_height": self.height_in_cm > 0,
            "has_weight": self.weight_in_kg > 0,
            "has_completed_onboarding": self.has_completed_onboarding,
        }
