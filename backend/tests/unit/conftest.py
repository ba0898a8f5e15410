"""Unit test fixtures for the goals engine."""

from datetime import date, datetime, timezone
from typing import Any, Callable

import pytest

from domain.goals.core.entities.daily_goals import DailyGoals
from domain.goals.core.entities.user_profile import UserProfile
from domain.goals.core.value_objects.calculation_source import CalculationSource
from domain.goals.core.value_objects.gender import Gender

# Fixed reference date for age calculations
TODAY = date(2024, 6, 15)


def birthday_for_age(age: int, today: date = TODAY) -> date:
    """Birthday that makes someone exactly `age` years old on `today`."""
    return date(today.year - age, 1, 1)


@pytest.fixture
def make_profile() -> Callable[..., UserProfile]:
    """Factory for complete, valid profiles with overridable fields."""

    def _make(**overrides: Any) -> UserProfile:
        age = overrides.pop("age", 30)
        fields: dict[str, Any] = {
            "owner_id": "user123",
            "email": "user@example.com",
            "display_name": "Alex",
            "first_name": "Alex",
            "last_name": "Rossi",
            "birthday": birthday_for_age(age, date.today()),
            "gender": Gender.MALE,
            "height_in_cm": 175,
            "weight_in_kg": 70.0,
            "has_completed_onboarding": True,
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "updated_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return UserProfile(**fields)

    return _make


@pytest.fixture
def sample_profile(make_profile: Callable[..., UserProfile]) -> UserProfile:
    return make_profile()


@pytest.fixture
def make_goals() -> Callable[..., DailyGoals]:
    """Factory for stored goal sets."""

    def _make(**overrides: Any) -> DailyGoals:
        fields: dict[str, Any] = {
            "owner_id": "user123",
            "steps_goal": 10500,
            "calories_goal": 2354,
            "heart_points_goal": 20,
            "calculation_source": CalculationSource.STANDARD_FORMULA,
            "calculated_at": datetime.now(timezone.utc),
        }
        fields.update(overrides)
        return DailyGoals(**fields)

    return _make
