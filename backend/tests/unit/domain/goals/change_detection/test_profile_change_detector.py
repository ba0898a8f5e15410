"""Unit tests for ProfileChangeDetector."""

from datetime import date

import pytest

from domain.goals.change_detection.profile_change_detector import (
    REASON_BECAME_INVALID,
    REASON_BECAME_VALID,
    REASON_FORCED,
    REASON_NEW_PROFILE,
    REASON_NO_CHANGES,
    REASON_STILL_INVALID,
    ProfileChangeDetector,
)
from domain.goals.core.value_objects import Gender, UnitSystem


class TestProfileChangeDetector:
    """Test the recalculation decision table."""

    def setup_method(self):
        """Set up test fixtures."""
        self.detector = ProfileChangeDetector()

    def test_new_profile_always_recalculates(self, sample_profile):
        changes = self.detector.detect_changes(None, sample_profile)

        assert changes.should_recalculate
        assert changes.is_new_profile
        assert changes.reason == REASON_NEW_PROFILE
        assert changes.changed_fields == frozenset(
            {"weight_in_kg", "height_in_cm", "gender", "birthday"}
        )

    def test_new_incomplete_profile_still_recalculates(self, make_profile):
        profile = make_profile(birthday=None)

        changes = self.detector.detect_changes(None, profile)

        assert changes.should_recalculate
        assert not changes.is_valid_after
        assert "birthday" not in changes.changed_fields

    @pytest.mark.parametrize(
        "field,value",
        [
            ("display_name", "Alexandra"),
            ("first_name", "Alexandra"),
            ("last_name", "Bianchi"),
            ("email", "new@example.com"),
            ("unit_system", UnitSystem.IMPERIAL),
            ("has_completed_onboarding", False),
        ],
    )
    def test_non_goal_fields_never_trigger(self, sample_profile, field, value):
        """Test name/email/preferences edits never recalculate."""
        updated = sample_profile.with_updates(**{field: value})

        changes = self.detector.detect_changes(sample_profile, updated)

        assert not changes.should_recalculate
        assert changes.changed_fields == frozenset()
        assert changes.reason == REASON_NO_CHANGES

    @pytest.mark.parametrize(
        "field,value",
        [
            ("weight_in_kg", 72.5),
            ("height_in_cm", 180),
            ("gender", Gender.FEMALE),
            ("birthday", date(1985, 3, 3)),
        ],
    )
    def test_goal_fields_always_trigger(self, sample_profile, field, value):
        """Test weight/height/gender/birthday edits recalculate on a valid profile."""
        updated = sample_profile.with_updates(**{field: value})

        changes = self.detector.detect_changes(sample_profile, updated)

        assert changes.should_recalculate
        assert changes.changed_fields == frozenset({field})
        assert field in changes.reason

    def test_invalid_to_valid_triggers(self, make_profile):
        before = make_profile(birthday=None)
        after = make_profile()

        changes = self.detector.detect_changes(before, after)

        assert changes.should_recalculate
        assert changes.reason == REASON_BECAME_VALID
        assert changes.became_valid

    def test_valid_to_invalid_suppressed(self, sample_profile):
        """Test recalculation is skipped even though a goal field changed."""
        updated = sample_profile.with_updates(weight_in_kg=20.0)

        changes = self.detector.detect_changes(sample_profile, updated)

        assert not changes.should_recalculate
        assert changes.reason == REASON_BECAME_INVALID
        assert changes.changed_fields == frozenset({"weight_in_kg"})

    def test_invalid_to_invalid_suppressed(self, make_profile):
        before = make_profile(birthday=None)
        after = make_profile(birthday=None, weight_in_kg=80.0)

        changes = self.detector.detect_changes(before, after)

        assert not changes.should_recalculate
        assert changes.reason == REASON_STILL_INVALID

    def test_force_overrides(self, sample_profile):
        changes = self.detector.detect_changes(sample_profile, sample_profile, force=True)

        assert changes.should_recalculate
        assert changes.reason == REASON_FORCED

    def test_force_overrides_valid_to_invalid(self, sample_profile):
        updated = sample_profile.with_updates(birthday=None)

        changes = self.detector.detect_changes(sample_profile, updated, force=True)

        assert changes.should_recalculate
        assert changes.became_invalid

    def test_multiple_changes_reported(self, sample_profile):
        updated = sample_profile.with_updates(
            weight_in_kg=75.0, height_in_cm=178, display_name="Al"
        )

        changes = self.detector.detect_changes(sample_profile, updated)

        assert changes.changed_fields == frozenset({"weight_in_kg", "height_in_cm"})
