"""ProfileChangeDetector - decides whether a profile edit warrants new goals."""

from datetime import date
from typing import FrozenSet, Optional

from ..core.entities.user_profile import UserProfile
from ..core.value_objects.changes_summary import GOAL_AFFECTING_FIELDS, ChangesSummary

REASON_FORCED = "Recalculation forced"
REASON_NEW_PROFILE = "New profile created"
REASON_BECAME_VALID = "Profile became valid for goal calculation"
REASON_BECAME_INVALID = "Profile became invalid for goal calculation"
REASON_STILL_INVALID = "Profile is not valid for goal calculation"
REASON_NO_CHANGES = "No goal-affecting changes"


class ProfileChangeDetector:
    """Diff two profile snapshots over goal-affecting fields only.

    Decision table (first match wins):

    ============================  =============
    Situation                     Recalculate?
    ============================  =============
    forced                        yes
    no stored profile             yes
    invalid -> valid              yes
    valid -> invalid              no
    invalid -> invalid            no
    valid -> valid, fields diff   yes
    valid -> valid, no diff       no
    ============================  =============

    Name, email, unit system and onboarding flag are never compared.
    """

    def detect_changes(
        self,
        old_profile: Optional[UserProfile],
        new_profile: UserProfile,
        force: bool = False,
        today: Optional[date] = None,
    ) -> ChangesSummary:
        """Build the ChangesSummary for an update.

        Args:
            old_profile: Stored profile, None if this is the first save
            new_profile: Profile being saved
            force: Caller explicitly requested recalculation
            today: Reference date for age-based validity

        Returns:
            ChangesSummary: Decision with the changed goal-affecting fields
        """
        is_valid_after = new_profile.is_valid_for_goal_calculation(today)

        if old_profile is None:
            return ChangesSummary(
                should_recalculate=True,
                reason=REASON_FORCED if force else REASON_NEW_PROFILE,
                changed_fields=self._populated_fields(new_profile),
                was_valid_before=False,
                is_valid_after=is_valid_after,
                is_new_profile=True,
            )

        was_valid_before = old_profile.is_valid_for_goal_calculation(today)
        changed = self.changed_goal_fields(old_profile, new_profile)

        if force:
            should, reason = True, REASON_FORCED
        elif not was_valid_before and is_valid_after:
            should, reason = True, REASON_BECAME_VALID
        elif was_valid_before and not is_valid_after:
            should, reason = False, REASON_BECAME_INVALID
        elif not is_valid_after:
            should, reason = False, REASON_STILL_INVALID
        elif changed:
            should = True
            reason = "Goal-affecting fields changed: " + ", ".join(sorted(changed))
        else:
            should, reason = False, REASON_NO_CHANGES

        return ChangesSummary(
            should_recalculate=should,
            reason=reason,
            changed_fields=changed,
            was_valid_before=was_valid_before,
            is_valid_after=is_valid_after,
        )

    @staticmethod
    def changed_goal_fields(
        old_profile: UserProfile, new_profile: UserProfile
    ) -> FrozenSet[str]:
        return frozenset(
            name
            for name in GOAL_AFFECTING_FIELDS
            if getattr(old_profile, name) != getattr(new_profile, name)
        )

    @staticmethod
    def _populated_fields(profile: UserProfile) -> FrozenSet[str]:
        blank = UserProfile(owner_id=profile.owner_id)
        return frozenset(
            name
            for name in GOAL_AFFECTING_FIELDS
            if getattr(profile, name) != getattr(blank, name)
        )
