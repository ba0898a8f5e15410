"""ChangesSummary value object - outcome of diffing two profile snapshots."""

from dataclasses import dataclass, field
from typing import FrozenSet

# Profile fields that feed into goal calculation
GOAL_AFFECTING_FIELDS: FrozenSet[str] = frozenset(
    {"weight_in_kg", "height_in_cm", "gender", "birthday"}
)


@dataclass(frozen=True)
class ChangesSummary:
    """Goal-relevant differences between a stored and an updated profile.

    Attributes:
        should_recalculate: Whether goals must be recalculated
        reason: Human-readable explanation of the decision
        changed_fields: Changed goal-affecting field names
        was_valid_before: Stored profile was usable for calculation
        is_valid_after: Updated profile is usable for calculation
        is_new_profile: No profile was stored before the update
    """

    should_recalculate: bool
    reason: str
    changed_fields: FrozenSet[str] = field(default_factory=frozenset)
    was_valid_before: bool = False
    is_valid_after: bool = False
    is_new_profile: bool = False

    def __post_init__(self) -> None:
        unknown = self.changed_fields - GOAL_AFFECTING_FIELDS
        if unknown:
            raise ValueError(
                f"Only goal-affecting fields can be reported, got {sorted(unknown)}"
            )

    @property
    def has_goal_affecting_changes(self) -> bool:
        return bool(self.changed_fields)

    @property
    def became_valid(self) -> bool:
        return not self.was_valid_before and self.is_valid_after

    @property
    def became_invalid(self) -> bool:
        return self.was_valid_before and not self.is_valid_after

    def summary(self) -> str:
        """One-line description for logs and diagnostics."""
        fields = ", ".join(sorted(self.changed_fields)) or "none"
        return (
            f"recalculate={self.should_recalculate} reason='{self.reason}' "
            f"changed=[{fields}] valid {self.was_valid_before}->{self.is_valid_after}"
        )
