"""GoalsRecalculated domain event."""

from dataclasses import dataclass

from ..value_objects.calculation_source import CalculationSource
from .base import DomainEvent


@dataclass(frozen=True)
class GoalsRecalculated(DomainEvent):
    """Event emitted when new daily goals have been stored for an owner.

    Attributes:
        owner_id: User the goals belong to
        steps_goal: New steps target
        calories_goal: New calories target
        heart_points_goal: New heart points target
        calculation_source: Provenance of the new goals
        trigger_reason: What caused the recalculation
    """

    owner_id: str
    steps_goal: int
    calories_goal: int
    heart_points_goal: int
    calculation_source: CalculationSource
    trigger_reason: str

    @classmethod
    def create(
        cls,
        owner_id: str,
        steps_goal: int,
        calories_goal: int,
        heart_points_goal: int,
        calculation_source: CalculationSource,
        trigger_reason: str,
    ) -> "GoalsRecalculated":
        """Factory method stamping event id and timestamp.

        Example:
            >>> event = GoalsRecalculated.create(
            ...     owner_id="user123",
            ...     steps_goal=10500,
            ...     calories_goal=2628,
            ...     heart_points_goal=21,
            ...     calculation_source=CalculationSource.STANDARD_FORMULA,
            ...     trigger_reason="Goal-affecting fields changed: weight_in_kg",
            ... )
        """
        return cls(
            event_id=cls._generate_event_id(),
            occurred_at=cls._now(),
            owner_id=owner_id,
            steps_goal=steps_goal,
            calories_goal=calories_goal,
            heart_points_goal=heart_points_goal,
            calculation_source=calculation_source,
            trigger_reason=trigger_reason,
        )
