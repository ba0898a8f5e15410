"""In-memory persistence implementations."""

from infrastructure.persistence.in_memory.goals_repository import (
    InMemoryGoalsRepository,
)
from infrastructure.persistence.in_memory.profile_repository import (
    InMemoryProfileRepository,
)

__all__ = [
    "InMemoryGoalsRepository",
    "InMemoryProfileRepository",
]
