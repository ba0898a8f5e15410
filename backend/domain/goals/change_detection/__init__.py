"""Detection of goal-relevant profile changes."""

from .profile_change_detector import ProfileChangeDetector

__all__ = ["ProfileChangeDetector"]
