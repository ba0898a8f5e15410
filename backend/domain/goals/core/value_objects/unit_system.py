"""UnitSystem value object - display preference for measurements."""

from enum import Enum


class UnitSystem(str, Enum):
    """Preferred measurement system.

    Stored values are always metric; this only affects presentation,
    so changing it never affects goals.
    """

    METRIC = "metric"
    IMPERIAL = "imperial"
