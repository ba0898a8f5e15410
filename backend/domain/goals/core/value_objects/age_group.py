"""AgeGroup value object - age bands shared by all goal formulas."""

from enum import Enum

YOUTH_MAX_AGE = 17
OLDER_ADULT_MIN_AGE = 65


class AgeGroup(str, Enum):
    """Age band used to scale goals.

    - YOUTH: under 18
    - ADULT: 18 to 64
    - OLDER_ADULT: 65 and over
    """

    YOUTH = "youth"
    ADULT = "adult"
    OLDER_ADULT = "older_adult"

    @classmethod
    def from_age(cls, age: int) -> "AgeGroup":
        """Classify an age in years.

        Example:
            >>> AgeGroup.from_age(16)
            <AgeGroup.YOUTH: 'youth'>
        """
        if age <= YOUTH_MAX_AGE:
            return cls.YOUTH
        if age >= OLDER_ADULT_MIN_AGE:
            return cls.OLDER_ADULT
        return cls.ADULT
