"""Gender value object."""

from enum import Enum


class Gender(str, Enum):
    """Gender as recorded on the user profile.

    OTHER and UNSPECIFIED both select the gender-neutral formulas.
    """

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    UNSPECIFIED = "unspecified"

    @property
    def is_binary(self) -> bool:
        return self in (Gender.MALE, Gender.FEMALE)
