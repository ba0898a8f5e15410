"""CalculationSource value object - provenance of a goal set."""

from enum import Enum


class CalculationSource(str, Enum):
    """Where a set of daily goals came from.

    - STANDARD_FORMULA: personalised calculation from the profile
    - FALLBACK_DEFAULT: safe defaults used when calculation was not possible
    - USER_ADJUSTED: goals edited manually by the user
    """

    STANDARD_FORMULA = "standard_formula"
    FALLBACK_DEFAULT = "fallback_default"
    USER_ADJUSTED = "user_adjusted"

    def display_name(self) -> str:
        names = {
            CalculationSource.STANDARD_FORMULA: "WHO Standard",
            CalculationSource.FALLBACK_DEFAULT: "Health Guidelines",
            CalculationSource.USER_ADJUSTED: "Personal Adjustment",
        }
        return names[self]
