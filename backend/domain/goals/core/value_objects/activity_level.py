"""ActivityLevel value object - physical activity tier for goal calculation."""

from enum import Enum


class ActivityLevel(str, Enum):
    """Physical Activity Level (PAL) used to scale energy expenditure.

    - SEDENTARY: Little or no exercise (desk job)
    - LIGHT: Light exercise 1-3 days/week
    - MODERATE: Moderate exercise 3-5 days/week
    - ACTIVE: Hard exercise 6-7 days/week
    - VERY_ACTIVE: Very hard exercise + physical job
    """

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"

    @classmethod
    def default(cls) -> "ActivityLevel":
        """Activity tier assumed when the profile does not record one."""
        return cls.LIGHT

    def pal_multiplier(self) -> float:
        """Get PAL multiplier applied to BMR to obtain TDEE.

        Returns:
            float: Multiplier for BMR

        Example:
            >>> ActivityLevel.MODERATE.pal_multiplier()
            1.55
        """
        multipliers = {
            ActivityLevel.SEDENTARY: 1.2,
            ActivityLevel.LIGHT: 1.375,
            ActivityLevel.MODERATE: 1.55,
            ActivityLevel.ACTIVE: 1.725,
            ActivityLevel.VERY_ACTIVE: 1.9,
        }
        return multipliers[self]

    def description(self) -> str:
        """Get human-readable description."""
        descriptions = {
            ActivityLevel.SEDENTARY: "Little or no exercise",
            ActivityLevel.LIGHT: "Light exercise 1-3 days/week",
            ActivityLevel.MODERATE: "Moderate exercise 3-5 days/week",
            ActivityLevel.ACTIVE: "Hard exercise 6-7 days/week",
            ActivityLevel.VERY_ACTIVE: "Very hard exercise + physical job",
        }
        return descriptions[self]
