"""Daily wellness goals domain.

Turns a user's biometric profile into bounded daily targets for steps,
calories and heart points, with safe fallbacks when calculation is not
possible.
"""
