"""Core building blocks of the goals domain."""
