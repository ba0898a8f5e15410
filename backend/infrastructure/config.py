"""Configuration for the goals engine.

All values come from environment variables, optionally loaded from a
``.env`` file. Example .env:

    GOALS_RETRY_MAX_ATTEMPTS=3
    GOALS_RETRY_INITIAL_DELAY_SECONDS=0.5
    GOALS_RETRY_MAX_DELAY_SECONDS=4
    GOALS_FRESHNESS_HOURS=24
    GOALS_DEBOUNCE_SECONDS=2
    GOALS_HISTORY_SIZE=10
    GOALS_LOG_LEVEL=INFO
    GOALS_LOG_JSON=false
"""

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from application.goals.retry_policy import RetryPolicy


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GoalEngineSettings:
    """Tunables of the goals engine.

    Attributes:
        retry_max_attempts: Attempts for profile fetch, calculation and storage
        retry_initial_delay_seconds: First backoff wait
        retry_max_delay_seconds: Backoff cap
        freshness_hours: Age under which stored goals are reused
        debounce_seconds: Quiet period before a triggered recalculation
        history_size: Trigger history entries kept per owner
        log_level: Root log level name
        log_json: Render logs as JSON instead of console output
    """

    retry_max_attempts: int = 3
    retry_initial_delay_seconds: float = 0.5
    retry_max_delay_seconds: float = 4.0
    freshness_hours: float = 24
    debounce_seconds: float = 2.0
    history_size: int = 10
    log_level: str = "INFO"
    log_json: bool = False

    def __post_init__(self) -> None:
        if self.freshness_hours <= 0:
            raise ValueError("GOALS_FRESHNESS_HOURS must be positive")
        if self.debounce_seconds < 0:
            raise ValueError("GOALS_DEBOUNCE_SECONDS must be non-negative")
        if self.history_size < 1:
            raise ValueError("GOALS_HISTORY_SIZE must be at least 1")

    @classmethod
    def from_env(
        cls, env_file: Optional[Union[str, Path]] = None
    ) -> "GoalEngineSettings":
        """
        Build settings from the environment.

        Args:
            env_file: Optional .env file loaded first; existing
                environment variables take precedence

        Returns:
            GoalEngineSettings

        Raises:
            ValueError: If a variable cannot be parsed or is out of range
        """
        if env_file is not None and Path(env_file).exists():
            load_dotenv(env_file)

        return cls(
            retry_max_attempts=_get_int("GOALS_RETRY_MAX_ATTEMPTS", 3),
            retry_initial_delay_seconds=_get_float("GOALS_RETRY_INITIAL_DELAY_SECONDS", 0.5),
            retry_max_delay_seconds=_get_float("GOALS_RETRY_MAX_DELAY_SECONDS", 4.0),
            freshness_hours=_get_float("GOALS_FRESHNESS_HOURS", 24),
            debounce_seconds=_get_float("GOALS_DEBOUNCE_SECONDS", 2.0),
            history_size=_get_int("GOALS_HISTORY_SIZE", 10),
            log_level=os.getenv("GOALS_LOG_LEVEL", "INFO").upper(),
            log_json=_get_bool("GOALS_LOG_JSON", False),
        )

    @property
    def freshness_window(self) -> timedelta:
        return timedelta(hours=self.freshness_hours)

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.retry_max_attempts,
            initial_delay_seconds=self.retry_initial_delay_seconds,
            max_delay_seconds=self.retry_max_delay_seconds,
        )
