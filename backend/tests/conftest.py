"""Shared test fixtures.

Loads optional ``.env`` / ``.env.test`` files so settings tests see the
same environment as local runs, and resets the engine singleton.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from dotenv import load_dotenv

# Load .env first (default environment variables)
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# .env.test overrides .env values
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)


@pytest.fixture(autouse=True)
def reset_goal_engine_singleton() -> Iterator[None]:
    """Ensure every test starts without a cached engine."""
    from infrastructure.goal_engine_factory import reset_goal_engine

    reset_goal_engine()
    yield
    reset_goal_engine()
