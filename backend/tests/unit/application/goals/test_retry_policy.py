"""Unit tests for RetryPolicy."""

from unittest.mock import AsyncMock

import pytest
from tenacity import wait_exponential

from application.goals.retry_policy import RetryPolicy


class TestRetryPolicyValidation:
    def test_defaults(self):
        policy = RetryPolicy()

        assert policy.max_attempts == 3
        assert policy.initial_delay_seconds == 0.5
        assert policy.max_delay_seconds == 4.0

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError, match="max_attempts"):
            RetryPolicy(max_attempts=0)

    def test_rejects_negative_delay(self):
        with pytest.raises(ValueError, match="non-negative"):
            RetryPolicy(initial_delay_seconds=-1)


class TestRetryPolicyRun:
    @pytest.mark.asyncio
    async def test_returns_first_success(self):
        func = AsyncMock(return_value="ok")

        result = await RetryPolicy(3, 0, 0).run("fetch", func, "user123")

        assert result == "ok"
        func.assert_awaited_once_with("user123")

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        func = AsyncMock(side_effect=[IOError("a"), IOError("b"), "ok"])

        result = await RetryPolicy(3, 0, 0).run("fetch", func, owner_id="user123")

        assert result == "ok"
        assert func.await_count == 3

    @pytest.mark.asyncio
    async def test_reraises_last_error(self):
        func = AsyncMock(side_effect=[IOError("first"), IOError("last")])

        with pytest.raises(IOError, match="last"):
            await RetryPolicy(2, 0, 0).run("save", func)

        assert func.await_count == 2

    @pytest.mark.asyncio
    async def test_single_attempt_does_not_retry(self):
        func = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            await RetryPolicy(1, 0, 0).run("calculate", func)

        func.assert_awaited_once()


def test_backoff_doubles_up_to_cap():
    """Backoff waits 0.5s, 1s, 2s, 4s, 4s with default settings."""
    policy = RetryPolicy(max_attempts=6)
    wait = wait_exponential(
        multiplier=policy.initial_delay_seconds, max=policy.max_delay_seconds
    )

    class _State:
        def __init__(self, attempt_number):
            self.attempt_number = attempt_number

    assert [wait(_State(n)) for n in range(1, 6)] == [0.5, 1.0, 2.0, 4.0, 4.0]
