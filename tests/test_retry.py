"""Tests for retry behavior on transient transport failures."""

import httpx
import pytest

from onchain_transfers.core.errors import APIError, TransportError
from onchain_transfers.integrations.retry import RetryConfig, is_retryable, retry_call


def _transport_error(cause: Exception) -> TransportError:
    try:
        raise TransportError("HTTP request failed") from cause
    except TransportError as e:
        return e


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (APIError("rate limited", 429), True),
        (APIError("server error", 502), True),
        (APIError("bad request", 400), False),
        (_transport_error(httpx.ConnectError("refused")), True),
        (_transport_error(httpx.ReadTimeout("slow")), True),
        (_transport_error(ValueError("not json")), False),
        (TransportError("no cause"), False),
    ],
)
def test_is_retryable(error, expected):
    """Test which failures are worth repeating."""
    assert is_retryable(error) is expected


@pytest.mark.asyncio
async def test_retry_call_succeeds_after_failures():
    """Test transient failures are retried with backoff."""
    attempts = []
    sleeps = []

    async def flaky(value):
        attempts.append(value)
        if len(attempts) < 3:
            raise APIError("unavailable", 503)
        return value

    async def sleep(seconds):
        sleeps.append(seconds)

    result = await retry_call(flaky, "ok", config=RetryConfig(max_retries=3, base_delay=1.0), sleep=sleep)

    assert result == "ok"
    assert len(attempts) == 3
    assert sleeps == [1.0, 2.0]


@pytest.mark.asyncio
async def test_retry_call_does_not_retry_client_errors():
    """Test permanent failures are raised immediately."""
    calls = 0

    async def rejected():
        nonlocal calls
        calls += 1
        raise APIError("forbidden", 403)

    with pytest.raises(APIError):
        await retry_call(rejected, config=RetryConfig())

    assert calls == 1


@pytest.mark.asyncio
async def test_retry_call_with_no_retries():
    """Test a zero retry budget makes exactly one attempt."""
    calls = 0

    async def unavailable():
        nonlocal calls
        calls += 1
        raise APIError("unavailable", 503)

    with pytest.raises(APIError):
        await retry_call(unavailable, config=RetryConfig(max_retries=0))

    assert calls == 1


def test_delay_is_capped():
    """Test exponential backoff never exceeds the maximum delay."""
    config = RetryConfig(base_delay=1.0, max_delay=5.0, exponential_base=2.0)

    assert [config.get_delay(attempt) for attempt in range(5)] == [1.0, 2.0, 4.0, 5.0, 5.0]
