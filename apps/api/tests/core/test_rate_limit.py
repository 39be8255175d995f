"""
Tests for the in-memory rate limit fallback.
"""

from unittest.mock import patch

import pytest

from qrintake.core import rate_limit
from qrintake.core.rate_limit import check_rate_limit

TIME = "qrintake.core.rate_limit.time.time"


@pytest.fixture(autouse=True)
def empty_store():
    with (
        patch.dict(rate_limit._memory_store, clear=True),
        patch.dict(rate_limit._memory_windows, clear=True),
        patch.object(rate_limit, "_last_sweep", 0.0),
        patch("qrintake.core.redis.get_redis_client", return_value=None),
    ):
        yield


class TestMemoryRateLimit:
    @pytest.mark.asyncio
    async def test_blocks_after_limit(self):
        with patch(TIME, return_value=1000.0):
            assert await check_rate_limit("ip:a", 2, 60) is True
            assert await check_rate_limit("ip:a", 2, 60) is True
            assert await check_rate_limit("ip:a", 2, 60) is False

    @pytest.mark.asyncio
    async def test_window_slides(self):
        with patch(TIME, return_value=1000.0):
            await check_rate_limit("ip:a", 1, 60)
        with patch(TIME, return_value=1061.0):
            assert await check_rate_limit("ip:a", 1, 60) is True

    @pytest.mark.asyncio
    async def test_idle_keys_are_evicted(self):
        with patch(TIME, return_value=1000.0):
            await check_rate_limit("ip:idle", 5, 60)
        with patch(TIME, return_value=1100.0):
            await check_rate_limit("ip:active", 5, 60)

        assert "ip:idle" not in rate_limit._memory_store
        assert "ip:idle" not in rate_limit._memory_windows
        assert "ip:active" in rate_limit._memory_store

    @pytest.mark.asyncio
    async def test_eviction_respects_longer_windows(self):
        with patch(TIME, return_value=1000.0):
            await check_rate_limit("ip:slow", 5, 600)
        with patch(TIME, return_value=1100.0):
            await check_rate_limit("ip:fast", 5, 60)

        assert rate_limit._memory_store["ip:slow"] == [1000.0]
