"""Tests for the Redis submission lock (mocked Redis)."""

from unittest.mock import AsyncMock

import pytest

from flycab.domain.entities import SubmissionInProgressError
from flycab.infrastructure.locks import SubmissionLock
from tests.conftest import FakeRedis


class TestSubmissionLock:
    @pytest.mark.asyncio
    async def test_acquire_succeeds(self):
        mock_redis = AsyncMock()
        mock_redis.set = AsyncMock(return_value=True)

        lock = SubmissionLock(mock_redis, "abc", ttl_seconds=10)
        assert await lock.acquire() is True
        mock_redis.set.assert_awaited_once_with(
            "lock:submission:abc", lock.token, nx=True, ex=10
        )

    @pytest.mark.asyncio
    async def test_acquire_fails_if_held(self):
        mock_redis = AsyncMock()
        mock_redis.set = AsyncMock(return_value=None)

        lock = SubmissionLock(mock_redis, "abc", ttl_seconds=10)
        assert await lock.acquire() is False

    @pytest.mark.asyncio
    async def test_release_calls_eval(self):
        mock_redis = AsyncMock()
        lock = SubmissionLock(mock_redis, "abc")
        await lock.release()
        mock_redis.eval.assert_awaited_once()
        assert mock_redis.eval.call_args.args[1:] == (
            1,
            "lock:submission:abc",
            lock.token,
        )

    @pytest.mark.asyncio
    async def test_context_manager_rejects_concurrent_submission(self):
        redis = FakeRedis()
        async with SubmissionLock(redis, "abc"):
            with pytest.raises(SubmissionInProgressError):
                async with SubmissionLock(redis, "abc"):
                    pass
        assert "lock:submission:abc" not in redis.data

    @pytest.mark.asyncio
    async def test_released_on_error(self):
        redis = FakeRedis()
        with pytest.raises(RuntimeError):
            async with SubmissionLock(redis, "abc"):
                raise RuntimeError("boom")
        assert redis.data == {}
