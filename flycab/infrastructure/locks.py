"""
Redis-based submission lock.

The HTTP service is the one place where a single selection can receive
overlapping requests, so the booking flow's in-flight flag is backed by a
per-session lock here.  A second submit for the same session fails fast
with ``SubmissionInProgressError`` instead of queueing.

Acquire uses SET NX EX; release is an atomic check-and-delete in Lua so a
lock that expired and was re-acquired elsewhere is never deleted.
"""

from __future__ import annotations

import uuid

import redis.asyncio as aioredis

from flycab.domain.entities import SubmissionInProgressError

_RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""


class SubmissionLock:
    def __init__(
        self, client: aioredis.Redis, session_id: str, ttl_seconds: int = 30
    ):
        self.redis = client
        self.key = f"lock:submission:{session_id}"
        self.ttl = ttl_seconds
        self.token = str(uuid.uuid4())

    async def acquire(self) -> bool:
        return bool(
            await self.redis.set(self.key, self.token, nx=True, ex=self.ttl)
        )

    async def release(self) -> None:
        await self.redis.eval(_RELEASE_SCRIPT, 1, self.key, self.token)

    async def __aenter__(self):
        if not await self.acquire():
            raise SubmissionInProgressError(
                "A booking is already being submitted for this selection"
            )
        return self

    async def __aexit__(self, *args):
        await self.release()
