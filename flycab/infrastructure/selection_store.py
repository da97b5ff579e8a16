"""
Redis storage for selection sessions.

Each HTTP client owns one ``SelectionController``; between requests it is
kept as JSON under ``selection:<id>`` with a sliding TTL.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Optional

import redis.asyncio as aioredis

from flycab.domain.selection import LocationCallback, SelectionController

logger = logging.getLogger(__name__)


class SelectionSessionStore:
    def __init__(self, client: aioredis.Redis, ttl_seconds: int = 1800):
        self.redis = client
        self.ttl = ttl_seconds

    @staticmethod
    def _key(session_id: str) -> str:
        return f"selection:{session_id}"

    async def create(self) -> tuple[str, SelectionController]:
        session_id = uuid.uuid4().hex
        controller = SelectionController()
        await self.save(session_id, controller)
        logger.debug("Selection session %s created", session_id)
        return session_id, controller

    async def load(
        self,
        session_id: str,
        on_location_select: Optional[LocationCallback] = None,
    ) -> Optional[SelectionController]:
        raw = await self.redis.get(self._key(session_id))
        if raw is None:
            return None
        return SelectionController.from_dict(
            json.loads(raw), on_location_select=on_location_select
        )

    async def save(self, session_id: str, controller: SelectionController) -> None:
        await self.redis.set(
            self._key(session_id), json.dumps(controller.to_dict()), ex=self.ttl
        )

    async def delete(self, session_id: str) -> bool:
        return bool(await self.redis.delete(self._key(session_id)))
