# invitations/infrastructure/cache/redis_client.py

from typing import Optional

import redis.asyncio as redis

from invitations.config.settings import settings


class RedisClient:
    def __init__(self, url: Optional[str] = None):
        self.client = redis.from_url(
            url or settings.redis_url,
            decode_responses=True,
        )

    async def get(self, key: str) -> str | None:
        """Get value for key. Returns None if key does not exist."""
        return await self.client.get(key)

    async def set(self, key: str, value: str) -> None:
        """Set key to value without expiry."""
        await self.client.set(key, value)

    async def close(self) -> None:
        await self.client.aclose()
