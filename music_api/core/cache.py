# ============================================================================
# FILE: music_api/core/cache.py
# ============================================================================
import json
import logging
from typing import Any, Optional

import redis

logger = logging.getLogger(__name__)


class RedisCache:
    """
    Small JSON cache on top of Redis.

    Built from a URL once per application. When no URL is given or Redis cannot
    be reached the cache stays disabled and every call falls through, so callers
    never have to special-case a missing Redis.
    """

    def __init__(self, url: Optional[str] = None, namespace: str = "music_api"):
        self.namespace = namespace
        self.client: Optional[redis.Redis] = None
        if not url:
            logger.info("Redis cache disabled")
            return
        try:
            client = redis.from_url(url, decode_responses=True)
            client.ping()
            self.client = client
            logger.info("Redis connection established")
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {e}. Caching disabled.")

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> Optional[Any]:
        if self.client is None:
            return None
        try:
            raw = self.client.get(self._key(key))
        except redis.RedisError as e:
            logger.error(f"Cache get error for {key}: {e}")
            return None
        return json.loads(raw) if raw else None

    def set(self, key: str, value: Any, expire: Optional[int] = None) -> bool:
        if self.client is None:
            return False
        try:
            self.client.set(self._key(key), json.dumps(value), ex=expire or None)
            return True
        except (redis.RedisError, TypeError) as e:
            logger.error(f"Cache set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        if self.client is None:
            return False
        try:
            self.client.delete(self._key(key))
            return True
        except redis.RedisError as e:
            logger.error(f"Cache delete error for {key}: {e}")
            return False

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None
