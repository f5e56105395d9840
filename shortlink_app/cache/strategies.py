"""
Redirect cache strategies using Strategy Pattern.
Allows switching between different cache backends (Redis, In-Memory, Null).

Only ``endpoint -> original_url`` for non-blacklisted records is cached;
any change that could alter a resolution (delete, blacklist, alias
rename) must evict the key.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

import redis

logger = logging.getLogger(__name__)


def redirect_key(endpoint: str) -> str:
    """Cache key for a scoped endpoint"""
    return f"url:{endpoint}"


class CacheStrategy(ABC):
    """
    Abstract base class for cache strategies.

    All methods are async because cache operations involve I/O (network for Redis).
    A cache failure must never fail a request: implementations log and
    report a miss instead of raising.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Get value from cache.

        Returns:
            Cached value or None if not found
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        """
        Set value in cache with TTL (seconds).

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Delete key from cache.

        Returns:
            True if deleted, False if key didn't exist
        """
        pass


class RedisCache(CacheStrategy):
    """
    Redis cache shared by every API process.
    """

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client

    async def get(self, key: str) -> Optional[str]:
        try:
            value = self.redis.get(key)
            return value.decode("utf-8") if value else None
        except redis.RedisError as e:
            logger.warning("Redis get error for %s: %s", key, e)
            return None

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        try:
            return bool(self.redis.setex(key, ttl, value))
        except redis.RedisError as e:
            logger.warning("Redis set error for %s: %s", key, e)
            return False

    async def delete(self, key: str) -> bool:
        try:
            return bool(self.redis.delete(key))
        except redis.RedisError as e:
            # A stale entry could keep resolving a deleted/blacklisted URL until TTL
            logger.error("Redis delete error for %s: %s", key, e)
            return False


class InMemoryCache(CacheStrategy):
    """
    Per-process dict cache for development and tests.

    TTL is ignored; entries live until evicted or the process exits.
    """

    def __init__(self):
        self._cache: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._cache.get(key)

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        self._cache[key] = value
        return True

    async def delete(self, key: str) -> bool:
        return self._cache.pop(key, None) is not None


class NullCache(CacheStrategy):
    """
    Null Object Pattern - cache that does nothing.

    Every lookup is a miss, so resolution always goes to the database.
    """

    async def get(self, key: str) -> Optional[str]:
        return None

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        return True

    async def delete(self, key: str) -> bool:
        return True
