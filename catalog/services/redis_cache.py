# catalog/services/redis_cache.py
# Responsibility: Handles Redis-based caching of ranked category search results.

import hashlib
import json
import logging
from typing import Any, List, Optional

import redis

from catalog.config.settings import settings

logger = logging.getLogger(__name__)


class RedisCacheManager:
    """
    Caches ranked search results in Redis to avoid rescoring every category per request.

    Entries are keyed by a catalog generation number. Every catalog write calls
    invalidate_all(), which bumps the generation, so a result computed from rows
    read before the write lands under a generation nobody asks for anymore.
    Searches must read the generation before reading the rows.
    Redis problems are logged and treated as cache misses.
    """

    def __init__(self):
        """
        Initializes Redis connection using centralized settings.
        decode_responses=True ensures we get strings back, not bytes.
        """
        self.enabled = settings.REDIS.ENABLED
        self.client = redis.from_url(settings.REDIS.URL, decode_responses=True)
        self.ttl_seconds = settings.REDIS.TTL_SECONDS
        self.prefix = settings.REDIS.KEY_PREFIX
        self.generation_key = f"{self.prefix}:gen"

    def current_generation(self) -> Optional[int]:
        """
        Returns the current catalog generation, or None when caching is unavailable.
        Callers skip the cache entirely on None.
        """
        if not self.enabled:
            return None

        try:
            return int(self.client.get(self.generation_key) or 0)
        except (redis.RedisError, ValueError) as e:
            logger.warning("[Redis] Generation fetch error: %s", e)
            return None

    def get_cached_result(self, query: str, generation: int) -> Optional[List[Any]]:
        """
        Retrieves ranked results for a query if present.

        Args:
            query (str): Lowercased, trimmed raw query.
            generation (int): Generation read before the search started.

        Returns:
            Optional[List]: Cached result list, or None on a cache miss.
        """
        if not self.enabled:
            return None

        try:
            cached_data = self.client.get(self._generate_key(query, generation))
            if cached_data:
                return json.loads(cached_data)
        except (redis.RedisError, json.JSONDecodeError) as e:
            logger.warning("[Redis] Cache fetch error: %s", e)

        return None

    def set_cached_result(self, query: str, generation: int, result: List[Any]) -> None:
        if not self.enabled:
            return

        try:
            self.client.setex(self._generate_key(query, generation), self.ttl_seconds, json.dumps(result))
        except (redis.RedisError, TypeError) as e:
            logger.warning("[Redis] Cache write error: %s", e)

    def invalidate_all(self) -> int:
        """
        Moves the cache to a new generation and deletes entries of older ones.

        Returns:
            int: Number of result keys removed (0 when disabled or on error).
        """
        if not self.enabled:
            return 0

        try:
            self.client.incr(self.generation_key)
        except redis.RedisError as e:
            logger.error("[Redis] Generation bump failed, cached results may be stale: %s", e)
            return 0

        removed = 0
        try:
            keys = list(self.client.scan_iter(match=f"{self.prefix}:r:*"))
            if keys:
                removed = self.client.delete(*keys)
        except redis.RedisError as e:
            # Old generations are unreachable anyway; they expire with their TTL
            logger.warning("[Redis] Cache cleanup error: %s", e)
        return removed

    def _generate_key(self, query: str, generation: int) -> str:
        """
        Key Format: "{prefix}:r:{generation}:{sha256_hash}" of the query text.
        """
        hash_digest = hashlib.sha256(query.encode("utf-8")).hexdigest()
        return f"{self.prefix}:r:{generation}:{hash_digest}"
