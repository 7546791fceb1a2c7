"""
Django cache implementation of CachePort.
"""
import logging
from typing import Any, Optional

from asgiref.sync import sync_to_async
from django.core.cache import caches

from core.infrastructure.cache import CachePort
from core.metrics import cache_hits_total, cache_misses_total

logger = logging.getLogger(__name__)


class DjangoCacheAdapter(CachePort):
    """
    Django cache adapter implementing CachePort.

    Keys are namespaced so several logical caches can share one backend,
    and hits/misses are counted per namespace.
    """

    def __init__(self, namespace: str, alias: str = "default"):
        self.namespace = namespace
        self.alias = alias

    @property
    def _cache(self):
        return caches[self.alias]

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    async def get(self, key: str) -> Optional[Any]:
        try:
            value = await sync_to_async(self._cache.get)(self._key(key))
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error getting from cache: %s", e, exc_info=True)
            return None

        if value is None:
            cache_misses_total.labels(cache=self.namespace).inc()
        else:
            cache_hits_total.labels(cache=self.namespace).inc()
        return value

    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        try:
            await sync_to_async(self._cache.set)(self._key(key), value, timeout=timeout)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error setting cache: %s", e, exc_info=True)

    def _incr_sync(self, key: str) -> int:
        cache = self._cache
        cache.add(key, 0, timeout=None)
        return cache.incr(key)

    async def incr(self, key: str) -> Optional[int]:
        try:
            return await sync_to_async(self._incr_sync)(self._key(key))
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error incrementing cache counter: %s", e, exc_info=True)
            return None
