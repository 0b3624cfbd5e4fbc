"""
Read cache for the public directory

Redis when REDIS_URL is set, process memory otherwise. Entries are stored
under "<namespace>:<key>" so a write can drop a whole namespace at once.
"""

import hashlib
from functools import wraps
from typing import Any, Callable, Optional
from urllib.parse import urlparse

import orjson
from aiocache import Cache
from aiocache.serializers import BaseSerializer
from tenacity import retry, stop_after_attempt, wait_exponential

from app.core.config import settings
from app.core.logging import log

MAX_KEY_LENGTH = 200


class OrjsonSerializer(BaseSerializer):
    """Rows are plain dicts, orjson handles them directly"""

    def dumps(self, value: Any) -> bytes:
        return orjson.dumps(value)

    def loads(self, value: Optional[bytes]) -> Any:
        return None if value is None else orjson.loads(value)


class ReadCache:
    """
    Thin wrapper over an aiocache backend.

    A cache miss must never fail a request, so backend errors are logged
    and reported as a miss or a failed write.
    """

    def __init__(self, backend: Any, name: str):
        self.backend = backend
        self.name = name

    @classmethod
    def from_settings(cls) -> "ReadCache":
        if not settings.REDIS_URL:
            return cls(Cache(Cache.MEMORY, serializer=OrjsonSerializer()), "memory")

        url = urlparse(settings.REDIS_URL)
        backend = Cache(
            Cache.REDIS,
            endpoint=url.hostname or "localhost",
            port=url.port or 6379,
            password=url.password,
            serializer=OrjsonSerializer(),
            timeout=1,
        )
        return cls(backend, "redis")

    @retry(stop=stop_after_attempt(3), wait=wait_exponential(multiplier=1, min=1, max=5), reraise=True)
    async def _read(self, key: str) -> Any:
        return await self.backend.get(key)

    async def get(self, key: str) -> Optional[Any]:
        try:
            return await self._read(key)
        except Exception as e:
            log.warning("Cache read failed", backend=self.name, key=key, error=str(e))
            return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        try:
            return bool(await self.backend.set(key, value, ttl=ttl))
        except Exception as e:
            log.warning("Cache write failed", backend=self.name, key=key, error=str(e))
            return False

    async def clear(self, namespace: str) -> bool:
        try:
            return bool(await self.backend.clear(namespace=namespace))
        except Exception as e:
            log.warning("Cache clear failed", backend=self.name, namespace=namespace, error=str(e))
            return False


_cache: Optional[ReadCache] = None


def get_cache() -> ReadCache:
    """Process-wide cache, built on first use"""
    global _cache
    if _cache is None:
        _cache = ReadCache.from_settings()
        log.info("Read cache ready", backend=_cache.name)
    return _cache


def cache_key(*args, **kwargs) -> str:
    """
    Join positional parts and sorted keyword filters.

    cache_key("directory", page=2, category="Bridal") -> "directory:category=Bridal:page=2"

    Keys longer than MAX_KEY_LENGTH are replaced by a sha256 prefix.
    """
    parts = [str(arg) for arg in args]
    parts.extend(f"{k}={v}" for k, v in sorted(kwargs.items()))
    key = ":".join(parts)
    if len(key) > MAX_KEY_LENGTH:
        return "hash:" + hashlib.sha256(key.encode()).hexdigest()[:16]
    return key


def cached(namespace: str, key_builder: Callable[..., str], ttl: Optional[int] = None):
    """
    Cache a coroutine's result under "<namespace>:<key_builder(*args, **kwargs)>".

    None results are not stored. Nothing is cached when CACHE_ENABLED is off.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            if not settings.CACHE_ENABLED:
                return await func(*args, **kwargs)

            cache = get_cache()
            key = f"{namespace}:{key_builder(*args, **kwargs)}"

            hit = await cache.get(key)
            if hit is not None:
                log.debug("Cache hit", key=key)
                return hit

            result = await func(*args, **kwargs)
            if result is not None:
                await cache.set(key, result, ttl=ttl or settings.CACHE_TTL)
            return result

        return wrapper

    return decorator


async def invalidate_namespace(namespace: str) -> bool:
    """Drop every cached entry under a namespace"""
    if not settings.CACHE_ENABLED:
        return True
    cleared = await get_cache().clear(namespace)
    log.debug("Cache namespace cleared", namespace=namespace)
    return cleared
