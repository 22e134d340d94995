"""Cached DNS TXT lookups.

Wraps the aiodns TXT query with a bounded, time limited cache of successful
answers. Failed lookups are never cached.

Concurrent misses for the same key are not coordinated: each of them queries
upstream and the last answer to arrive wins the cache slot. Cache reads and
writes never await, so they cannot interleave on the event loop.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

from aiodns import DNSResolver
from aiodns.error import ARES_ENODATA, ARES_ENOTFOUND, DNSError
from cachetools import TTLCache
import sentry_sdk

from com.skynetlabs.dnslink.app.metrics import MetricsClient
from com.skynetlabs.dnslink.resolve.errors import DnslinkException

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 5000
DEFAULT_CACHE_TIME = 1000 * 60 * 5


def _record_text(result: Any) -> str:
    text = result.text
    if isinstance(text, bytes):
        return text.decode("utf-8", errors="replace")
    return text


class TxtLookupCache:
    """
    TXT record lookups with a positive result cache.

    Entries expire ``cache_time`` milliseconds after insertion and the least
    recently used entry is evicted once ``cache_size`` entries are held.

    Args:
        cache_size: Maximum number of cached lookup keys
        cache_time: Time to live of a cached answer, in milliseconds
        resolver: aiodns resolver, created on first use when omitted
        resolver_options: Keyword arguments for a lazily created resolver
        metrics_client: Optional metrics client for cache counters
        timer: Clock used for expiry, in seconds
    """

    def __init__(
        self,
        cache_size: int = DEFAULT_CACHE_SIZE,
        cache_time: int = DEFAULT_CACHE_TIME,
        resolver: Optional[DNSResolver] = None,
        resolver_options: Optional[Dict[str, Any]] = None,
        metrics_client: Optional[MetricsClient] = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache: TTLCache = TTLCache(
            maxsize=cache_size, ttl=cache_time / 1000, timer=timer
        )
        self._resolver = resolver
        self._resolver_options = resolver_options or {}
        self._metrics_client = metrics_client

    @property
    def resolver(self) -> DNSResolver:
        # aiodns binds to the running loop, so it is only built once inside it
        if self._resolver is None:
            self._resolver = DNSResolver(**self._resolver_options)
        return self._resolver

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, lookup: str) -> bool:
        return lookup in self._cache

    def clear(self) -> None:
        self._cache.clear()

    def _increment(self, name: str) -> None:
        if self._metrics_client is not None:
            self._metrics_client.increment(name, 1)

    async def fetch(self, lookup: str) -> List[str]:
        """Fetch the TXT records of a lookup key.

        Args:
            lookup: Fully qualified name to query, e.g. ``_dnslink.example.com``

        Returns:
            The TXT records in the order they were returned

        Raises:
            DnslinkException: resolution error classified as not found, no data
                or other upstream failure
        """
        cached: Optional[Sequence[str]] = self._cache.get(lookup)
        if cached is not None:
            self._increment("cache.hit")
            return list(cached)

        self._increment("cache.miss")
        logger.debug("Querying TXT records for %s", lookup)

        try:
            results = await self.resolver.query(lookup, "TXT")
        except DNSError as e:
            self._increment("cache.failure")
            code = e.args[0] if e.args else None
            if code == ARES_ENOTFOUND:
                raise DnslinkException.record_not_found(lookup) from e
            if code == ARES_ENODATA:
                raise DnslinkException.record_no_data(lookup) from e
            sentry_sdk.capture_exception(e)
            description = e.args[1] if len(e.args) > 1 else str(e)
            raise DnslinkException.lookup_failed(lookup, description) from e
        except Exception as e:
            self._increment("cache.failure")
            sentry_sdk.capture_exception(e)
            raise DnslinkException.lookup_failed(lookup, str(e)) from e

        records = tuple(_record_text(result) for result in results or [])
        self._cache[lookup] = records
        return list(records)
