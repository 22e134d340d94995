import asyncio


class UpstreamHealthGauge:
    """
    Tracks how often the upstream DNS resolvers fail unexpectedly.

    Lookups that fail with "not found" or "no data" are ordinary answers about a
    domain and are not counted. Any other upstream failure (timeouts, refused
    queries, server failures) bumps the gauge. A background task decays it by one
    per tick. When a burst of failures pushes the gauge above the threshold, the
    readiness endpoint reports the service as not ready.
    """

    def __init__(self, failures: int = 0, failure_threshold: int = 100) -> None:
        self._failures = failures
        self._failure_threshold = failure_threshold
        self._lock = asyncio.Lock()

    @property
    def failures(self) -> int:
        return self._failures

    async def record_failure(self, count: int = 1) -> int:
        async with self._lock:
            self._failures += int(count)
            return self._failures

    async def tick(self) -> None:
        async with self._lock:
            if self._failures > 0:
                self._failures -= 1

    async def is_healthy(self) -> bool:
        async with self._lock:
            return self._failures <= self._failure_threshold
