import asyncio
import logging
from typing import NoReturn
from aiohttp import web

from com.skynetlabs.dnslink.app.config import (
    HealthGaugeAppKey,
    MetricsClientAppKey,
    ResolverAppKey,
)

logger = logging.getLogger(__name__)

TICK_INTERVAL = 30


async def tick_health_task(app: web.Application) -> NoReturn:
    """
    Every 30 seconds, decay the upstream health gauge and report the cache size.
    """

    logger.info("Starting health gauge task")

    health_gauge = app[HealthGaugeAppKey]
    metrics_client = app[MetricsClientAppKey]
    resolver = app[ResolverAppKey]
    while True:
        await asyncio.sleep(TICK_INTERVAL)
        await health_gauge.tick()
        metrics_client.gauge("cache.size", len(resolver.txt_cache))
        metrics_client.gauge("upstream.failures", health_gauge.failures)
