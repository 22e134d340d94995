import asyncio
import contextlib
import logging
from time import time
from typing import (
    Optional,
)
from aiohttp import web
import sentry_sdk
from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from com.skynetlabs.dnslink.app.config import (
    HealthGaugeAppKey,
    MetricsClientAppKey,
    ResolverAppKey,
    Settings,
    SettingsAppKey,
    TickHealthTaskAppKey,
)
from com.skynetlabs.dnslink.app.handlers.dnslink import handle_dnslink
from com.skynetlabs.dnslink.app.handlers.internal import (
    handle_internal_alive,
    handle_internal_ready,
)
from com.skynetlabs.dnslink.app.metrics import MetricsClient, create_metrics_client
from com.skynetlabs.dnslink.app.tasks import tick_health_task
from com.skynetlabs.dnslink.model.health import UpstreamHealthGauge
from com.skynetlabs.dnslink.resolve.dnslink import Resolver
from com.skynetlabs.dnslink.resolve.txt import TxtLookupCache

logger = logging.getLogger(__name__)


async def background_tasks(app):
    logger.info("Starting up")

    await app[MetricsClientAppKey].connect()

    logger.info("Startup complete")

    app[TickHealthTaskAppKey] = asyncio.create_task(tick_health_task(app))

    yield

    logger.info("Shutting down background tasks")

    app[TickHealthTaskAppKey].cancel()

    with contextlib.suppress(asyncio.exceptions.CancelledError):
        await app[TickHealthTaskAppKey]

    await app[MetricsClientAppKey].close()


@web.middleware
async def sentry_middleware(request: web.Request, handler):
    try:
        response = await handler(request)
        return response
    except web.HTTPException:
        raise
    except Exception as e:
        sentry_sdk.capture_exception(e)
        raise e


@web.middleware
async def metrics_middleware(request: web.Request, handler):
    metrics_client = request.app[MetricsClientAppKey]
    request_method: str = request.method
    # Route templates keep domain names out of metric tags.
    route = request.match_info.route.resource
    request_path = route.canonical if route is not None else request.path

    start_time: float = time()
    response_status_code = 0

    try:
        response = await handler(request)
        response_status_code = response.status
        return response
    except web.HTTPException as e:
        response_status_code = e.status
        raise
    except Exception as e:
        metrics_client.increment(
            "server.request.exception",
            1,
            tag_dict={
                "exception": type(e).__name__,
                "path": request_path,
                "method": request_method,
            },
        )
        raise e
    finally:
        metrics_client.timer(
            "server.request.time",
            time() - start_time,
            tag_dict={"path": request_path, "method": request_method},
        )
        metrics_client.increment(
            "server.request.count",
            1,
            tag_dict={
                "path": request_path,
                "method": request_method,
                "status": response_status_code,
            },
        )


def build_resolver(settings: Settings, metrics_client: MetricsClient) -> Resolver:
    txt_cache = TxtLookupCache(
        cache_size=settings.cache_size,
        cache_time=settings.cache_time,
        resolver_options=settings.resolver_options(),
        metrics_client=metrics_client,
    )
    return Resolver(txt_cache)


async def start_web_server(
    settings: Optional[Settings] = None, resolver: Optional[Resolver] = None
):

    if settings is None:
        settings = Settings()  # type: ignore
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            send_default_pii=False,
            integrations=[AioHttpIntegration()],
        )
    app = web.Application(middlewares=[metrics_middleware, sentry_middleware])

    metrics_client = create_metrics_client(
        settings.metrics_backend,
        host=settings.statsd_host,
        port=settings.statsd_port,
        prefix=settings.statsd_prefix,
        debug=settings.debug,
    )

    app[SettingsAppKey] = settings
    app[MetricsClientAppKey] = metrics_client
    app[HealthGaugeAppKey] = UpstreamHealthGauge()
    app[ResolverAppKey] = (
        resolver if resolver is not None else build_resolver(settings, metrics_client)
    )

    app.add_routes(
        [
            web.get("/dnslink/{name}", handle_dnslink),
            web.get("/dnslink/{name}/{encoded_uri:.+}", handle_dnslink),
        ]
    )

    app.add_routes(
        [
            web.get("/internal/alive", handle_internal_alive),
            web.get("/internal/ready", handle_internal_ready),
        ]
    )

    app.cleanup_ctx.append(background_tasks)

    return app
