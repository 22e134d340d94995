"""
Configuration Module for the Dnslink API Service

This module defines the configuration system for the dnslink API service, using Pydantic
for settings validation and dependency injection through AppKeys.

The Settings class serves as the central configuration point, loaded from environment
variables with defaults suitable for development environments. All application components
access settings and shared resources through typed AppKeys.

Key configuration areas include:
- Networking of the HTTP listener
- TXT lookup cache sizing and time to live
- Upstream DNS resolver options
- Monitoring and error reporting
"""

import asyncio
from typing import Annotated, Any, Dict, Final, List, Optional
import logging
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from aiohttp import web

from com.skynetlabs.dnslink.app.metrics import MetricsClient
from com.skynetlabs.dnslink.model.health import UpstreamHealthGauge
from com.skynetlabs.dnslink.resolve.dnslink import Resolver


logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings for the dnslink API service.

    Values are loaded from environment variables. Field aliases keep the environment
    variable names used by existing deployments, e.g. DNSLINK_CACHE_SIZE.
    """

    model_config = SettingsConfigDict(populate_by_name=True)

    debug: bool = False
    """
    Enable debug mode for verbose logging.
    Set with DEBUG=true environment variable.
    """

    http_host: str = Field(alias="DNSLINK_API_HOSTNAME", default="0.0.0.0")
    """
    Address for the HTTP listener.
    Set with DNSLINK_API_HOSTNAME environment variable.
    """

    http_port: int = Field(alias="DNSLINK_API_PORT", default=3100)
    """
    HTTP port for the service to listen on.
    Set with DNSLINK_API_PORT environment variable.
    """

    cache_size: int = Field(alias="DNSLINK_CACHE_SIZE", default=5000)
    """
    Maximum number of TXT lookups held in the cache.
    Set with DNSLINK_CACHE_SIZE environment variable.
    Default: 5000
    """

    cache_time: int = Field(alias="DNSLINK_CACHE_TIME", default=1000 * 60 * 5)
    """
    Time to live of a cached TXT lookup in milliseconds.
    Set with DNSLINK_CACHE_TIME environment variable.
    Default: 300000 (5 minutes)
    """

    dns_nameservers: Annotated[List[str], NoDecode] = Field(
        alias="DNSLINK_DNS_NAMESERVERS", default_factory=list
    )
    """
    Nameservers to send TXT queries to, the system resolvers when empty.
    Set with DNSLINK_DNS_NAMESERVERS environment variable as comma-separated values.
    """

    dns_timeout: Optional[float] = Field(alias="DNSLINK_DNS_TIMEOUT", default=None)
    """Seconds before an upstream query attempt times out. Set with DNSLINK_DNS_TIMEOUT."""

    dns_tries: Optional[int] = Field(alias="DNSLINK_DNS_TRIES", default=None)
    """Number of attempts per upstream query. Set with DNSLINK_DNS_TRIES."""

    # Monitoring and error reporting
    sentry_dsn: Optional[str] = None
    """
    Sentry DSN for error reporting. Optional, no error reporting if not set.
    Set with SENTRY_DSN environment variable.
    """

    metrics_backend: str = "none"
    """
    Metrics backend, either "telegraf" or "none".
    Set with METRICS_BACKEND environment variable.
    """

    statsd_host: str = Field(alias="TELEGRAF_HOST", default="telegraf")
    """
    StatsD/Telegraf host for metrics collection.
    Set with TELEGRAF_HOST environment variable.
    """

    statsd_port: int = Field(alias="TELEGRAF_PORT", default=8125)
    """
    StatsD/Telegraf port for metrics collection.
    Set with TELEGRAF_PORT environment variable.
    """

    statsd_prefix: str = "dnslink"
    """
    Prefix for all StatsD metrics from this service.
    Set with STATSD_PREFIX environment variable.
    """

    @field_validator("dns_nameservers", mode="before")
    @classmethod
    def split_dns_nameservers(cls, v) -> List[str]:
        """
        Accept either a list of nameservers or a comma-separated string.
        """
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("cache_size")
    @classmethod
    def check_cache_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("cache_size must be a positive number of entries")
        return v

    @field_validator("cache_time")
    @classmethod
    def check_cache_time(cls, v: int) -> int:
        if v < 0:
            raise ValueError("cache_time must not be negative")
        return v

    def resolver_options(self) -> Dict[str, Any]:
        """Keyword arguments for the aiodns resolver."""
        options: Dict[str, Any] = {}
        if self.dns_nameservers:
            options["nameservers"] = self.dns_nameservers
        if self.dns_timeout is not None:
            options["timeout"] = self.dns_timeout
        if self.dns_tries is not None:
            options["tries"] = self.dns_tries
        return options


# Application context keys for dependency injection
SettingsAppKey: Final = web.AppKey("settings", Settings)
"""AppKey for accessing the application settings"""

ResolverAppKey: Final = web.AppKey("resolver", Resolver)
"""AppKey for accessing the dnslink resolver and its TXT cache"""

HealthGaugeAppKey: Final = web.AppKey("health_gauge", UpstreamHealthGauge)
"""AppKey for accessing the upstream DNS health gauge"""

MetricsClientAppKey: Final = web.AppKey("metrics_client", MetricsClient)
"""AppKey for accessing the metrics client"""

TickHealthTaskAppKey: Final = web.AppKey("tick_health_task", asyncio.Task[None])
"""AppKey for the background task that decays the health gauge"""
