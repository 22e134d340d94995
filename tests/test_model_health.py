"""
Unit tests for the upstream health gauge and its background task.
"""

import asyncio

import pytest
from unittest.mock import Mock, patch

from com.skynetlabs.dnslink.app.config import (
    HealthGaugeAppKey,
    MetricsClientAppKey,
    ResolverAppKey,
)
from com.skynetlabs.dnslink.app.tasks import tick_health_task
from com.skynetlabs.dnslink.model.health import UpstreamHealthGauge


class TestUpstreamHealthGauge:
    """Test suite for UpstreamHealthGauge."""

    @pytest.mark.asyncio
    async def test_healthy_by_default(self):
        gauge = UpstreamHealthGauge()
        assert await gauge.is_healthy()
        assert gauge.failures == 0

    @pytest.mark.asyncio
    async def test_burst_of_failures(self):
        gauge = UpstreamHealthGauge(failure_threshold=2)
        await gauge.record_failure()
        await gauge.record_failure()
        assert await gauge.is_healthy()

        assert await gauge.record_failure() == 3
        assert not await gauge.is_healthy()

    @pytest.mark.asyncio
    async def test_tick_decays_failures(self):
        gauge = UpstreamHealthGauge(failures=3, failure_threshold=2)
        await gauge.tick()
        assert gauge.failures == 2
        assert await gauge.is_healthy()

    @pytest.mark.asyncio
    async def test_tick_stops_at_zero(self):
        gauge = UpstreamHealthGauge()
        await gauge.tick()
        assert gauge.failures == 0


class TestTickHealthTask:
    """Test suite for the background tick task."""

    @pytest.mark.asyncio
    async def test_ticks_and_reports(self):
        gauge = UpstreamHealthGauge(failures=2)
        metrics_client = Mock()
        resolver = Mock()
        resolver.txt_cache = [1, 2, 3]
        app = {
            HealthGaugeAppKey: gauge,
            MetricsClientAppKey: metrics_client,
            ResolverAppKey: resolver,
        }

        with patch("com.skynetlabs.dnslink.app.tasks.TICK_INTERVAL", 0):
            task = asyncio.create_task(tick_health_task(app))
            while gauge.failures > 0:
                await asyncio.sleep(0)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        metrics_client.gauge.assert_any_call("cache.size", 3)
