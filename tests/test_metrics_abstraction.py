"""
Unit Tests for the Metrics Abstraction Layer

Tests the metrics clients and the backend factory function.
"""

import pytest
from unittest.mock import AsyncMock, Mock, patch

from com.skynetlabs.dnslink.app.metrics import (
    MetricsClient,
    NoOpMetricsClient,
    TelegrafMetricsClient,
    create_metrics_client,
)


class TestMetricsClientInterface:
    """Test the abstract MetricsClient interface."""

    def test_interface_is_abstract(self):
        """MetricsClient should be abstract and not instantiable."""
        with pytest.raises(TypeError):
            MetricsClient()


class TestNoOpMetricsClient:
    """Test the NoOpMetricsClient implementation."""

    @pytest.fixture
    def noop_client(self):
        return NoOpMetricsClient()

    def test_noop_operations(self, noop_client):
        """NoOp operations should not raise exceptions."""
        noop_client.increment("cache.hit", 1, {"tag": "value"})
        noop_client.increment("cache.hit")
        noop_client.gauge("cache.size", 42)
        noop_client.timer("server.request.time", 0.001)

    @pytest.mark.asyncio
    async def test_noop_lifecycle(self, noop_client):
        await noop_client.connect()
        await noop_client.close()


class TestTelegrafMetricsClient:
    """Test the aio-statsd backed client."""

    @pytest.fixture
    def mock_telegraf_client(self):
        mock = Mock()
        mock.connect = AsyncMock()
        mock.close = AsyncMock()
        return mock

    def test_prefixes_metric_names(self, mock_telegraf_client):
        client = TelegrafMetricsClient(mock_telegraf_client, prefix="dnslink")

        client.increment("cache.hit", 1, {"kind": "a"})
        client.gauge("cache.size", 5)
        client.timer("server.request.time", 0.5)

        mock_telegraf_client.increment.assert_called_once_with(
            "dnslink.cache.hit", 1, tag_dict={"kind": "a"}
        )
        mock_telegraf_client.gauge.assert_called_once_with(
            "dnslink.cache.size", 5, tag_dict={}
        )
        mock_telegraf_client.timer.assert_called_once_with(
            "dnslink.server.request.time", 0.5, tag_dict={}
        )

    def test_empty_prefix(self, mock_telegraf_client):
        client = TelegrafMetricsClient(mock_telegraf_client, prefix="")
        client.increment("cache.hit")
        mock_telegraf_client.increment.assert_called_once_with(
            "cache.hit", 1, tag_dict={}
        )

    @pytest.mark.asyncio
    async def test_lifecycle(self, mock_telegraf_client):
        client = TelegrafMetricsClient(mock_telegraf_client)
        await client.connect()
        await client.close()
        mock_telegraf_client.connect.assert_awaited_once()
        mock_telegraf_client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_errors_are_logged(self, mock_telegraf_client):
        mock_telegraf_client.close.side_effect = OSError("socket closed")
        client = TelegrafMetricsClient(mock_telegraf_client)
        await client.close()


class TestCreateMetricsClient:
    """Test backend selection."""

    def test_none_backend(self):
        assert isinstance(create_metrics_client("none"), NoOpMetricsClient)
        assert isinstance(create_metrics_client("NONE"), NoOpMetricsClient)

    def test_telegraf_backend_with_client(self):
        telegraf_client = Mock()
        client = create_metrics_client("telegraf", telegraf_client=telegraf_client)
        assert isinstance(client, TelegrafMetricsClient)
        assert client.client is telegraf_client

    @patch("com.skynetlabs.dnslink.app.metrics.TelegrafStatsdClient")
    def test_telegraf_backend_creates_client(self, mock_statsd_class):
        client = create_metrics_client(
            "telegraf", host="telegraf", port=8125, prefix="dns"
        )
        mock_statsd_class.assert_called_once_with(host="telegraf", port=8125, debug=False)
        assert client.prefix == "dns"

    def test_invalid_backend(self):
        with pytest.raises(ValueError):
            create_metrics_client("otel")
