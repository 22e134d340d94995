"""
Shared test configuration and fixtures for dnslink tests.

Provides a fake upstream DNS resolver, a clock for cache expiry and
resolver construction helpers used across the test files.
"""

from typing import List
from unittest.mock import AsyncMock, Mock

import pytest

from com.skynetlabs.dnslink.resolve.dnslink import Resolver
from com.skynetlabs.dnslink.resolve.txt import TxtLookupCache

SKYLINK = "AQCYCPSmSMfmZjOKLX4zoYHHTNJQW2daVgZ2PTpkASFlSA"
OTHER_SKYLINK = "AQCYCPSmSMfmZjOKLX4zoYHHTNJQW2daVgZ2PTpkASFlSB"

# The same skylink in both of its encodings.
SKYLINK_BASE64 = "XABvi7JtJbQSMAcDwnUnmp2FKDPjg8_tTTFP4BwMSxVdEg"
SKYLINK_BASE32 = "bg06v2tidkir84hg0s1s4t97jaeoaa1jse1svrad657u070c9calq4g"


def txt_results(*records: str) -> List[Mock]:
    """Build aiodns style TXT answers."""
    results = []
    for record in records:
        result = Mock()
        result.text = record
        results.append(result)
    return results


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def dns_resolver():
    """Fake aiodns resolver answering with no records until configured."""
    resolver = AsyncMock()
    resolver.query.return_value = []
    return resolver


@pytest.fixture
def txt_cache(dns_resolver, clock):
    return TxtLookupCache(resolver=dns_resolver, timer=clock)


@pytest.fixture
def resolver(txt_cache):
    return Resolver(txt_cache)
