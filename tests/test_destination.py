"""
Tests for destination normalization and liveness strategies.
"""
import asyncio
import socket

import httpx
import pytest

from shortlink_app.exceptions import InvalidDestination
from shortlink_app.liveness.factory import LivenessBackend, LivenessFactory
from shortlink_app.liveness.strategies import (
    DNSLivenessChecker,
    HTTPLivenessChecker,
    NullLivenessChecker,
)
from shortlink_app.services.destination import DestinationNormalizer, with_scheme
from conftest import StubLiveness


class TestSchemeInference:
    """Test scheme prefixing"""

    @pytest.mark.parametrize("raw, expected", [
        ("example.com", "https://example.com"),
        ("  example.com/path?q=1  ", "https://example.com/path?q=1"),
        ("http://example.com", "http://example.com"),
        ("https://example.com", "https://example.com"),
        ("ftp://files.example.com", "ftp://files.example.com"),
        ("HTTP://example.com", "HTTP://example.com"),
    ])
    def test_with_scheme(self, raw, expected):
        assert with_scheme(raw) == expected


class TestDestinationNormalizer:
    def test_normalizes_and_checks(self):
        liveness = StubLiveness()
        normalizer = DestinationNormalizer(liveness)

        url = asyncio.run(normalizer.normalize("example.com"))

        assert url == "https://example.com"
        assert liveness.checked == ["https://example.com"]

    def test_dead_host_rejected(self):
        normalizer = DestinationNormalizer(StubLiveness(dead_hosts={"dead.example"}))

        with pytest.raises(InvalidDestination):
            asyncio.run(normalizer.normalize("dead.example/page"))

    @pytest.mark.parametrize("raw", ["", "   ", "https://", "http://[::1", "[example.com"])
    def test_empty_or_hostless_rejected(self, raw):
        normalizer = DestinationNormalizer(NullLivenessChecker())

        with pytest.raises(InvalidDestination):
            asyncio.run(normalizer.normalize(raw))


class FakeResolverDNS(DNSLivenessChecker):
    def __init__(self, error=None):
        super().__init__(timeout=1.0)
        self.error = error

    async def _resolve(self, host):
        if self.error:
            raise self.error
        return [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("93.184.216.34", 0))]


class TestDNSLivenessChecker:
    def test_resolvable_host(self):
        assert asyncio.run(FakeResolverDNS().is_alive("https://example.com")) is True

    def test_unresolvable_host(self):
        checker = FakeResolverDNS(error=socket.gaierror(-2, "Name or service not known"))
        assert asyncio.run(checker.is_alive("https://nope.invalid")) is False

    def test_timeout_counts_as_dead(self):
        checker = FakeResolverDNS(error=asyncio.TimeoutError())
        assert asyncio.run(checker.is_alive("https://slow.example")) is False

    def test_url_without_host(self):
        assert asyncio.run(DNSLivenessChecker().is_alive("https://")) is False

    def test_malformed_host(self):
        assert asyncio.run(FakeResolverDNS().is_alive("http://[::1")) is False


class TestHTTPLivenessChecker:
    def test_any_response_is_alive(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(404))
        checker = HTTPLivenessChecker(transport=transport)

        assert asyncio.run(checker.is_alive("https://example.com")) is True

    def test_transport_error_is_dead(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        checker = HTTPLivenessChecker(transport=httpx.MockTransport(handler))

        assert asyncio.run(checker.is_alive("https://example.com")) is False


class TestLivenessFactory:
    def setup_method(self):
        LivenessFactory.clear_instance()

    def teardown_method(self):
        LivenessFactory.clear_instance()

    def test_creates_null_checker(self):
        assert isinstance(LivenessFactory.create(LivenessBackend.NULL), NullLivenessChecker)

    def test_creates_dns_checker(self):
        assert isinstance(LivenessFactory.create(LivenessBackend.DNS), DNSLivenessChecker)

    def test_returns_cached_instance(self):
        first = LivenessFactory.create(LivenessBackend.HTTP)
        assert LivenessFactory.create(LivenessBackend.NULL) is first
