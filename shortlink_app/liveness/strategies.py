"""
Destination liveness strategies using Strategy Pattern.
Allows switching between DNS resolution, an HTTP probe, or no check at all.

A check only runs when a short URL is created. It rejects obviously dead
targets; it does not promise the host stays reachable later.
"""

import asyncio
import logging
import socket
from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import urlparse

import httpx

logger = logging.getLogger(__name__)


class LivenessStrategy(ABC):
    """
    Abstract base class for liveness checks.

    Async because every real implementation does network I/O.
    """

    @abstractmethod
    async def is_alive(self, url: str) -> bool:
        """
        Check whether the destination looks reachable.

        Args:
            url: Normalized absolute URL

        Returns:
            True if the destination passed the check
        """
        pass


class DNSLivenessChecker(LivenessStrategy):
    """
    Resolve the URL's host name.

    Uses the event loop's resolver so the request isn't blocked while the
    lookup runs. A transient DNS failure rejects the URL.
    """

    def __init__(self, timeout: float = 3.0):
        self.timeout = timeout

    async def is_alive(self, url: str) -> bool:
        try:
            host = urlparse(url).hostname
        except ValueError:
            return False
        if not host:
            return False

        try:
            await asyncio.wait_for(self._resolve(host), timeout=self.timeout)
            return True
        except (socket.gaierror, asyncio.TimeoutError, UnicodeError) as e:
            logger.info("DNS lookup failed for %s: %s", host, e)
            return False

    async def _resolve(self, host: str):
        loop = asyncio.get_running_loop()
        return await loop.getaddrinfo(host, None)


class HTTPLivenessChecker(LivenessStrategy):
    """
    Send a HEAD request to the destination.

    Any HTTP response (including 4xx/5xx) means a server answered; only
    transport errors count as dead.
    """

    def __init__(self, timeout: float = 3.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.timeout = timeout
        self.transport = transport

    async def is_alive(self, url: str) -> bool:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=False,
                transport=self.transport,
            ) as client:
                await client.head(url)
            return True
        except httpx.HTTPError as e:
            logger.info("HTTP probe failed for %s: %s", url, e)
            return False


class NullLivenessChecker(LivenessStrategy):
    """
    Null Object Pattern - accepts every destination.

    Used for tests and deployments without outbound network access.
    """

    async def is_alive(self, url: str) -> bool:
        return True
