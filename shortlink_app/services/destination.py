"""
Destination URL normalization.
"""

import logging
from typing import Optional
from urllib.parse import urlparse

from shortlink_app.exceptions import InvalidDestination
from shortlink_app.liveness.strategies import LivenessStrategy, NullLivenessChecker

logger = logging.getLogger(__name__)


KNOWN_SCHEMES = ("http://", "https://", "ftp://")
DEFAULT_SCHEME = "https://"


def with_scheme(raw_url: str) -> str:
    """Prepend ``https://`` unless the URL already starts with a known scheme"""
    url = raw_url.strip()
    if not url.lower().startswith(KNOWN_SCHEMES):
        url = DEFAULT_SCHEME + url
    return url


class DestinationNormalizer:
    def __init__(self, liveness: Optional[LivenessStrategy] = None):
        self.liveness = liveness or NullLivenessChecker()

    async def normalize(self, raw_url: str) -> str:
        """
        Canonicalize and liveness-check a submitted URL.

        Raises:
            InvalidDestination: empty input, no host, or failed liveness check
        """
        if not raw_url or not raw_url.strip():
            raise InvalidDestination("Original URL is required")

        url = with_scheme(raw_url)
        try:
            host = urlparse(url).hostname
        except ValueError:
            # Unbalanced brackets in the host
            raise InvalidDestination(f"Original URL is malformed: {raw_url}")
        if not host:
            raise InvalidDestination(f"Original URL has no host: {raw_url}")

        if not await self.liveness.is_alive(url):
            logger.info("Rejected destination %s: liveness check failed", url)
            raise InvalidDestination()

        return url
