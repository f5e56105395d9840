"""
Factory for creating liveness checker instances.
Simple factory with singleton caching.
"""

import logging
from enum import Enum
from .strategies import (
    LivenessStrategy,
    DNSLivenessChecker,
    HTTPLivenessChecker,
    NullLivenessChecker,
)
from shortlink_app.config import settings

logger = logging.getLogger(__name__)


class LivenessBackend(Enum):
    """Available liveness backends"""
    DNS = "dns"
    HTTP = "http"
    NULL = "null"


class LivenessFactory:
    """Gets configuration from settings (not passed as parameters)."""

    _instance: LivenessStrategy = None  # Single cached instance

    @classmethod
    def create(cls, backend: LivenessBackend) -> LivenessStrategy:
        """
        Create or return cached liveness checker.

        Args:
            backend: Type of liveness backend (from enum)

        Returns:
            Singleton liveness checker
        """
        if cls._instance is not None:
            return cls._instance

        if backend == LivenessBackend.DNS:
            cls._instance = DNSLivenessChecker(timeout=settings.liveness_timeout)
        elif backend == LivenessBackend.HTTP:
            cls._instance = HTTPLivenessChecker(timeout=settings.liveness_timeout)
        elif backend == LivenessBackend.NULL:
            cls._instance = NullLivenessChecker()
        else:
            raise ValueError(f"Unknown liveness backend: {backend}")

        logger.info("Liveness checker initialized: %s", backend.value)
        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
