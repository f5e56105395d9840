"""
Destination liveness checks.
Implements Strategy Pattern for swappable checkers.
"""

from .strategies import (
    LivenessStrategy,
    DNSLivenessChecker,
    HTTPLivenessChecker,
    NullLivenessChecker,
)
from .factory import LivenessFactory, LivenessBackend

__all__ = [
    "LivenessStrategy",
    "DNSLivenessChecker",
    "HTTPLivenessChecker",
    "NullLivenessChecker",
    "LivenessFactory",
    "LivenessBackend",
]
