"""
Shared clients for hosted-service communication.

Centralized HTTP clients with retry/circuit breaker.
"""

from .base import BaseServiceClient, CircuitBreaker, CircuitOpenError, CircuitState

__all__ = [
    "BaseServiceClient",
    "CircuitBreaker",
    "CircuitOpenError",
    "CircuitState",
]
