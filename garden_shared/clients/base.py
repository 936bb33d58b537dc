"""
Resilient async HTTP client for the hosted services.

The Pinecone client and the generative model providers subclass
``BaseServiceClient``. Transport failures are retried with exponential
backoff, and a per-client circuit breaker stops calling a service that
keeps failing.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (TimeoutError, httpx.TransportError)


class CircuitState(Enum):
    CLOSED = "closed"  # calls go through
    OPEN = "open"  # calls refused
    HALF_OPEN = "half_open"  # next call is a probe


class CircuitOpenError(RuntimeError):
    """The service failed too often recently and is not being called."""


@dataclass
class CircuitBreaker:
    """
    Tracks consecutive failures of one service.

    After ``failure_threshold`` failures the circuit opens and calls are
    refused for ``recovery_timeout`` seconds. The first call after that is a
    probe: success closes the circuit, failure opens it again.
    """

    failure_threshold: int = 5
    recovery_timeout: float = 30.0
    clock: Callable[[], float] = time.monotonic

    state: CircuitState = field(default=CircuitState.CLOSED, init=False)
    failures: int = field(default=0, init=False)
    opened_at: float = field(default=0.0, init=False)

    def should_allow_request(self) -> bool:
        if self.state is CircuitState.OPEN and self.clock() - self.opened_at >= self.recovery_timeout:
            self.state = CircuitState.HALF_OPEN
            logger.info("Circuit half-open, probing service")
        return self.state is not CircuitState.OPEN

    def record_success(self) -> None:
        self.failures = 0
        self.state = CircuitState.CLOSED

    def record_failure(self) -> None:
        self.failures += 1
        if self.state is CircuitState.HALF_OPEN or self.failures >= self.failure_threshold:
            if self.state is not CircuitState.OPEN:
                logger.warning("Circuit opened after %d consecutive failures", self.failures)
            self.state = CircuitState.OPEN
            self.opened_at = self.clock()


class BaseServiceClient:
    """
    Async HTTP client for one hosted service.

    Args:
        base_url: Service root. Relative paths are joined onto it; absolute
            URLs are sent as they are.
        service_name: Name used in logs and circuit errors
        timeout: Per-request timeout in seconds
        max_retries: Attempts per request, including the first
        retry_delay: Backoff before the second attempt, doubled each time
        headers: Sent with every request, typically the API key
        transport: httpx transport override, used by tests
    """

    def __init__(
        self,
        base_url: str,
        service_name: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 0.5,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.service_name = service_name
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.circuit_breaker = CircuitBreaker()
        self._client_options: dict[str, Any] = {
            "base_url": self.base_url,
            "timeout": timeout,
            "headers": dict(headers or {}),
            "transport": transport,
        }
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(**self._client_options)
        return self._client

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self.client.request(method, path, **kwargs)
        except RETRYABLE_ERRORS:
            self.circuit_breaker.record_failure()
            raise

        if response.status_code >= 500:
            self.circuit_breaker.record_failure()
        else:
            self.circuit_breaker.record_success()
        return response

    async def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """
        Send a request, retrying transport failures.

        Error statuses are returned rather than raised; callers decide with
        ``raise_for_status``. 5xx answers still count against the circuit.

        Raises:
            CircuitOpenError: The circuit is open
            httpx.TransportError: No attempt reached the service
        """
        if not self.circuit_breaker.should_allow_request():
            raise CircuitOpenError(f"{self.service_name} circuit is open")

        for attempt in range(1, self.max_retries):
            try:
                return await self._send(method, path, **kwargs)
            except RETRYABLE_ERRORS as e:
                delay = self.retry_delay * 2 ** (attempt - 1)
                logger.warning(
                    "%s attempt %d/%d failed: %s; retrying in %.1fs",
                    self.service_name,
                    attempt,
                    self.max_retries,
                    e,
                    delay,
                )
                await asyncio.sleep(delay)

        try:
            return await self._send(method, path, **kwargs)
        except RETRYABLE_ERRORS as e:
            logger.error("%s unreachable after %d attempts: %s", self.service_name, self.max_retries, e)
            raise

    async def get(self, path: str, **kwargs) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> httpx.Response:
        return await self.request("POST", path, **kwargs)

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
