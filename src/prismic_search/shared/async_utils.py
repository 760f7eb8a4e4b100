"""
Async helpers for backend calls.

CircuitBreaker guards the GraphQL transport: after ``failure_threshold``
failures it rejects calls for ``recovery_timeout`` seconds, then lets a few
trial calls through before closing again.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .exceptions import RateLimitError

logger = logging.getLogger(__name__)


class CircuitState(StrEnum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass
class CircuitBreaker:
    """
    Usage:
        breaker = CircuitBreaker(failure_threshold=5)
        async with breaker:
            data = await client.get(url)
    """

    failure_threshold: int = 5
    recovery_timeout: float = 30.0
    half_open_max_calls: int = 3

    _state: CircuitState = field(init=False, default=CircuitState.CLOSED)
    _failures: int = field(init=False, default=0)
    _opened_at: float = field(init=False, default=0.0)
    _trial_calls: int = field(init=False, default=0)
    _lock: asyncio.Lock = field(init=False, default_factory=asyncio.Lock)

    @property
    def state(self) -> CircuitState:
        return self._state

    def _cooling_down(self) -> bool:
        return time.monotonic() - self._opened_at <= self.recovery_timeout

    @property
    def is_open(self) -> bool:
        """True while calls are rejected outright."""
        return self._state is CircuitState.OPEN and self._cooling_down()

    async def __aenter__(self) -> CircuitBreaker:
        async with self._lock:
            if self._state is CircuitState.OPEN:
                if self._cooling_down():
                    raise RateLimitError("Circuit breaker is open", retry_after=self.recovery_timeout)
                self._state = CircuitState.HALF_OPEN
                self._trial_calls = 0

            if self._state is CircuitState.HALF_OPEN:
                if self._trial_calls >= self.half_open_max_calls:
                    raise RateLimitError(
                        "Circuit breaker is half-open (max calls reached)",
                        retry_after=self.recovery_timeout / 2,
                    )
                self._trial_calls += 1
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        async with self._lock:
            if exc_val is None:
                self._record_success()
            else:
                self._record_failure()

    def _record_success(self) -> None:
        if self._state is CircuitState.HALF_OPEN:
            logger.info("Circuit breaker closed (recovered)")
            self._state = CircuitState.CLOSED
            self._failures = 0
        else:
            self._failures = max(0, self._failures - 1)

    def _record_failure(self) -> None:
        self._failures += 1
        self._opened_at = time.monotonic()
        if self._failures >= self.failure_threshold and self._state is not CircuitState.OPEN:
            logger.warning(f"Circuit breaker opened after {self._failures} failures")
            self._state = CircuitState.OPEN
