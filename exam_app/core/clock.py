"""Countdown clock used to time an attempt.

The clock owns no timer of its own. A driver (a ``QTimer`` in the Qt client,
a loop in tests) calls :meth:`CountdownClock.poll` frequently; the clock turns
those polls into at most one ``on_tick`` per elapsed second. Remaining time
is always derived from a monotonic deadline, so when polls are delayed or
coalesced (suspended window, busy event loop) the next tick reports the
authoritative remaining value instead of assuming exactly one second passed.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Callable

logger = logging.getLogger(__name__)

TickCallback = Callable[[int], None]
ExpireCallback = Callable[[], None]


class CountdownClock:
    """Monotonic countdown that reports whole seconds remaining."""

    def __init__(
        self,
        on_tick: TickCallback | None = None,
        on_expire: ExpireCallback | None = None,
        *,
        time_source: Callable[[], float] = time.monotonic,
    ) -> None:
        self._on_tick = on_tick
        self._on_expire = on_expire
        self._time_source = time_source
        self._deadline: float | None = None
        self._remaining: int | None = None
        self._active: bool = False
        self._expired: bool = False
        self._dispatching: bool = False

    def start(self, total_seconds: int) -> None:
        """Begin counting down from ``total_seconds``; restarts a stopped clock."""
        if total_seconds < 0:
            raise ValueError("Countdown length cannot be negative.")
        self._deadline = self._time_source() + total_seconds
        self._remaining = total_seconds
        self._expired = False
        self._active = True
        logger.debug("Clock started with %s seconds", total_seconds)

    def stop(self) -> None:
        """Halt future ticks. Safe before start, after expiry and when repeated."""
        self._active = False

    def poll(self) -> None:
        """Fire ``on_tick`` if the whole-second remaining value dropped since the last tick."""
        if not self._active or self._dispatching or self._deadline is None:
            return
        remaining = max(0, math.ceil(self._deadline - self._time_source()))
        if self._remaining is not None and remaining >= self._remaining and remaining > 0:
            return
        if remaining == 0:
            self._active = False
        self._remaining = remaining
        self._dispatching = True
        try:
            if self._on_tick is not None:
                self._on_tick(remaining)
            if remaining == 0 and not self._expired:
                self._expired = True
                logger.debug("Clock expired")
                if self._on_expire is not None:
                    self._on_expire()
        finally:
            self._dispatching = False

    @property
    def remaining(self) -> int | None:
        return self._remaining

    def is_active(self) -> bool:
        return self._active

    def is_expired(self) -> bool:
        return self._expired
