"""Spacing policy for calls to third-party services."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RequestPacer:
    """Keeps successive external calls at least ``delay_seconds`` apart.

    The first call goes through immediately. ``clock`` and ``sleep`` are
    injectable so tests can run without real waiting.
    """

    def __init__(
        self,
        delay_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be non-negative.")
        self.delay_seconds = delay_seconds
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None

    def wait(self) -> None:
        now = self._clock()
        if self._last_call is not None:
            remaining = self.delay_seconds - (now - self._last_call)
            if remaining > 0:
                logger.debug(f"Pacing external call, sleeping {remaining:.3f}s")
                self._sleep(remaining)
                now = self._clock()
        self._last_call = now


class NoPacing(RequestPacer):
    def __init__(self) -> None:
        super().__init__(0.0)

    def wait(self) -> None:
        return None
