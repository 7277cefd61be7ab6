"""Client-side rate limiting for the Coda API.

Coda applies separate quotas to reads (GET) and writes (everything else), so
the limiter keeps one sliding window per request class. A window holds the
timestamps of recent requests; a slot is free while fewer than `capacity`
timestamps fall inside the trailing `duration_ms`.
"""

import asyncio
import logging
import threading
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Deque, Dict, Optional

class RequestClass(str, Enum):
    READ = "read"
    WRITE = "write"

    @classmethod
    def for_method(cls, method: str) -> "RequestClass":
        """GET is a read; every other HTTP method counts against the write quota."""
        return cls.READ if method.upper() == "GET" else cls.WRITE


@dataclass(frozen=True)
class WindowLimit:
    capacity: int
    duration_ms: int


READ_LIMIT = WindowLimit(capacity=100, duration_ms=6000)
WRITE_LIMIT = WindowLimit(capacity=10, duration_ms=6000)
POLL_INTERVAL_MS = 100


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class _RateWindow:
    """Timestamps of recent requests for one request class, oldest first."""

    def __init__(self, limit: WindowLimit):
        self.limit = limit
        self.timestamps: Deque[float] = deque()
        # Guards purge + check + record; never held across an await.
        self.lock = threading.Lock()

    def _purge(self, now: float) -> None:
        cutoff = now - self.limit.duration_ms
        while self.timestamps and self.timestamps[0] < cutoff:
            self.timestamps.popleft()

    def try_reserve(self, now: float) -> bool:
        with self.lock:
            self._purge(now)
            if len(self.timestamps) < self.limit.capacity:
                self.timestamps.append(now)
                return True
            return False

    def usage(self, now: float) -> int:
        with self.lock:
            self._purge(now)
            return len(self.timestamps)


class RateLimiter:
    """
    Dual sliding-window limiter shared by every request a CodaClient makes.

    acquire() suspends the caller until its window has a free slot, then
    records the request. There is no release; slots age out of the window.
    The limiter never raises.

    Args:
        read_limit: Capacity and duration of the read window
        write_limit: Capacity and duration of the write window
        poll_interval_ms: How long a blocked caller sleeps between checks
        clock: Returns the current time in milliseconds
        sleep: Coroutine function taking seconds, used while waiting
        logger: Logger for wait diagnostics
    """

    def __init__(
        self,
        read_limit: WindowLimit = READ_LIMIT,
        write_limit: WindowLimit = WRITE_LIMIT,
        poll_interval_ms: int = POLL_INTERVAL_MS,
        clock: Callable[[], float] = _monotonic_ms,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: Optional[logging.Logger] = None,
    ):
        self._windows: Dict[RequestClass, _RateWindow] = {
            RequestClass.READ: _RateWindow(read_limit),
            RequestClass.WRITE: _RateWindow(write_limit),
        }
        self._poll_interval_ms = poll_interval_ms
        self._clock = clock
        self._sleep = sleep
        self._logger = logger or logging.getLogger(__name__)

    async def acquire(self, request_class: RequestClass) -> None:
        """Wait for and reserve one slot in the window for `request_class`."""
        window = self._windows[request_class]
        waited_since = None
        while not window.try_reserve(self._clock()):
            if waited_since is None:
                waited_since = self._clock()
                self._logger.debug(
                    f"{request_class.value} window full ({window.limit.capacity} per "
                    f"{window.limit.duration_ms}ms), waiting for a slot"
                )
            await self._sleep(self._poll_interval_ms / 1000)
        if waited_since is not None:
            self._logger.debug(
                f"Acquired {request_class.value} slot after {self._clock() - waited_since:.0f}ms"
            )

    def usage(self, request_class: RequestClass) -> int:
        """Number of requests currently counted in the window."""
        return self._windows[request_class].usage(self._clock())

    def limit(self, request_class: RequestClass) -> WindowLimit:
        return self._windows[request_class].limit
