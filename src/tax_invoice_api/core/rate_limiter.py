"""Fixed-window rate limiting keyed by client identifier.

Counting is done by the ``limits`` fixed-window strategy (the engine under
slowapi). Every request increments the key's counter, including rejected
ones, and is allowed while the count stays within the limit. Counters live
in a ``limits`` storage owned by the limiter; the default ``MemoryStorage``
drops keys once their window has expired, and tests can pass their own
storage for isolated state.
"""

import threading
import time
from dataclasses import dataclass
from typing import Optional

from limits import RateLimitItemPerSecond, strategies
from limits.storage import MemoryStorage, Storage

from tax_invoice_api.config.constants import DEFAULT_WINDOW_MS
from tax_invoice_api.core.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class RateLimitEntry:
    """Snapshot of one client key's counter."""

    count: int
    window_reset_at: float  # unix seconds


class FixedWindowRateLimiter:
    """Fixed-window counter.

    Allows at most ``max_requests`` per key within each window of
    ``window_ms`` milliseconds (rounded up to whole seconds); the
    (max + 1)-th request in a window is rejected.
    """

    def __init__(
        self,
        max_requests: int,
        window_ms: int = DEFAULT_WINDOW_MS,
        storage: Optional[Storage] = None,
        name: str = "rate_limiter",
    ):
        """Initialize the limiter.

        Args:
            max_requests: Requests allowed per key per window
            window_ms: Window length in milliseconds
            storage: ``limits`` storage (a fresh MemoryStorage when omitted)
            name: Label used in log messages and as the key namespace
        """
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")

        self.max_requests = max_requests
        self.window_seconds = -(-window_ms // 1000)
        self.name = name
        self.storage = storage if storage is not None else MemoryStorage()
        self.item = RateLimitItemPerSecond(max_requests, self.window_seconds, namespace=name)
        self._strategy = strategies.FixedWindowRateLimiter(self.storage)
        # Serializes read-modify-write of a counter across request threads
        self._lock = threading.Lock()

        logger.info(
            f"{name} initialized: max_requests={max_requests}, window={self.window_seconds}s"
        )

    def allow(self, key: str) -> bool:
        """Count a request for ``key`` and report whether it is allowed."""
        with self._lock:
            allowed = self._strategy.hit(self.item, key)

        if not allowed:
            logger.warning(f"{self.name}: limit exceeded for key={key}", extra={"client_key": key})
        return allowed

    def peek(self, key: str) -> Optional[RateLimitEntry]:
        """Current counter for ``key`` without counting, None outside a window."""
        storage_key = self.item.key_for(key)
        with self._lock:
            count = self.storage.get(storage_key)
            if not count:
                return None
            return RateLimitEntry(count=count, window_reset_at=self.storage.get_expiry(storage_key))

    def is_exhausted(self, key: str) -> bool:
        """True when the next request for ``key`` would exceed the limit."""
        with self._lock:
            return not self._strategy.test(self.item, key)

    def retry_after_seconds(self, key: str) -> int:
        """Whole seconds until the current window for ``key`` ends."""
        with self._lock:
            stats = self._strategy.get_window_stats(self.item, key)
        if stats.remaining >= self.max_requests:
            return 0
        remaining = max(stats.reset_time - time.time(), 0)
        return int(-(-remaining // 1))

    def reset(self, key: Optional[str] = None) -> None:
        """Forget one key, or every key when ``key`` is None."""
        with self._lock:
            if key is None:
                self.storage.reset()
            else:
                self._strategy.clear(self.item, key)

    def get_state(self) -> dict:
        """Get current limiter configuration."""
        return {
            "name": self.name,
            "max_requests": self.max_requests,
            "window_seconds": self.window_seconds,
            "storage": type(self.storage).__name__,
        }
