"""In-process expiring cache for raw HTTP response bodies."""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from pokedex.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    created_at: float
    value: bytes


class Cache:
    """Lock-guarded dict with a background reaper thread.

    The reaper wakes every ``interval`` seconds and removes every entry older
    than ``ttl`` (which defaults to ``interval``). With the default coupling an
    entry lives at least ``interval`` and at most ``2 * interval`` seconds.
    Reads never check age, so an entry past its ttl is still returned until
    the next sweep removes it.

    Usage:
        cache = Cache(interval=5)

        body, found = cache.get(url)
        if not found:
            body = fetch(url)
            cache.add(url, body)

        cache.close()
    """

    def __init__(
        self,
        interval: float,
        ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Create an empty cache and start its reaper.

        Args:
            interval: Seconds between sweeps
            ttl: Maximum entry age in seconds (defaults to interval)
            clock: Source of entry timestamps; sweep scheduling always uses
                the real monotonic clock
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval!r}")
        if ttl is not None and ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl!r}")

        self._interval = interval
        self._ttl = ttl if ttl is not None else interval
        self._clock = clock
        self._store: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._stop = threading.Event()

        self._reaper = threading.Thread(
            target=self._reap_loop, name="cache-reaper", daemon=True
        )
        self._reaper.start()
        logger.debug("cache_started", interval=self._interval, ttl=self._ttl)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def closed(self) -> bool:
        return self._stop.is_set()

    def add(self, key: str, value: bytes) -> None:
        with self._lock:
            self._store[key] = CacheEntry(created_at=self._clock(), value=value)

    def get(self, key: str) -> Tuple[Optional[bytes], bool]:
        with self._lock:
            entry = self._store.get(key)
        if entry is None:
            return None, False
        return entry.value, True

    def close(self, timeout: Optional[float] = None) -> None:
        """Stop the reaper and wait for it to exit. Safe to call twice.

        The store stays usable afterwards; entries just stop expiring.
        """
        if self._stop.is_set():
            return
        self._stop.set()
        if threading.current_thread() is not self._reaper:
            self._reaper.join(timeout)
        logger.debug("cache_closed", entries=len(self))

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __enter__(self) -> "Cache":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def _reap_loop(self) -> None:
        # Fixed-rate ticks; a tick missed behind a slow sweep is dropped
        next_tick = time.monotonic() + self._interval
        while not self._stop.wait(max(0.0, next_tick - time.monotonic())):
            self._sweep()
            next_tick += self._interval
            now = time.monotonic()
            if next_tick <= now:
                next_tick = now + self._interval

    def _sweep(self) -> int:
        """Remove every entry older than ttl. Returns how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [
                key
                for key, entry in self._store.items()
                if now - entry.created_at > self._ttl
            ]
            for key in expired:
                del self._store[key]
            remaining = len(self._store)

        if expired:
            logger.debug("cache_swept", removed=len(expired), remaining=remaining)
        return len(expired)
