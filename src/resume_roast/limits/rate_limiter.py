"""Fixed-window request limiters keyed by caller identity."""

from __future__ import annotations

import logging
import math
import sqlite3
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from resume_roast.config import LimitsConfig

logger = logging.getLogger(__name__)

ENDPOINTS = ("roast", "generate", "parse", "analyze")


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int
    reset_in_seconds: float

    @property
    def retry_after(self) -> int:
        """Whole seconds a rejected caller should wait."""
        return max(1, math.ceil(self.reset_in_seconds))


class RateLimiter(Protocol):
    def check(self, key: str) -> RateLimitDecision: ...

    def allow(self, key: str) -> bool: ...


class InMemoryRateLimiter:
    """Per-process fixed window: ``max_requests`` per ``window_seconds`` per key."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[int, float]] = {}  # key -> (count, reset_at)
        self._lock = threading.Lock()

    def check(self, key: str) -> RateLimitDecision:
        now = self._clock()
        with self._lock:
            expired = [k for k, (_, reset_at) in self._windows.items() if reset_at < now]
            for k in expired:
                del self._windows[k]
            record = self._windows.get(key)
            if record is None or now > record[1]:
                self._windows[key] = (1, now + self.window_seconds)
                return RateLimitDecision(True, self.max_requests - 1, self.window_seconds)
            count, reset_at = record
            if count >= self.max_requests:
                return RateLimitDecision(False, 0, reset_at - now)
            count += 1
            self._windows[key] = (count, reset_at)
            return RateLimitDecision(True, self.max_requests - count, reset_at - now)

    def allow(self, key: str) -> bool:
        return self.check(key).allowed

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()


class SQLiteRateLimiter:
    """Fixed window shared by every process pointing at the same database file."""

    def __init__(
        self,
        db_path: str | Path,
        max_requests: int,
        window_seconds: float = 60,
        *,
        scope: str = "default",
        clock: Callable[[], float] = time.time,
    ):
        self.db_path = Path(db_path)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.scope = scope
        self._clock = clock
        self._lock = threading.Lock()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path), timeout=5, isolation_level=None)
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA busy_timeout=5000")
        return conn

    def _init_db(self) -> None:
        conn = self._connect()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS rate_limit_windows (
                    scope TEXT NOT NULL,
                    client_key TEXT NOT NULL,
                    count INTEGER NOT NULL,
                    reset_at REAL NOT NULL,
                    PRIMARY KEY (scope, client_key)
                )
            """)
        finally:
            conn.close()

    def check(self, key: str) -> RateLimitDecision:
        now = self._clock()
        with self._lock:
            conn = self._connect()
            try:
                conn.execute("BEGIN IMMEDIATE")
                conn.execute("DELETE FROM rate_limit_windows WHERE reset_at < ?", (now,))
                row = conn.execute(
                    "SELECT count, reset_at FROM rate_limit_windows WHERE scope = ? AND client_key = ?",
                    (self.scope, key),
                ).fetchone()
                if row is None or now > row[1]:
                    reset_at = now + self.window_seconds
                    conn.execute(
                        """INSERT OR REPLACE INTO rate_limit_windows
                           (scope, client_key, count, reset_at) VALUES (?, ?, 1, ?)""",
                        (self.scope, key, reset_at),
                    )
                    decision = RateLimitDecision(True, self.max_requests - 1, self.window_seconds)
                elif row[0] >= self.max_requests:
                    decision = RateLimitDecision(False, 0, row[1] - now)
                else:
                    conn.execute(
                        "UPDATE rate_limit_windows SET count = count + 1 WHERE scope = ? AND client_key = ?",
                        (self.scope, key),
                    )
                    decision = RateLimitDecision(True, self.max_requests - row[0] - 1, row[1] - now)
                conn.execute("COMMIT")
            except sqlite3.Error:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
            finally:
                conn.close()
        return decision

    def allow(self, key: str) -> bool:
        return self.check(key).allowed


def build_rate_limiters(config: LimitsConfig) -> dict[str, RateLimiter]:
    """Create one limiter per endpoint from config."""
    limiters: dict[str, RateLimiter] = {}
    for endpoint in ENDPOINTS:
        max_requests = config.for_endpoint(endpoint)
        if config.backend == "sqlite":
            limiters[endpoint] = SQLiteRateLimiter(
                config.resolved_db_path,
                max_requests,
                config.window_seconds,
                scope=endpoint,
            )
        else:
            limiters[endpoint] = InMemoryRateLimiter(max_requests, config.window_seconds)
    logger.debug("Rate limiters ready (%s backend)", config.backend)
    return limiters
