"""Tests for fixed-window rate limiters."""

import sqlite3

import pytest

from resume_roast.config import LimitsConfig
from resume_roast.limits.rate_limiter import (
    InMemoryRateLimiter,
    RateLimitDecision,
    SQLiteRateLimiter,
    build_rate_limiters,
)


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture(params=["memory", "sqlite"])
def make_limiter(request, tmp_path):
    def factory(max_requests: int, window: float, clock: FakeClock):
        if request.param == "memory":
            return InMemoryRateLimiter(max_requests, window, clock=clock)
        return SQLiteRateLimiter(tmp_path / "limits.db", max_requests, window, clock=clock)

    return factory


class TestFixedWindow:
    def test_allows_up_to_limit(self, make_limiter):
        limiter = make_limiter(3, 60, FakeClock())
        results = [limiter.allow("1.2.3.4") for _ in range(4)]
        assert results == [True, True, True, False]

    def test_remaining_counts_down(self, make_limiter):
        limiter = make_limiter(3, 60, FakeClock())
        assert [limiter.check("k").remaining for _ in range(3)] == [2, 1, 0]

    def test_keys_are_independent(self, make_limiter):
        limiter = make_limiter(1, 60, FakeClock())
        assert limiter.allow("a")
        assert not limiter.allow("a")
        assert limiter.allow("b")

    def test_window_resets(self, make_limiter):
        clock = FakeClock(1000.0)
        limiter = make_limiter(2, 60, clock)
        assert limiter.allow("k")
        assert limiter.allow("k")
        assert not limiter.allow("k")

        clock.now += 61
        assert limiter.allow("k")

    def test_rejection_reports_wait(self, make_limiter):
        clock = FakeClock(500.0)
        limiter = make_limiter(1, 60, clock)
        limiter.check("k")
        clock.now += 20.5
        decision = limiter.check("k")
        assert not decision.allowed
        assert decision.reset_in_seconds == pytest.approx(39.5)
        assert decision.retry_after == 40

    def test_limit_of_ten_per_minute(self, make_limiter):
        clock = FakeClock()
        limiter = make_limiter(10, 60, clock)
        allowed = [limiter.allow("203.0.113.7") for _ in range(11)]
        assert allowed.count(True) == 10
        assert allowed[-1] is False


class TestDecision:
    def test_retry_after_at_least_one(self):
        assert RateLimitDecision(False, 0, 0.01).retry_after == 1
        assert RateLimitDecision(False, 0, 12.2).retry_after == 13


class TestInMemory:
    def test_reset_clears_windows(self):
        limiter = InMemoryRateLimiter(1, 60, clock=FakeClock())
        limiter.allow("k")
        limiter.reset()
        assert limiter.allow("k")

    def test_expired_keys_are_dropped(self):
        clock = FakeClock(1000.0)
        limiter = InMemoryRateLimiter(5, 60, clock=clock)
        limiter.allow("a")
        clock.now += 61
        limiter.allow("b")
        assert "a" not in limiter._windows
        assert set(limiter._windows) == {"b"}

    def test_many_one_off_keys_do_not_accumulate(self):
        clock = FakeClock()
        limiter = InMemoryRateLimiter(5, 60, clock=clock)
        for i in range(100):
            limiter.allow(f"10.0.0.{i}")
            clock.now += 61
        assert len(limiter._windows) == 1

    def test_live_windows_survive_pruning(self):
        clock = FakeClock(1000.0)
        limiter = InMemoryRateLimiter(1, 60, clock=clock)
        limiter.allow("a")
        clock.now += 30
        limiter.allow("b")
        assert not limiter.allow("a")


class TestSQLite:
    def test_state_shared_across_instances(self, tmp_path):
        clock = FakeClock(100.0)
        db = tmp_path / "shared.db"
        first = SQLiteRateLimiter(db, 2, 60, clock=clock)
        second = SQLiteRateLimiter(db, 2, 60, clock=clock)
        assert first.allow("k")
        assert second.allow("k")
        assert not first.allow("k")

    def test_scopes_are_separate(self, tmp_path):
        clock = FakeClock(100.0)
        db = tmp_path / "shared.db"
        roast = SQLiteRateLimiter(db, 1, 60, scope="roast", clock=clock)
        generate = SQLiteRateLimiter(db, 1, 60, scope="generate", clock=clock)
        assert roast.allow("k")
        assert generate.allow("k")
        assert not roast.allow("k")

    def test_expired_rows_are_deleted(self, tmp_path):
        clock = FakeClock(1000.0)
        db = tmp_path / "limits.db"
        limiter = SQLiteRateLimiter(db, 5, 60, clock=clock)
        limiter.allow("a")
        clock.now += 61
        limiter.allow("b")

        conn = sqlite3.connect(str(db))
        try:
            keys = [row[0] for row in conn.execute("SELECT client_key FROM rate_limit_windows")]
        finally:
            conn.close()
        assert keys == ["b"]


class TestBuildRateLimiters:
    def test_memory_backend(self):
        limiters = build_rate_limiters(LimitsConfig())
        assert set(limiters) == {"roast", "generate", "parse", "analyze"}
        assert all(isinstance(l, InMemoryRateLimiter) for l in limiters.values())
        assert limiters["generate"].max_requests == 5
        assert limiters["roast"].max_requests == 10

    def test_sqlite_backend(self, tmp_path):
        config = LimitsConfig(backend="sqlite", db_path=str(tmp_path / "rl.db"), generate=2)
        limiters = build_rate_limiters(config)
        assert isinstance(limiters["generate"], SQLiteRateLimiter)
        assert limiters["generate"].max_requests == 2
        assert limiters["parse"].scope == "parse"
