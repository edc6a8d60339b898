"""Shared fakes: a controllable clock and an in-memory HTTP transport."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

import pytest

from aocfetch.errors import NetworkError
from aocfetch.http_client import FetchResult
from aocfetch.store import MemoryStore
from aocfetch.throttle import ThrottleGate


@dataclass
class FakeClock:
    now: float = 1_700_000_000.0
    sleeps: list[float] = field(default_factory=list)

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@dataclass
class FakeHttp:
    pages: dict[str, str] = field(default_factory=dict)
    calls: list[tuple[str, dict[str, str]]] = field(default_factory=list)
    fail_with: int | None = None

    def get(self, url: str, *, headers: dict[str, str] | None = None) -> FetchResult:
        self.calls.append((url, dict(headers or {})))
        if self.fail_with is not None:
            raise NetworkError(
                f"HTTP {self.fail_with} at {url}", url=url, status_code=self.fail_with
            )
        if url not in self.pages:
            raise NetworkError(f"HTTP 404 at {url}", url=url, status_code=404)
        return FetchResult(
            url=url,
            final_url=url,
            status_code=200,
            headers={},
            fetched_at=time.time(),
            body=self.pages[url].encode("utf-8"),
        )

    @property
    def urls(self) -> list[str]:
        return [u for u, _ in self.calls]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def gate(clock: FakeClock) -> ThrottleGate:
    return ThrottleGate(0.0, min_interval_s=180.0, clock=clock, sleep=clock.sleep)


@pytest.fixture
def http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()
