from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType
from typing import Protocol

import requests

from .cache import TieredCache, flush
from .config import ClientConfig
from .errors import ClientClosedError
from .examples import parse_example
from .http_client import FetchResult, HttpClient
from .models import Example, ExampleKey, InputKey, validate_puzzle
from .store import FileStore, MemoryStore, PersistentStore
from .throttle import DEFAULT_MIN_INTERVAL_S, ThrottleGate
from .urls import (
    DEFAULT_BASE_URL,
    input_url,
    puzzle_url,
    sanitize_token,
    session_cookie,
)

log = logging.getLogger(__name__)


class Fetcher(Protocol):
    def get(
        self, url: str, *, headers: dict[str, str] | None = None
    ) -> FetchResult: ...


class AocClient:
    """Cached, throttled access to puzzle inputs and examples.

    Lookups go memory tier, then durable store, then network. Network
    responses are kept in memory and written to the store only by
    ``close()``; a client that is never closed loses them. Use it as a
    context manager::

        with AocClient.from_env() as aoc:
            text = aoc.get_input(2022, 1)

    Not safe for concurrent use.
    """

    def __init__(
        self,
        session_token: str,
        *,
        store: PersistentStore | None = None,
        http: Fetcher | None = None,
        min_interval_s: float = DEFAULT_MIN_INTERVAL_S,
        base_url: str = DEFAULT_BASE_URL,
        throttle: ThrottleGate | None = None,
    ) -> None:
        self._session_token = session_token
        self.store: PersistentStore = store if store is not None else MemoryStore()
        self._owns_http = http is None
        self.http: Fetcher = (
            http if http is not None else HttpClient(requests.Session())
        )
        self.base_url = base_url

        if throttle is None:
            last = self.store.load_timestamp()
            throttle = ThrottleGate(
                last if last is not None else 0.0,
                min_interval_s=min_interval_s,
            )
        self.throttle = throttle

        self.inputs: TieredCache[InputKey] = TieredCache(self.store.load, name="input")
        self.examples: TieredCache[ExampleKey] = TieredCache(
            self.store.load_example, name="example"
        )
        self._closed = False
        self._flush_result: bool | None = None

    @classmethod
    def from_config(cls, config: ClientConfig) -> AocClient:
        http = HttpClient(
            requests.Session(),
            timeout_s=config.timeout_s,
            user_agent=config.user_agent,
        )
        client = cls(
            config.session_token,
            store=FileStore(Path(config.cache_dir)),
            http=http,
            min_interval_s=config.min_interval_s,
            base_url=config.base_url,
        )
        client._owns_http = True
        return client

    @classmethod
    def from_env(cls) -> AocClient:
        return cls.from_config(ClientConfig.from_env())

    def _fetch(self, url: str) -> str:
        waited = self.throttle.acquire()
        log.info(
            "requesting %s token=%s (waited %.1fs)",
            url,
            sanitize_token(self._session_token),
            waited,
        )
        result = self.http.get(url, headers=session_cookie(self._session_token))
        return result.text

    def _check_open(self) -> None:
        if self._closed:
            raise ClientClosedError("client is closed")

    def _input(self, year: int, day: int, *, memory: bool, durable: bool) -> str:
        self._check_open()
        validate_puzzle(year, day)
        key = InputKey(year, day)
        if memory:
            cached = self.inputs.get(key, use_durable=durable)
            if cached is not None:
                return cached
        text = self._fetch(input_url(year, day, base_url=self.base_url))
        self.inputs.put(key, text)
        return text

    def get_input(self, year: int, day: int) -> str:
        return self._input(year, day, memory=True, durable=True)

    def get_input_no_persistent(self, year: int, day: int) -> str:
        """Like ``get_input`` but ignores anything in the durable store."""
        return self._input(year, day, memory=True, durable=False)

    def get_input_no_cache(self, year: int, day: int) -> str:
        """Always fetch; the result still replaces the cached copy."""
        return self._input(year, day, memory=False, durable=False)

    def _example_html(
        self, year: int, day: int, part: int, *, memory: bool, durable: bool
    ) -> str:
        self._check_open()
        validate_puzzle(year, day, part)
        key = ExampleKey(year, day, part)
        if memory:
            cached = self.examples.get(key, use_durable=durable)
            if cached is not None:
                return cached
        html = self._fetch(puzzle_url(year, day, base_url=self.base_url))
        self.examples.put(key, html)
        return html

    def _example(
        self, year: int, day: int, part: int, *, memory: bool, durable: bool
    ) -> Example | None:
        html = self._example_html(year, day, part, memory=memory, durable=durable)
        example = parse_example(html)
        if example is None:
            log.warning("no example found for %d/%02d part %d", year, day, part)
        return example

    def get_example(self, year: int, day: int, part: int = 1) -> Example | None:
        return self._example(year, day, part, memory=True, durable=True)

    def get_example_no_persistent(
        self, year: int, day: int, part: int = 1
    ) -> Example | None:
        return self._example(year, day, part, memory=True, durable=False)

    def get_example_no_cache(
        self, year: int, day: int, part: int = 1
    ) -> Example | None:
        return self._example(year, day, part, memory=False, durable=False)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> bool:
        """Persist both cache tiers and the throttle timestamp.

        Returns ``False`` if any durable write failed (already logged). Only
        the first call writes anything.
        """
        if self._closed:
            return bool(self._flush_result)
        self._closed = True
        self._flush_result = flush(
            self.store, self.inputs, self.examples, self.throttle.last_request_at
        )
        if self._owns_http and isinstance(self.http, HttpClient):
            self.http.close()
        return self._flush_result

    def __enter__(self) -> AocClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
