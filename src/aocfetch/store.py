"""Durable storage for puzzle inputs, puzzle pages and the throttle timestamp.

``FileStore`` keeps one plain file per key so the cache stays easy to inspect
(and to seed by hand)::

    <root>/2022/1.txt                   puzzle input
    <root>/examples/2022/1_1.html       puzzle page, part 1 view
    <root>/throttle_timestamp           seconds since the epoch

Reads never raise: anything unreadable is a cache miss. Writes raise
``CacheWriteError``; ``save_all`` turns those into warnings.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from .errors import CacheWriteError
from .models import ExampleKey, InputKey

log = logging.getLogger(__name__)


class PersistentStore(Protocol):
    def load(self, key: InputKey) -> str | None: ...

    def save(self, key: InputKey, text: str) -> None: ...

    def load_example(self, key: ExampleKey) -> str | None: ...

    def save_example(self, key: ExampleKey, html: str) -> None: ...

    def load_timestamp(self) -> float | None: ...

    def save_timestamp(self, timestamp: float) -> None: ...

    def save_all(
        self,
        inputs: Mapping[InputKey, str],
        examples: Mapping[ExampleKey, str],
        timestamp: float,
    ) -> bool: ...


def save_all_best_effort(
    store: PersistentStore,
    inputs: Mapping[InputKey, str],
    examples: Mapping[ExampleKey, str],
    timestamp: float,
) -> bool:
    """Write everything, logging (not raising) each failed write."""
    ok = True
    try:
        store.save_timestamp(timestamp)
    except CacheWriteError as e:
        log.warning("failed to save throttle timestamp: %s", e)
        ok = False
    for key, text in inputs.items():
        try:
            store.save(key, text)
        except CacheWriteError as e:
            log.warning("failed to save input %s/%s: %s", key.year, key.day, e)
            ok = False
    for ekey, html in examples.items():
        try:
            store.save_example(ekey, html)
        except CacheWriteError as e:
            log.warning(
                "failed to save example %s/%s part %s: %s",
                ekey.year,
                ekey.day,
                ekey.part,
                e,
            )
            ok = False
    return ok


@dataclass
class FileStore:
    root: Path

    @property
    def timestamp_path(self) -> Path:
        return self.root / "throttle_timestamp"

    def input_path(self, key: InputKey) -> Path:
        return self.root / str(key.year) / f"{key.day}.txt"

    def example_path(self, key: ExampleKey) -> Path:
        return self.root / "examples" / str(key.year) / f"{key.day}_{key.part}.html"

    def _read(self, path: Path) -> str | None:
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            log.debug("unreadable cache file %s", path, exc_info=True)
            return None

    def _write(self, path: Path, text: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8", newline="")
        except OSError as e:
            raise CacheWriteError(f"{path}: {e}") from e

    def load(self, key: InputKey) -> str | None:
        return self._read(self.input_path(key))

    def save(self, key: InputKey, text: str) -> None:
        self._write(self.input_path(key), text)

    def load_example(self, key: ExampleKey) -> str | None:
        return self._read(self.example_path(key))

    def save_example(self, key: ExampleKey, html: str) -> None:
        self._write(self.example_path(key), html)

    def load_timestamp(self) -> float | None:
        raw = self._read(self.timestamp_path)
        if raw is None:
            return None
        try:
            value = float(raw.strip())
        except ValueError:
            value = math.nan
        if not math.isfinite(value):
            log.warning("ignoring corrupt throttle timestamp %r", raw[:40])
            return None
        return value

    def save_timestamp(self, timestamp: float) -> None:
        self._write(self.timestamp_path, repr(float(timestamp)))

    def save_all(
        self,
        inputs: Mapping[InputKey, str],
        examples: Mapping[ExampleKey, str],
        timestamp: float,
    ) -> bool:
        return save_all_best_effort(self, inputs, examples, timestamp)


@dataclass
class MemoryStore:
    """Session-only store. Also the stand-in store for tests."""

    inputs: dict[InputKey, str] = field(default_factory=dict)
    examples: dict[ExampleKey, str] = field(default_factory=dict)
    timestamp: float | None = None

    def load(self, key: InputKey) -> str | None:
        return self.inputs.get(key)

    def save(self, key: InputKey, text: str) -> None:
        self.inputs[key] = text

    def load_example(self, key: ExampleKey) -> str | None:
        return self.examples.get(key)

    def save_example(self, key: ExampleKey, html: str) -> None:
        self.examples[key] = html

    def load_timestamp(self) -> float | None:
        return self.timestamp

    def save_timestamp(self, timestamp: float) -> None:
        self.timestamp = timestamp

    def save_all(
        self,
        inputs: Mapping[InputKey, str],
        examples: Mapping[ExampleKey, str],
        timestamp: float,
    ) -> bool:
        return save_all_best_effort(self, inputs, examples, timestamp)
