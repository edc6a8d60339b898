from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

from .models import ExampleKey, InputKey
from .store import PersistentStore

log = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)


class TieredCache(Generic[K]):
    """Memory tier in front of a durable loader.

    Durable hits are promoted into memory. Writes only touch memory; the
    owner persists ``entries()`` once, at shutdown. Nothing is ever evicted.
    """

    def __init__(self, load: Callable[[K], str | None], *, name: str = "") -> None:
        self._load = load
        self._memory: dict[K, str] = {}
        self.name = name

    def get(self, key: K, *, use_durable: bool = True) -> str | None:
        text = self._memory.get(key)
        if text is not None:
            log.debug("%s memory hit %s", self.name, key)
            return text
        if not use_durable:
            log.debug("%s memory miss %s (durable tier skipped)", self.name, key)
            return None
        text = self._load(key)
        if text is None:
            log.debug("%s cache miss %s", self.name, key)
            return None
        log.debug("%s durable hit %s", self.name, key)
        self._memory[key] = text
        return text

    def put(self, key: K, text: str) -> None:
        self._memory[key] = text

    def entries(self) -> dict[K, str]:
        return dict(self._memory)

    def __contains__(self, key: object) -> bool:
        return key in self._memory

    def __len__(self) -> int:
        return len(self._memory)


def flush(
    store: PersistentStore,
    inputs: TieredCache[InputKey],
    examples: TieredCache[ExampleKey],
    timestamp: float,
) -> bool:
    log.debug(
        "flushing %d inputs, %d examples, timestamp %.3f",
        len(inputs),
        len(examples),
        timestamp,
    )
    return store.save_all(inputs.entries(), examples.entries(), timestamp)
