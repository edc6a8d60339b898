"""aocfetch: a polite, caching client for Advent of Code puzzle inputs.

Requests to the site are spaced at least three minutes apart (persisted
across runs) and every response is cached, first in memory and then on disk
when the client is closed.

Worked examples are extracted from the cached puzzle page on every read;
only the page HTML is stored.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .client import AocClient  # noqa: E402
from .config import ClientConfig  # noqa: E402
from .errors import (  # noqa: E402
    AocError,
    CacheWriteError,
    ClientClosedError,
    ClockAnomalyError,
    ConfigError,
    NetworkError,
)
from .examples import parse_example  # noqa: E402
from .models import Example, ExampleKey, InputKey  # noqa: E402
from .store import FileStore, MemoryStore, PersistentStore  # noqa: E402
from .throttle import ThrottleGate  # noqa: E402

__all__ = [
    "AocClient",
    "AocError",
    "CacheWriteError",
    "ClientClosedError",
    "ClientConfig",
    "ClockAnomalyError",
    "ConfigError",
    "Example",
    "ExampleKey",
    "FileStore",
    "InputKey",
    "MemoryStore",
    "NetworkError",
    "PersistentStore",
    "ThrottleGate",
    "__version__",
    "parse_example",
]
