from __future__ import annotations


class AocError(Exception):
    """Base class for every error raised by aocfetch."""


class ConfigError(AocError):
    pass


class NetworkError(AocError):
    """Transport failure or HTTP error status. Never retried by the client."""

    def __init__(
        self, message: str, *, url: str, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class CacheWriteError(AocError):
    """The durable store could not be written. Logged, never surfaced."""


class ClockAnomalyError(AocError):
    """The last-request timestamp lies in the future of the current clock."""

    def __init__(self, last_request_at: float, now: float) -> None:
        super().__init__(
            f"last request at {last_request_at:.3f} is ahead of clock {now:.3f}"
        )
        self.last_request_at = last_request_at
        self.now = now


class ClientClosedError(AocError):
    pass
