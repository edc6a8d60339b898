from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import requests
from requests import exceptions as req_exc

from . import __version__
from .errors import NetworkError
from .urls import normalize_url

log = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    f"aocfetch/{__version__} (+https://pypi.org/project/aocfetch/)"
)


@dataclass(frozen=True)
class FetchResult:
    url: str
    final_url: str
    status_code: int
    headers: dict[str, str]
    fetched_at: float
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class HttpClient:
    """Single-shot GET transport. Failures are raised, never retried."""

    def __init__(
        self,
        session: requests.Session,
        *,
        timeout_s: float = 30,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._session = session
        self._timeout_s = timeout_s
        self._user_agent = user_agent

    def get(
        self,
        url: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> FetchResult:
        normalized = normalize_url(url)
        merged = {"User-Agent": self._user_agent}
        if headers:
            merged.update(headers)

        log.info("GET %s", normalized)
        try:
            resp = self._session.get(
                normalized, timeout=self._timeout_s, headers=merged
            )
        except req_exc.RequestException as e:
            raise NetworkError(
                f"Failed to fetch {normalized}: {e}", url=normalized
            ) from e

        if resp.status_code >= 400:
            raise NetworkError(
                f"HTTP {resp.status_code} at {normalized}",
                url=normalized,
                status_code=int(resp.status_code),
            )

        return FetchResult(
            url=normalized,
            final_url=str(resp.url),
            status_code=int(resp.status_code),
            headers={k: str(v) for k, v in resp.headers.items()},
            fetched_at=time.time(),
            body=resp.content,
        )

    def close(self) -> None:
        self._session.close()
