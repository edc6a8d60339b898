from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import platformdirs

from .errors import ConfigError
from .http_client import DEFAULT_USER_AGENT
from .throttle import DEFAULT_MIN_INTERVAL_S
from .urls import DEFAULT_BASE_URL

ENV_SESSION = "AOC_SESSION"
ENV_CACHE_DIR = "AOCFETCH_CACHE_DIR"
ENV_MIN_INTERVAL = "AOCFETCH_MIN_INTERVAL"


def default_cache_dir() -> Path:
    return platformdirs.user_cache_path("aocfetch")


@dataclass(frozen=True)
class ClientConfig:
    session_token: str
    cache_dir: Path
    min_interval_s: float = DEFAULT_MIN_INTERVAL_S
    timeout_s: float = 30
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if not self.session_token.strip():
            raise ConfigError("session token must not be empty")
        if self.min_interval_s < 0:
            raise ConfigError("minimum request interval must be >= 0")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        cache_dir: Path | None = None,
        min_interval_s: float | None = None,
    ) -> ClientConfig:
        """Build a config from ``AOC_SESSION`` and friends.

        Explicit keyword arguments win over the environment.
        """

        env = os.environ if environ is None else environ

        token = (env.get(ENV_SESSION) or "").strip()
        if not token:
            raise ConfigError(
                f"{ENV_SESSION} is not set; copy the value of the 'session' "
                "cookie from a logged-in browser"
            )

        if cache_dir is None:
            raw_dir = env.get(ENV_CACHE_DIR)
            cache_dir = Path(raw_dir).expanduser() if raw_dir else default_cache_dir()

        if min_interval_s is None:
            raw_interval = env.get(ENV_MIN_INTERVAL)
            if raw_interval:
                try:
                    min_interval_s = float(raw_interval)
                except ValueError as e:
                    raise ConfigError(
                        f"{ENV_MIN_INTERVAL} must be a number of seconds, "
                        f"got {raw_interval!r}"
                    ) from e
            else:
                min_interval_s = DEFAULT_MIN_INTERVAL_S

        return cls(
            session_token=token,
            cache_dir=cache_dir,
            min_interval_s=min_interval_s,
        )
