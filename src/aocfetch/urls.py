from __future__ import annotations

from urllib.parse import ParseResult, urlparse, urlunparse

DEFAULT_BASE_URL = "https://adventofcode.com"


def normalize_url(raw_url: str) -> str:
    """Normalize a puzzle URL.

    - Lowercases scheme + hostname.
    - Strips fragments (``#part2`` links point at the same page).
    - Drops a trailing slash from the path.
    """

    parsed: ParseResult = urlparse(raw_url)
    scheme = (parsed.scheme or "").lower()
    netloc = (parsed.netloc or "").lower()
    path = parsed.path
    if len(path) > 1 and path.endswith("/"):
        path = path.rstrip("/")

    parsed = parsed._replace(
        scheme=scheme,
        netloc=netloc,
        path=path,
        fragment="",
    )
    return urlunparse(parsed)


def puzzle_url(year: int, day: int, *, base_url: str = DEFAULT_BASE_URL) -> str:
    return normalize_url(f"{base_url.rstrip('/')}/{year}/day/{day}")


def input_url(year: int, day: int, *, base_url: str = DEFAULT_BASE_URL) -> str:
    return puzzle_url(year, day, base_url=base_url) + "/input"


def session_cookie(token: str) -> dict[str, str]:
    return {"Cookie": f"session={token}"}


def sanitize_token(token: str) -> str:
    return "..." + token[-4:]
