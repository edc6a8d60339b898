from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class InputKey(NamedTuple):
    year: int
    day: int


class ExampleKey(NamedTuple):
    """Key for a cached puzzle page.

    ``part`` only separates the page captured before part 2 was unlocked from
    the one captured after; both parse to the same kind of ``Example``.
    """

    year: int
    day: int
    part: int


@dataclass(frozen=True)
class Example:
    data: str
    part2_data: str | None = None
    part1_answer: str | None = None
    part2_answer: str | None = None


def validate_puzzle(year: int, day: int, part: int | None = None) -> None:
    if year < 2015:
        raise ValueError(f"no puzzles before 2015 (got year={year})")
    if not 1 <= day <= 25:
        raise ValueError(f"day must be between 1 and 25 (got day={day})")
    if part is not None and part not in (1, 2):
        raise ValueError(f"part must be 1 or 2 (got part={part})")
