from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .client import AocClient
from .config import ClientConfig
from .errors import ConfigError, NetworkError
from .models import Example

EXIT_NO_EXAMPLE = 1
EXIT_CONFIG = 2
EXIT_NETWORK = 3


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("year", type=int)
    p.add_argument("day", type=int)
    p.add_argument(
        "--cache-dir",
        type=Path,
        default=None,
        help="Defaults to $AOCFETCH_CACHE_DIR or the platform cache directory",
    )
    p.add_argument(
        "--min-interval",
        type=float,
        default=None,
        help="Seconds between requests to the site (default: 180)",
    )
    p.add_argument("-v", "--verbose", action="count", default=0)
    mode = p.add_mutually_exclusive_group()
    mode.add_argument(
        "--no-cache",
        action="store_true",
        help="Always hit the network (the response is still cached)",
    )
    mode.add_argument(
        "--no-persistent",
        action="store_true",
        help="Ignore the on-disk cache when looking up",
    )


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _format_example(example: Example) -> str:
    lines = ["data:", example.data.rstrip("\n")]
    if example.part1_answer is not None:
        lines.append(f"part 1 answer: {example.part1_answer}")
    if example.part2_data is not None:
        lines.append("part 2 data:")
        lines.append(example.part2_data.rstrip("\n"))
    if example.part2_answer is not None:
        lines.append(f"part 2 answer: {example.part2_answer}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="aocfetch")
    sub = parser.add_subparsers(dest="cmd", required=True)

    input_p = sub.add_parser("input", help="Print the puzzle input for YEAR DAY")
    _add_common_args(input_p)

    example_p = sub.add_parser(
        "example", help="Print the worked example (and answers) for YEAR DAY"
    )
    _add_common_args(example_p)
    example_p.add_argument(
        "--part",
        type=int,
        choices=(1, 2),
        default=1,
        help="Cache slot: 2 once part 2 is unlocked on the site",
    )

    args = parser.parse_args(argv)
    _configure_logging(int(args.verbose))

    try:
        config = ClientConfig.from_env(
            cache_dir=args.cache_dir, min_interval_s=args.min_interval
        )
    except ConfigError as e:
        print(str(e), file=sys.stderr)
        return EXIT_CONFIG

    try:
        with AocClient.from_config(config) as aoc:
            if args.cmd == "input":
                if args.no_cache:
                    text = aoc.get_input_no_cache(args.year, args.day)
                elif args.no_persistent:
                    text = aoc.get_input_no_persistent(args.year, args.day)
                else:
                    text = aoc.get_input(args.year, args.day)
                sys.stdout.write(text)
                return 0

            if args.no_cache:
                example = aoc.get_example_no_cache(args.year, args.day, args.part)
            elif args.no_persistent:
                example = aoc.get_example_no_persistent(
                    args.year, args.day, args.part
                )
            else:
                example = aoc.get_example(args.year, args.day, args.part)
            if example is None:
                print(
                    f"No example found for {args.year}/{args.day:02d}",
                    file=sys.stderr,
                )
                return EXIT_NO_EXAMPLE
            print(_format_example(example))
            return 0
    except NetworkError as e:
        print(str(e), file=sys.stderr)
        return EXIT_NETWORK
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return EXIT_CONFIG


if __name__ == "__main__":
    raise SystemExit(main())
