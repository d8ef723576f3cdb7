"""Seeded drawing of numbers from a range specification.

This module picks numbers uniformly from a parsed :class:`range_set.CandidateSet`
and offers a small CLI that prints each draw in an input base alongside its
conversion to an output base, either line-by-line or as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from random import Random
from typing import Iterable, List, Optional, Sequence

from base_format import NumeralBase, format_value
from range_set import CandidateSet, EmptyRangeSet, ParseError, parse_range_set

logger = logging.getLogger(__name__)


def pick_candidate(candidates: CandidateSet, rng: Random) -> int:
    """Return one candidate drawn uniformly by index.

    Raises:
        EmptyRangeSet: If ``candidates`` is empty.
    """

    size = candidates.size
    if size == 0:
        raise EmptyRangeSet()
    return candidates[rng.randrange(size)]


def generate_random_numbers(
    range_text: str,
    seed: Optional[int],
    count: int,
    limit: Optional[int] = None,
) -> List[int]:
    """Generate a deterministic list of draws from a set specification.

    Args:
        range_text: Comma separated literals and inclusive ranges.
        seed: Seed to initialize the RNG. ``None`` seeds from the system.
        count: How many numbers to draw. Must be non-negative.
        limit: Optional cap on the size of the parsed set.

    Returns:
        A list of integers drawn uniformly, with replacement, from the set.

    Raises:
        ValueError: If ``count`` is negative.
        ParseError: If ``range_text`` is malformed.
        EmptyRangeSet: If ``range_text`` holds no numbers.
    """

    if count < 0:
        raise ValueError("count must be non-negative")

    candidates = parse_range_set(range_text, limit=limit)
    if not candidates:
        raise EmptyRangeSet()

    rng = Random(seed)
    return [pick_candidate(candidates, rng) for _ in range(count)]


def _format_draws(draws: Iterable[dict], as_json: bool) -> str:
    draws = list(draws)
    if as_json:
        return json.dumps({"numbers": draws})
    return "\n".join(f"{d['prompt']} -> {d['answer']}" for d in draws)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    bases = [b.value for b in NumeralBase]
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--range",
        dest="range_text",
        required=True,
        help="Numbers and ranges to draw from, e.g. '1-5, 7, 10-15'",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the RNG")
    parser.add_argument(
        "--count",
        type=int,
        default=1,
        help="How many numbers to draw (default: 1)",
    )
    parser.add_argument("--input-base", choices=bases, default="decimal")
    parser.add_argument("--output-base", choices=bases, default="binary")
    parser.add_argument(
        "--pad-input",
        type=int,
        metavar="BITS",
        default=None,
        help="Zero-pad the input rendering to BITS characters (1-64)",
    )
    parser.add_argument(
        "--pad-output",
        type=int,
        metavar="BITS",
        default=None,
        help="Zero-pad the output rendering to BITS characters (1-64)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Refuse sets with more candidates than this",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the draws as a JSON object",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    ns = parser.parse_args(argv)
    for name in ("pad_input", "pad_output"):
        bits = getattr(ns, name)
        if bits is not None and not 1 <= bits <= 64:
            parser.error(f"--{name.replace('_', '-')} must be between 1 and 64")
    return ns


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(level=getattr(logging, level_name), format=logging.BASIC_FORMAT)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args.log_level)

    try:
        numbers = generate_random_numbers(args.range_text, args.seed, args.count, args.limit)
    except (ParseError, EmptyRangeSet) as exc:
        logger.warning("rejected range %r: %s", args.range_text, exc)
        print(exc, file=sys.stderr)
        return 2

    input_base = NumeralBase(args.input_base)
    output_base = NumeralBase(args.output_base)
    draws = [
        {
            "number": n,
            "prompt": format_value(n, input_base, args.pad_input is not None, args.pad_input or 8),
            "answer": format_value(n, output_base, args.pad_output is not None, args.pad_output or 8),
        }
        for n in numbers
    ]
    print(_format_draws(draws, args.json))
    return 0


if __name__ == "__main__":
    sys.exit(main())
