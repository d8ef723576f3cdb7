"""Drill state for the number conversion exercise.

A drill shows a randomly chosen number in an input base and, once the user
asks to check, the same number in an output base. State is immutable: every
transition returns a new :class:`DrillState`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from random import Random
from typing import Optional

from base_format import NumeralBase, format_value
from range_set import EmptyRangeSet, ParseError, parse_range_set
from seeded_random import pick_candidate

logger = logging.getLogger(__name__)

MIN_PAD_BITS = 1
MAX_PAD_BITS = 64


@dataclass(frozen=True)
class DrillSettings:
    input_base: NumeralBase = NumeralBase.DECIMAL
    output_base: NumeralBase = NumeralBase.BINARY
    pad_input: bool = False
    pad_output: bool = False
    input_length: int = 8
    output_length: int = 8

    def __post_init__(self) -> None:
        for name in ("input_length", "output_length"):
            length = getattr(self, name)
            if not MIN_PAD_BITS <= length <= MAX_PAD_BITS:
                raise ValueError(f"{name} must be between {MIN_PAD_BITS} and {MAX_PAD_BITS}")


@dataclass(frozen=True)
class DrillState:
    settings: DrillSettings = DrillSettings()
    generated_number: Optional[int] = None
    show_converted: bool = False
    error_message: str = ""


@dataclass(frozen=True)
class DrillView:
    prompt: Optional[str]
    answer: Optional[str]
    error: Optional[str]


def generate(
    state: DrillState,
    range_text: str,
    rng: Optional[Random] = None,
    limit: Optional[int] = None,
) -> DrillState:
    """Draw a new number from ``range_text``.

    On failure the error message is recorded and the previously generated
    number is kept.
    """

    try:
        candidates = parse_range_set(range_text, limit=limit)
        number = pick_candidate(candidates, rng or Random())
    except (ParseError, EmptyRangeSet) as exc:
        logger.warning("rejected range %r: %s", range_text, exc)
        return replace(state, show_converted=False, error_message=str(exc))
    return replace(state, generated_number=number, show_converted=False, error_message="")


def check(state: DrillState) -> DrillState:
    return replace(state, show_converted=True)


def render(state: DrillState) -> DrillView:
    settings = state.settings
    prompt = answer = None
    if state.generated_number is not None:
        prompt = format_value(
            state.generated_number, settings.input_base, settings.pad_input, settings.input_length
        )
        if state.show_converted:
            answer = format_value(
                state.generated_number,
                settings.output_base,
                settings.pad_output,
                settings.output_length,
            )
    return DrillView(prompt=prompt, answer=answer, error=state.error_message or None)
