"""HTTP layer for the number conversion drill.

This module exposes a FastAPI app that parses number-set specifications,
draws a number from them and renders it in the requested numeral bases. The
server keeps no state between calls: the drawn number and the display settings
travel in every request.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from random import Random
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from base_format import NumeralBase, format_value
from converter import MAX_PAD_BITS, MIN_PAD_BITS, DrillSettings, DrillState, check, generate, render
from range_set import U64_MAX, ParseError, parse_range_set

logger = logging.getLogger(__name__)

app = FastAPI(title="Number Drill API", version="1.0.0")

PREVIEW_SIZE = 20


def _env_limit() -> Optional[int]:
    raw = os.getenv("RANGE_LIMIT")
    if not raw:
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f"RANGE_LIMIT must be a non-negative integer, got {raw!r}") from None
    if limit < 0:
        raise ValueError(f"RANGE_LIMIT must be a non-negative integer, got {raw!r}")
    return limit


@dataclass
class DrillConfig:
    range_limit: Optional[int] = field(default_factory=_env_limit)


# read once at import so a bad environment fails at startup
CONFIG = DrillConfig()


def get_config() -> DrillConfig:
    return CONFIG


class SettingsModel(BaseModel):
    input_base: NumeralBase = NumeralBase.DECIMAL
    output_base: NumeralBase = NumeralBase.BINARY
    pad_input: bool = False
    pad_output: bool = False
    input_length: int = Field(default=8, ge=MIN_PAD_BITS, le=MAX_PAD_BITS, description="Pad width in bits")
    output_length: int = Field(default=8, ge=MIN_PAD_BITS, le=MAX_PAD_BITS, description="Pad width in bits")

    def to_settings(self) -> DrillSettings:
        return DrillSettings(
            input_base=self.input_base,
            output_base=self.output_base,
            pad_input=self.pad_input,
            pad_output=self.pad_output,
            input_length=self.input_length,
            output_length=self.output_length,
        )


class ParseRequest(BaseModel):
    range_text: str = Field(..., alias="range", description="Numbers and ranges, e.g. '1-5, 7, 10-15'")


class ParseResponse(BaseModel):
    size: int
    preview: List[int]


class GenerateRequest(BaseModel):
    range_text: str = Field(..., alias="range", description="Numbers and ranges, e.g. '1-5, 7, 10-15'")
    seed: Optional[int] = Field(default=None, description="Seed for a reproducible draw")
    settings: SettingsModel = Field(default_factory=SettingsModel)


class GenerateResponse(BaseModel):
    number: int
    prompt: str


class CheckRequest(BaseModel):
    number: int = Field(..., ge=0, le=U64_MAX)
    settings: SettingsModel = Field(default_factory=SettingsModel)


class CheckResponse(BaseModel):
    number: int
    prompt: str
    answer: str


class FormatRequestModel(BaseModel):
    value: int = Field(..., ge=0, le=U64_MAX)
    base: NumeralBase
    pad: bool = False
    pad_width: int = Field(default=8, ge=MIN_PAD_BITS, le=MAX_PAD_BITS)


class FormatResponse(BaseModel):
    text: str


@app.post("/parse", response_model=ParseResponse)
def handle_parse(request: ParseRequest, config: DrillConfig = Depends(get_config)):
    try:
        candidates = parse_range_set(request.range_text, limit=config.range_limit)
    except ParseError as exc:
        logger.warning("rejected range %r: %s", request.range_text, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return ParseResponse(size=candidates.size, preview=candidates[:PREVIEW_SIZE])


@app.post("/generate", response_model=GenerateResponse)
def handle_generate(request: GenerateRequest, config: DrillConfig = Depends(get_config)):
    rng = Random(request.seed) if request.seed is not None else None
    state = generate(
        DrillState(settings=request.settings.to_settings()),
        request.range_text,
        rng=rng,
        limit=config.range_limit,
    )
    if state.error_message:
        raise HTTPException(status_code=422, detail=state.error_message)

    view = render(state)
    return GenerateResponse(number=state.generated_number, prompt=view.prompt)


@app.post("/check", response_model=CheckResponse)
def handle_check(request: CheckRequest):
    state = check(DrillState(settings=request.settings.to_settings(), generated_number=request.number))
    view = render(state)
    return CheckResponse(number=request.number, prompt=view.prompt, answer=view.answer)


@app.post("/format", response_model=FormatResponse)
def handle_format(request: FormatRequestModel):
    return FormatResponse(text=format_value(request.value, request.base, request.pad, request.pad_width))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
