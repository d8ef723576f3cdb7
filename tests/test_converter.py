import logging
from random import Random

import pytest

from base_format import NumeralBase
from converter import DrillSettings, DrillState, check, generate, render


def test_defaults():
    state = DrillState()
    assert state.settings.input_base is NumeralBase.DECIMAL
    assert state.settings.output_base is NumeralBase.BINARY
    assert state.settings.input_length == state.settings.output_length == 8
    assert render(state).prompt is None


def test_generate_then_check():
    settings = DrillSettings(output_base=NumeralBase.HEXADECIMAL, pad_output=True, output_length=4)
    state = generate(DrillState(settings=settings), "255", rng=Random(1))
    assert state.generated_number == 255
    view = render(state)
    assert view.prompt == "255"
    assert view.answer is None
    assert view.error is None

    revealed = check(state)
    assert render(revealed).answer == "00ff"
    # the earlier state is left untouched
    assert not state.show_converted


def test_generate_hides_previous_answer():
    state = check(generate(DrillState(), "3", rng=Random(0)))
    assert generate(state, "4", rng=Random(0)).show_converted is False


@pytest.mark.parametrize(
    "text,message",
    [("abc", "Invalid number: abc"), ("", "No valid numbers provided"), ("4-2", "Invalid range: 4 > 2")],
)
def test_error_keeps_previous_number(text, message):
    state = generate(DrillState(), "7", rng=Random(0))
    failed = generate(state, text, rng=Random(0))
    assert failed.generated_number == 7
    assert failed.error_message == message
    assert render(failed).prompt == "7"
    assert render(failed).error == message


def test_success_clears_error():
    failed = generate(DrillState(), "x")
    assert generate(failed, "1", rng=Random(0)).error_message == ""


def test_limit_is_reported_as_error():
    state = generate(DrillState(), "1-100", limit=10)
    assert state.generated_number is None
    assert "too large" in state.error_message


@pytest.mark.parametrize("length", [0, 65])
def test_pad_length_bounds(length):
    with pytest.raises(ValueError):
        DrillSettings(input_length=length)


def test_overlong_number_is_recorded_not_raised():
    state = generate(DrillState(), "9" * 5000)
    assert state.generated_number is None
    assert state.error_message.startswith("Invalid number: 999")


def test_rejections_are_logged_as_warnings(caplog):
    with caplog.at_level(logging.WARNING, logger="converter"):
        generate(DrillState(), "1-2-3")
    assert [r.levelno for r in caplog.records] == [logging.WARNING]
