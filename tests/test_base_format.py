import base64

import pytest

from base_format import FormatRequest, NumeralBase, format_value, minimal_bytes
from range_set import U64_MAX


def test_binary():
    assert format_value(0, NumeralBase.BINARY, False, 8) == "0"
    assert format_value(5, NumeralBase.BINARY) == "101"
    assert format_value(5, NumeralBase.BINARY, True, 8) == "00000101"


def test_padding_never_truncates():
    assert format_value(300, NumeralBase.BINARY, True, 4) == "100101100"
    assert format_value(0xABCDEF, NumeralBase.HEXADECIMAL, True, 2) == "abcdef"


def test_hexadecimal():
    assert format_value(255, NumeralBase.HEXADECIMAL, False, 1) == "ff"
    assert format_value(255, NumeralBase.HEXADECIMAL, True, 8) == "000000ff"
    assert format_value(U64_MAX, NumeralBase.HEXADECIMAL) == "f" * 16


def test_decimal_ignores_padding():
    assert format_value(42, NumeralBase.DECIMAL, True, 16) == "42"
    assert format_value(U64_MAX, NumeralBase.DECIMAL) == "18446744073709551615"


def test_base64_uses_minimal_bytes():
    assert format_value(0, NumeralBase.BASE64) == "AA=="
    assert format_value(1, NumeralBase.BASE64) == "AQ=="
    assert base64.b64decode(format_value(256, NumeralBase.BASE64)) == b"\x01\x00"
    assert format_value(256, NumeralBase.BASE64) == "AQA="
    assert format_value(U64_MAX, NumeralBase.BASE64) == "//////////8="


def test_base64_ignores_padding():
    assert format_value(1, NumeralBase.BASE64, True, 64) == "AQ=="


@pytest.mark.parametrize(
    "value,expected",
    [(0, b"\x00"), (255, b"\xff"), (256, b"\x01\x00"), (2**56, b"\x01" + b"\x00" * 7)],
)
def test_minimal_bytes(value, expected):
    assert minimal_bytes(value) == expected


@pytest.mark.parametrize("value", [-1, U64_MAX + 1])
def test_out_of_domain_value(value):
    with pytest.raises(ValueError):
        format_value(value, NumeralBase.DECIMAL)


def test_base_accepts_wire_names():
    assert format_value(10, "hexadecimal") == "a"


def test_format_request_is_repeatable():
    request = FormatRequest(value=5, base=NumeralBase.BINARY, pad=True, pad_width=6)
    assert request.render() == "000101"
    assert request.render() == request.render()
