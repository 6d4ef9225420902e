"""Amount codec: base units <-> display strings."""

from __future__ import annotations

import pytest

from sorosave.amounts import from_display, to_display
from sorosave.errors import InvalidFormatError


# ── to_display ────────────────────────────────────────────────────


def test_to_display_whole_amounts():
    assert to_display(1000_0000000) == "1000"
    assert to_display(10_000_000) == "1"
    assert to_display(0) == "0"


def test_to_display_fractional():
    assert to_display(12_345_678) == "1.2345678"
    assert to_display(15_000_000) == "1.5"
    assert to_display(1) == "0.0000001"


def test_to_display_custom_scale():
    assert to_display(1234, scale=2) == "12.34"
    assert to_display(1200, scale=2) == "12"
    assert to_display(42, scale=0) == "42"


def test_to_display_negative():
    assert to_display(-15_000_000) == "-1.5"
    assert to_display(-1) == "-0.0000001"


def test_to_display_max_i128_is_exact():
    value = 2**127 - 1
    assert to_display(value) == "17014118346046923173168730371588.4105727"


# ── from_display ──────────────────────────────────────────────────


def test_from_display_basic():
    assert from_display("1.5") == 15_000_000
    assert from_display("1000") == 10_000_000_000
    assert from_display("0.0000001") == 1


def test_from_display_truncates_excess_precision():
    """Digits beyond the scale are dropped, never rounded."""
    assert from_display("1.23456789") == 12_345_678
    assert from_display("0.99999999") == 9_999_999


def test_from_display_negative():
    assert from_display("-1.5") == -15_000_000


def test_from_display_empty_whole_part():
    assert from_display(".5") == 5_000_000
    assert from_display("") == 0
    assert from_display(".") == 0


@pytest.mark.parametrize("text", ["abc", "1.2.3", "1,5", "1.5e3", "--1", "1.x", "-", "-.5"])
def test_from_display_rejects_invalid(text):
    with pytest.raises(InvalidFormatError):
        from_display(text)


def test_negative_scale_rejected():
    with pytest.raises(ValueError):
        to_display(1, scale=-1)


# ── Round trip ────────────────────────────────────────────────────


@pytest.mark.parametrize("value", [0, 1, 9, 10_000_000, 12_345_678, 2**64 + 17, 2**127 - 1])
@pytest.mark.parametrize("scale", [0, 7, 18])
def test_round_trip(value, scale):
    assert from_display(to_display(value, scale), scale) == value
