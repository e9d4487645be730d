"""Test suite for the formatting helpers in io_utils."""
import numpy as np
import pytest

from src.utils.io_utils import format_phone_number, sanitize_filename


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2065550100", "(206) 555-0100"),
        (2065550100, "(206) 555-0100"),
        (2065550100.0, "(206) 555-0100"),
        ("2065550100.0", "(206) 555-0100"),
        ("1-206-555-0100", "(206) 555-0100"),
    ],
)
def test_format_phone_number(raw, expected):
    assert format_phone_number(raw) == expected


def test_format_phone_number_missing():
    assert format_phone_number(None) is None
    assert format_phone_number(np.nan) is None


def test_format_phone_number_leaves_unknown_formats():
    assert format_phone_number("555-0100") == "555-0100"


def test_sanitize_filename():
    assert sanitize_filename("ADV part 2A (final)") == "ADV_part_2A_final"
    assert sanitize_filename("../../etc") == "etc"


def test_format_phone_number_non_integer_float_is_left_alone():
    assert format_phone_number(float("inf")) == float("inf")
    assert format_phone_number(206.5) == 206.5
