import math

import numpy as np
import pytest

from cell_coercion import cell_text, coerce_cell_value, default_value, parse_number


@pytest.mark.parametrize(
    "value, expected",
    [
        ("42", 42),
        (" 7 ", 7),
        ("2.5", 2.5),
        (3, 3),
        (np.int64(9), 9),
        (1.5, 1.5),
        ("", 0),
        (None, 0),
        (float("nan"), 0),
    ],
)
def test_number_coercion(value, expected):
    result = coerce_cell_value("number", value)
    assert result == expected
    assert type(result) is type(expected)


def test_strict_number_coercion_raises():
    with pytest.raises(ValueError):
        coerce_cell_value("number", "abc")
    with pytest.raises(ValueError):
        coerce_cell_value("number", "inf")


def test_lenient_number_coercion_defaults_to_zero():
    assert coerce_cell_value("number", "abc", strict=False) == 0


@pytest.mark.parametrize("col_type", ["text", "email"])
def test_text_coercion(col_type):
    assert coerce_cell_value(col_type, "hi") == "hi"
    assert coerce_cell_value(col_type, 12) == "12"
    assert coerce_cell_value(col_type, None) == ""


def test_defaults_and_text_form():
    assert default_value("number") == 0
    assert default_value("text") == ""
    assert cell_text(None) == ""
    assert cell_text(math.nan) == ""
    assert cell_text(20) == "20"


def test_parse_number_rejects_nan_text():
    with pytest.raises(ValueError):
        parse_number("nan")
