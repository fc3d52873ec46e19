import math
import numbers

import numpy as np
import pandas as pd

TEXT = "text"
NUMBER = "number"
EMAIL = "email"

COLUMN_TYPES = (TEXT, NUMBER, EMAIL)


def default_value(column_type: str):
    return 0 if column_type == NUMBER else ""


def parse_number(value):
    """Return ``value`` as an int or float, raising ValueError when it is not numeric."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        number = float(value)
        if not np.isfinite(number):
            raise ValueError(f"Cannot coerce '{value}' to number")
        return number

    stripped = str(value).strip()
    try:
        return int(stripped)
    except ValueError:
        pass
    number = float(stripped)
    if not np.isfinite(number):
        raise ValueError(f"Cannot coerce '{value}' to number")
    return number


def coerce_cell_value(column_type: str, value, strict: bool = True):
    """Convert a raw cell value to the python type stored for ``column_type``.

    Blank and missing values become the column default. With ``strict`` an
    unparsable number raises ValueError; otherwise it falls back to ``0``.
    """
    if value is None or (not isinstance(value, str) and pd.api.types.is_scalar(value) and pd.isna(value)):
        return default_value(column_type)

    if column_type == NUMBER:
        if isinstance(value, str) and value.strip() == "":
            return 0
        try:
            return parse_number(value)
        except (TypeError, ValueError):
            if strict:
                raise
            return 0

    return value if isinstance(value, str) else str(value)


def is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, float):
        return math.isnan(value)
    return False


def cell_text(value) -> str:
    if is_missing(value):
        return ""
    return str(value)
