"""Storage encoding for undefined measurements.

Numeric columns of the store cannot portably hold NaN, so an undefined
measurement is written as ``MISSING_VALUE_SENTINEL`` and turned back into
NaN when read. The sentinel is reserved: a genuine measurement equal to it
cannot be stored.
"""
import math
from typing import Optional

import numpy as np

MISSING_VALUE_SENTINEL = -1


def is_undefined(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, (float, np.floating)) and math.isnan(value))


def encode_measurement(value: Optional[float]) -> float:
    """Map NaN (or a missing value) to the sentinel, pass anything else through."""
    if is_undefined(value):
        return MISSING_VALUE_SENTINEL
    return value


def decode_measurement(value: Optional[float]) -> float:
    """Inverse of :func:`encode_measurement`; NULL columns also decode to NaN."""
    if value is None or value == MISSING_VALUE_SENTINEL:
        return np.nan
    return float(value)
