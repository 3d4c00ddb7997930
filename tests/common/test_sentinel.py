"""Tests for the missing value sentinel encoding."""
import math

import numpy as np
import pytest

from metadata_manager.common.sentinel import (
    MISSING_VALUE_SENTINEL,
    decode_measurement,
    encode_measurement,
)


def test_nan_encodes_to_sentinel():
    assert encode_measurement(float("nan")) == MISSING_VALUE_SENTINEL
    assert encode_measurement(np.nan) == MISSING_VALUE_SENTINEL
    assert encode_measurement(np.float32("nan")) == MISSING_VALUE_SENTINEL


def test_none_encodes_to_sentinel():
    assert encode_measurement(None) == MISSING_VALUE_SENTINEL


def test_sentinel_decodes_to_nan():
    assert math.isnan(decode_measurement(MISSING_VALUE_SENTINEL))
    assert math.isnan(decode_measurement(-1.0))


def test_null_decodes_to_nan():
    assert math.isnan(decode_measurement(None))


@pytest.mark.parametrize("value", [0.0, 0.5, 1.0, 42, -0.25, -2.0, 1e-12])
def test_round_trip_for_regular_values(value):
    assert decode_measurement(encode_measurement(value)) == value


def test_nan_round_trip():
    assert math.isnan(decode_measurement(encode_measurement(float("nan"))))
