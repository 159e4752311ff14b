"""Unit tests for the FLO-2D no-data sentinel."""

from __future__ import annotations

import math

import numpy as np
import pytest

from pyflo2d.core.nodata import (
    FLO2D_NODATA,
    NODATA_TOLERANCE,
    decode,
    decode_array,
    encode,
    encode_array,
)


class TestDecode:
    """Tests for decode() and decode_array()."""

    def test_sentinel_is_nan(self) -> None:
        assert math.isnan(decode(0.0))

    def test_within_tolerance_is_nan(self) -> None:
        assert math.isnan(decode(NODATA_TOLERANCE))
        assert math.isnan(decode(-5e-9))

    def test_outside_tolerance_is_kept(self) -> None:
        assert decode(1e-7) == 1e-7
        assert decode(-2.5) == -2.5

    def test_array(self) -> None:
        raw = np.array([0.0, 1.5, 1e-9, -3.0], dtype=np.float32)
        decoded = decode_array(raw)
        assert decoded.dtype == np.float64
        np.testing.assert_array_equal(np.isnan(decoded), [True, False, True, False])
        assert decoded[1] == 1.5

    def test_array_input_not_modified(self) -> None:
        raw = np.array([0.0, 2.0])
        decode_array(raw)
        np.testing.assert_array_equal(raw, [0.0, 2.0])


class TestEncode:
    """Tests for encode() and encode_array()."""

    def test_nan_is_sentinel(self) -> None:
        assert encode(math.nan) == FLO2D_NODATA

    def test_value_is_kept(self) -> None:
        assert encode(4.25) == 4.25

    def test_array(self) -> None:
        encoded = encode_array([np.nan, 1.0, np.nan])
        np.testing.assert_array_equal(encoded, [0.0, 1.0, 0.0])

    def test_decode_of_encoded_nan_is_nan(self) -> None:
        assert math.isnan(decode(encode(math.nan)))

    @pytest.mark.parametrize("value", [1e-7, -1e-7, 0.5, -3.25, 1234.5])
    def test_encode_decode_keeps_defined_values(self, value: float) -> None:
        assert encode(decode(value)) == value

    def test_array_encode_decode_keeps_defined_values(self) -> None:
        values = np.array([2e-8, 0.75, -10.0])
        np.testing.assert_array_equal(encode_array(decode_array(values)), values)
