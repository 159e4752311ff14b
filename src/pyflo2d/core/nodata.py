"""
No-data sentinel handling.

FLO-2D writes ``0.0`` where a cell has no value (dry cell, no velocity).
Inside pyflo2d missing values are always ``NaN``; values are decoded when
read and encoded again only when written back to a FLO-2D file.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

FLO2D_NODATA = 0.0
NODATA_TOLERANCE = 1e-8


def decode(value: float) -> float:
    """Map a FLO-2D value to a float, with the sentinel band turned into NaN."""
    if abs(value - FLO2D_NODATA) <= NODATA_TOLERANCE:
        return math.nan
    return value


def encode(value: float) -> float:
    """Map NaN back to the FLO-2D sentinel."""
    if math.isnan(value):
        return FLO2D_NODATA
    return value


def decode_array(values: ArrayLike) -> NDArray[np.float64]:
    """Vectorized :func:`decode`. Always returns a new float64 array."""
    arr = np.array(values, dtype=np.float64)
    arr[np.abs(arr - FLO2D_NODATA) <= NODATA_TOLERANCE] = np.nan
    return arr


def encode_array(values: ArrayLike) -> NDArray[np.float64]:
    """Vectorized :func:`encode`. Always returns a new float64 array."""
    arr = np.array(values, dtype=np.float64)
    arr[np.isnan(arr)] = FLO2D_NODATA
    return arr
