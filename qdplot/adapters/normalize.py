from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd

from qdplot.errors import InvalidDataError


def normalize_points(points: Any) -> np.ndarray:
    """Coerce ``points`` into a float64 array of shape ``(n, 2)``.

    Accepts an ``(n, 2)`` ndarray or DataFrame, or a sequence of ``(x, y)``
    pairs. ``None`` entries become NaN.
    """
    if isinstance(points, pd.DataFrame):
        if points.shape[1] != 2:
            raise InvalidDataError(f"point frame must have 2 columns, got {points.shape[1]}")
        points = points.to_numpy()

    if isinstance(points, np.ndarray):
        arr = points
    elif isinstance(points, Sequence) and not isinstance(points, (str, bytes, bytearray)):
        if len(points) == 0:
            return np.empty((0, 2), dtype=np.float64)
        arr = np.asarray(points, dtype=object)
    else:
        raise InvalidDataError(f"unsupported points input type: {type(points)!r}")

    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidDataError(f"points must be (x, y) pairs, got shape {arr.shape}")
    return np.column_stack(
        [_coerce_ndarray(arr[:, 0], label="x"), _coerce_ndarray(arr[:, 1], label="y")]
    )


def normalize_xy(y: Any, *, x: Any = None) -> np.ndarray:
    """Pair a y column with an x column (defaulting to 0..n-1) as ``(n, 2)`` points."""
    y_arr = _coerce_1d_numeric(y, label="y")
    if x is None:
        x_arr = np.arange(y_arr.size, dtype=np.float64)
    else:
        x_arr = _coerce_1d_numeric(x, label="x")
    if x_arr.shape != y_arr.shape:
        raise InvalidDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    return np.column_stack([x_arr, y_arr])


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, (pd.Series, pd.Index)):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise InvalidDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise InvalidDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise InvalidDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
