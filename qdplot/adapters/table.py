"""Read labeled series from comma-separated text or a pandas DataFrame.

The text layout is::

         , A , B , "C"
     -1  , 0 , 1 , 3
     -5  , 1 , -2, 4

The first header column is a placeholder for the index column and is
ignored. Each data row starts with its x value followed by one y value per
label. Double quotes are stripped and whitespace around fields is trimmed.
"""

from __future__ import annotations

import io
import logging

import numpy as np
import pandas as pd

from qdplot.adapters.normalize import normalize_xy
from qdplot.errors import InvalidDataError, NoDataError


LOGGER = logging.getLogger(__name__)


def _to_float(column: pd.Series, *, label: str) -> np.ndarray:
    stripped = column.map(lambda v: v.strip() if isinstance(v, str) else v)
    try:
        return pd.to_numeric(stripped).to_numpy(dtype=np.float64)
    except ValueError as exc:
        raise InvalidDataError(f"column {label!r}: {exc}") from exc


def parse_csv(content: str) -> dict[str, np.ndarray]:
    """Return ``{label: (n, 2) float64 points}`` in header order."""
    lines = content.splitlines()
    if not lines or not lines[0].strip():
        raise NoDataError("empty input")
    options = {"header": None, "dtype": str, "skipinitialspace": True, "quotechar": '"'}
    try:
        # Labels such as "NA" or "null" are names, not missing values.
        header = pd.read_csv(io.StringIO(content), nrows=1, keep_default_na=False, **options)
        raw = pd.read_csv(io.StringIO(content), **options)
    except pd.errors.EmptyDataError as exc:
        raise NoDataError("empty input") from exc
    except ValueError as exc:
        raise InvalidDataError(str(exc)) from exc

    labels = [str(label).strip() for label in header.iloc[0, 1:]]
    if "" in labels:
        raise InvalidDataError(f"empty series label in header column {labels.index('') + 2}")

    body = raw.iloc[1:]
    x = _to_float(body[0], label="index")
    series: dict[str, np.ndarray] = {}
    for column, label in zip(raw.columns[1:], labels):
        points = normalize_xy(_to_float(body[column], label=label), x=x)
        existing = series.get(label)
        series[label] = points if existing is None else np.concatenate([existing, points])

    LOGGER.debug("parsed %d series from %d rows", len(series), len(body))
    return series


def read_frame(frame: pd.DataFrame) -> dict[str, np.ndarray]:
    """Use the frame index as x and each column as one labeled y series."""
    if frame.empty:
        raise NoDataError("empty frame")
    return {str(column): normalize_xy(frame[column], x=frame.index) for column in frame.columns}
