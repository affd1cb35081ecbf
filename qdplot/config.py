from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
import tomllib
from typing import Any


DEFAULT_HEIGHT = 25
DEFAULT_WIDTH = 80
DEFAULT_MARGIN = 0.0
DEFAULT_TICK_EVERY = 5
DEFAULT_BOX_ROW_STRIDE = 4
DEFAULT_HISTOGRAM_BINS = 10
DEFAULT_HISTOGRAM_INFLATION = 0.001


@dataclass(frozen=True)
class PlotConfig:
    height: int = DEFAULT_HEIGHT
    width: int = DEFAULT_WIDTH
    # Fraction of the data span added on both sides of each axis interval.
    margin: float = DEFAULT_MARGIN
    tick_every: int = DEFAULT_TICK_EVERY
    box_row_stride: int = DEFAULT_BOX_ROW_STRIDE
    histogram_bins: int = DEFAULT_HISTOGRAM_BINS
    histogram_inflation: float = DEFAULT_HISTOGRAM_INFLATION

    def __post_init__(self) -> None:
        if self.height <= 0 or self.width <= 0:
            raise ValueError("height and width must be > 0")
        if self.margin < 0:
            raise ValueError("margin must be >= 0")
        if self.tick_every < 1:
            raise ValueError("tick_every must be >= 1")
        if self.box_row_stride < 3:
            raise ValueError("box_row_stride must be >= 3")
        if self.histogram_bins < 1:
            raise ValueError("histogram_bins must be >= 1")
        if self.histogram_inflation < 0:
            raise ValueError("histogram_inflation must be >= 0")

    @classmethod
    def from_toml(cls, path: str | Path) -> "PlotConfig":
        with Path(path).open("rb") as f:
            raw = tomllib.load(f)
        return cls.from_mapping(raw.get("qdplot", raw))

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> "PlotConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ValueError(f"unknown config field(s): {', '.join(unknown)}")
        kwargs: dict[str, Any] = {}
        for name, value in raw.items():
            if name in {"margin", "histogram_inflation"}:
                kwargs[name] = _coerce_float(value, name)
            else:
                kwargs[name] = _coerce_int(value, name)
        return cls(**kwargs)


def _coerce_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"`{name}` must be an integer")
    return value


def _coerce_float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"`{name}` must be a number")
    return float(value)

