from __future__ import annotations

import argparse
from dataclasses import replace
import logging
from pathlib import Path
import sys

from qdplot.api import plot
from qdplot.config import PlotConfig
from qdplot.dataset import SeriesStore
from qdplot.errors import CanvasError, DatasetError
from qdplot.kinds import PlotKind


LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qdplot",
        description="Quickly plot labeled series from a CSV file in the terminal.",
    )
    parser.add_argument("input", help="Input CSV file, or `-` to read stdin.")
    parser.add_argument(
        "-k",
        "--kind",
        type=PlotKind.parse,
        default=PlotKind.default(),
        metavar="{" + ",".join(k.value for k in PlotKind) + "}",
        help="Plot kind. Default: point.",
    )
    parser.add_argument("--width", type=int, default=None, help="Grid width in columns. Default: 80.")
    parser.add_argument("--height", type=int, default=None, help="Grid height in rows. Default: 25.")
    parser.add_argument("--margin", type=float, default=None, help="Axis padding as a fraction of the data span.")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with plot settings.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    return parser


def _resolve_config(args: argparse.Namespace) -> PlotConfig:
    config = PlotConfig.from_toml(args.config) if args.config is not None else PlotConfig()
    overrides = {
        name: value
        for name, value in (("width", args.width), ("height", args.height), ("margin", args.margin))
        if value is not None
    }
    return replace(config, **overrides) if overrides else config


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        config = _resolve_config(args)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))

    try:
        store = SeriesStore.from_csv(_read_input(args.input))
        out = plot(store, args.kind, config=config)
    except (CanvasError, DatasetError) as exc:
        LOGGER.error("%s", exc)
        return 1
    except OSError as exc:
        LOGGER.error("cannot read %s: %s", args.input, exc)
        return 1

    print(out.to_text())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
