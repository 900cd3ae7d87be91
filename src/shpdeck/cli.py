"""CLI entrypoint for shpdeck."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from .config import AppConfig, load_config
from .inspect_report import generate_inspection_report
from .models import GeoExtent, ScreenExtent
from .render import format_render_lines, run_render
from .util import setup_logging
from .validate import Validator, format_report_lines

LOGGER = logging.getLogger("shpdeck.cli")


def _four_floats(raw: str) -> tuple[float, float, float, float]:
    values = [item.strip() for item in raw.split(",")]
    if len(values) != 4:
        raise argparse.ArgumentTypeError(f"Expected 4 comma-separated numbers, got '{raw}'")
    try:
        a, b, c, d = (float(v) for v in values)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid number in '{raw}'") from exc
    return (a, b, c, d)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shpdeck",
        description="Convert shapefile geometries into deck markup.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--config", default=None, help="Path to YAML config.")
        p.add_argument("--shapefile", default=None, help="Input shapefile (overrides config).")
        p.add_argument("--verbose", action="store_true", help="Enable debug logs.")
        p.add_argument(
            "--bbox",
            type=_four_floats,
            default=None,
            help="Geographic extent as lon_min,lon_max,lat_min,lat_max.",
        )
        p.add_argument(
            "--screen",
            type=_four_floats,
            default=None,
            help="Screen extent as x_min,x_max,y_min,y_max.",
        )
        p.add_argument("--shape", default=None, help="Shape keyword: polygon, line or dot (and synonyms).")
        p.add_argument("--color", default=None, help="Color as name or name:opacity.")
        p.add_argument("--size", type=float, default=None, help="Line width or dot size.")

    render_p = subparsers.add_parser("render", help="Write deck markup for a shapefile.")
    add_common(render_p)
    render_p.add_argument("--output", default=None, help="Markup output file, '-' for stdout.")
    render_p.add_argument(
        "--no-close-loop",
        action="store_true",
        help="Do not join the last point of a line back to the first.",
    )
    render_p.add_argument(
        "--no-deck",
        action="store_true",
        help="Write bare elements without the deck/slide wrapper.",
    )

    validate_p = subparsers.add_parser("validate", help="Validate config and input files.")
    add_common(validate_p)

    inspect_p = subparsers.add_parser("inspect", help="Summarize shapefile records and projection.")
    add_common(inspect_p)
    inspect_p.add_argument("--json", default=None, help="Write the summary to this JSON file.")

    return parser


def _load_and_setup(args: argparse.Namespace) -> AppConfig:
    if args.config is not None:
        cfg = load_config(args.config)
    elif args.shapefile is not None:
        cfg = AppConfig.default(Path(args.shapefile))
    else:
        raise ValueError("Either --config or --shapefile is required")

    output = getattr(args, "output", None)
    cfg = cfg.with_overrides(
        shapefile=Path(args.shapefile) if args.shapefile is not None else None,
        markup=Path(output) if output not in (None, "-") else None,
        to_stdout=output == "-",
        deck=False if getattr(args, "no_deck", False) else None,
        geo=(
            None
            if args.bbox is None
            else GeoExtent(lon_min=args.bbox[0], lon_max=args.bbox[1], lat_min=args.bbox[2], lat_max=args.bbox[3])
        ),
        screen=(
            None
            if args.screen is None
            else ScreenExtent(
                x_min=args.screen[0], x_max=args.screen[1], y_min=args.screen[2], y_max=args.screen[3]
            )
        ),
        shape=args.shape,
        color=args.color,
        size=args.size,
        close_loop=False if getattr(args, "no_close_loop", False) else None,
    )
    log_path = cfg.output.logs_dir / "shpdeck.log" if cfg.output.logs_dir is not None else None
    setup_logging(log_path, verbose=args.verbose)
    return cfg


def _run_render(cfg: AppConfig) -> int:
    try:
        report = run_render(cfg)
    except OSError as exc:
        LOGGER.error("Writing markup failed: %s", exc)
        return 1
    for line in format_render_lines(report):
        LOGGER.info(line)
    return 0 if report.ok else 1


def _run_validate(cfg: AppConfig) -> int:
    report = Validator(cfg).run()
    for line in format_report_lines(report):
        LOGGER.info(line)
    return 0 if report.ok else 1


def _run_inspect(cfg: AppConfig, *, output_json: Path | None) -> int:
    try:
        payload = generate_inspection_report(cfg, output_json=output_json)
    except Exception as exc:
        LOGGER.error("Inspection failed: %s", exc)
        return 1
    LOGGER.info("Inspection summary: %s", json.dumps(payload["summary"], sort_keys=True))
    if output_json is not None:
        LOGGER.info("Inspection JSON report written to %s", output_json)
    return 0


def _dispatch(args: argparse.Namespace) -> int:
    cfg = _load_and_setup(args)
    command = str(args.command)
    if command == "render":
        return _run_render(cfg)
    if command == "validate":
        return _run_validate(cfg)
    if command == "inspect":
        return _run_inspect(cfg, output_json=Path(args.json) if args.json else None)
    raise ValueError(f"Unknown command: {command}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        return _dispatch(args)
    except (FileNotFoundError, ValueError) as exc:
        parser.exit(2, f"shpdeck: error: {exc}\n")


if __name__ == "__main__":
    raise SystemExit(main())
