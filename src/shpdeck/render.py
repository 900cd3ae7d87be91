"""Shapefile to deck markup rendering pipeline."""

from __future__ import annotations

import logging
import math
import sys
import time
from dataclasses import dataclass, field
from html import escape
from pathlib import Path
from typing import Any, Iterable, Sequence, TextIO

from .adapters import render_record
from .config import AppConfig
from .io_shp import ShapefileRepository
from .models import EmitStatus, GeoExtent, GeometryRecord, StyleConfig
from .projection import MapProjection
from .style import is_known_shape

_LOGGER = logging.getLogger("shpdeck.render")


@dataclass(slots=True)
class RenderReport:
    output_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    infos: list[str] = field(default_factory=list)
    summary: dict[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def add_info(self, msg: str) -> None:
        self.infos.append(msg)


def resolve_geo_extent(cfg: AppConfig, frame: Any) -> GeoExtent:
    """Configured geographic extent, else the bounds of the loaded shapefile."""
    if cfg.extent.geo is not None:
        return cfg.extent.geo
    return ShapefileRepository.bounds(frame)


def build_projection(geo: GeoExtent, cfg: AppConfig) -> MapProjection:
    values = (*geo.to_dict().values(), *cfg.extent.screen.to_dict().values())
    if not all(math.isfinite(v) for v in values):
        raise ValueError(f"Extents must be finite: geo={geo}, screen={cfg.extent.screen}")
    return MapProjection(geo=geo, screen=cfg.extent.screen)


def render_records(
    dest: TextIO,
    records: Iterable[GeometryRecord],
    projection: MapProjection,
    style: StyleConfig,
) -> dict[str, int]:
    """Write markup for every record and count the outcome per part."""
    counts = {
        "records_total": 0,
        "records_empty": 0,
        "parts_rendered": 0,
        "parts_skipped": 0,
    }
    for record in records:
        counts["records_total"] += 1
        counts[f"kind_{record.kind.value}"] = counts.get(f"kind_{record.kind.value}", 0) + 1
        results = render_record(dest, record, projection, style)
        if not results:
            counts["records_empty"] += 1
        for status in results:
            if status is EmitStatus.RENDERED:
                counts["parts_rendered"] += 1
            else:
                counts["parts_skipped"] += 1
    return counts


def write_deck_open(dest: TextIO, slide_bg: str | None) -> None:
    dest.write("<deck>\n")
    if slide_bg:
        dest.write(f'<slide bg="{escape(slide_bg, quote=True)}">\n')
    else:
        dest.write("<slide>\n")


def write_deck_close(dest: TextIO) -> None:
    dest.write("</slide>\n</deck>\n")


def run_render(
    cfg: AppConfig,
    *,
    dest: TextIO | None = None,
    frame: Any | None = None,
) -> RenderReport:
    """Render every geometry of the configured shapefile.

    Without `dest`, markup goes to `cfg.output.markup` or stdout. Errors
    raised by the sink are not caught.
    """
    report = RenderReport(output_path=cfg.output.markup if dest is None else None)
    t0 = time.perf_counter()

    if frame is None:
        repo = ShapefileRepository(cfg.input.shapefile)
        try:
            frame = repo.load()
        except Exception as exc:
            report.add_error(f"Failed loading shapefile '{cfg.input.shapefile}': {exc}")
            return report
    report.add_info(f"Loaded {len(frame)} features from {cfg.input.shapefile}")

    try:
        geo = resolve_geo_extent(cfg, frame)
        projection = build_projection(geo, cfg)
    except ValueError as exc:
        report.add_error(f"Invalid projection extents: {exc}")
        return report
    report.add_info(
        f"Projection: lon [{geo.lon_min}, {geo.lon_max}] lat [{geo.lat_min}, {geo.lat_max}] "
        f"-> x [{projection.screen.x_min}, {projection.screen.x_max}] "
        f"y [{projection.screen.y_min}, {projection.screen.y_max}]"
    )

    style = cfg.style
    if not is_known_shape(style.shape):
        report.add_warning(
            f"Unknown shape keyword '{style.shape}'; polylines and polygons will not be drawn."
        )

    records = ShapefileRepository.iter_records(frame)
    if dest is not None:
        report.summary = _write_markup(dest, records, projection, cfg)
    elif cfg.output.markup is None:
        report.summary = _write_markup(sys.stdout, records, projection, cfg)
    else:
        cfg.output.markup.parent.mkdir(parents=True, exist_ok=True)
        with cfg.output.markup.open("w", encoding="utf-8") as fh:
            report.summary = _write_markup(fh, records, projection, cfg)

    elapsed = time.perf_counter() - t0
    summary = report.summary
    report.add_info(
        "Render summary: "
        f"records_total={summary['records_total']}, "
        f"parts_rendered={summary['parts_rendered']}, "
        f"parts_skipped={summary['parts_skipped']}, "
        f"records_empty={summary['records_empty']}"
    )
    _LOGGER.debug("Rendered %d records in %.2fs", summary["records_total"], elapsed)
    if report.ok and report.output_path is not None:
        report.add_info(f"Markup written to {report.output_path}")
    return report


def _write_markup(
    dest: TextIO,
    records: Iterable[GeometryRecord],
    projection: MapProjection,
    cfg: AppConfig,
) -> dict[str, int]:
    if cfg.output.deck:
        write_deck_open(dest, cfg.output.slide_bg)
    counts = render_records(dest, records, projection, cfg.style)
    if cfg.output.deck:
        write_deck_close(dest)
    return counts


def format_render_lines(report: RenderReport) -> Sequence[str]:
    lines: list[str] = []
    lines.extend(f"[INFO] {msg}" for msg in report.infos)
    lines.extend(f"[WARN] {msg}" for msg in report.warnings)
    lines.extend(f"[ERROR] {msg}" for msg in report.errors)
    if report.ok:
        lines.append("[OK] Rendering completed with no errors.")
    return lines
