"""Shapefile inspection summary for checking inputs before rendering."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any

from .config import AppConfig
from .io_shp import ShapefileRepository
from .markup import MIN_POLYGON_POINTS
from .models import GeometryRecord
from .render import build_projection, resolve_geo_extent
from .util import write_json


def summarize_records(records: list[GeometryRecord]) -> dict[str, Any]:
    kinds: Counter[str] = Counter(record.kind.value for record in records)
    part_sizes: list[int] = []
    for record in records:
        if record.kind.has_parts:
            part_sizes.extend(end - start for start, end in record.part_ranges())
    return {
        "records_total": len(records),
        "records_by_kind": dict(sorted(kinds.items())),
        "records_empty": sum(1 for record in records if not record.points),
        "points_total": sum(record.num_points for record in records),
        "parts_total": len(part_sizes),
        "parts_below_polygon_minimum": sum(1 for size in part_sizes if size < MIN_POLYGON_POINTS),
        "largest_part_points": max(part_sizes, default=0),
    }


def generate_inspection_report(
    cfg: AppConfig,
    *,
    frame: Any | None = None,
    output_json: Path | None = None,
) -> dict[str, Any]:
    """Summarize the configured shapefile and the projection a render would use."""
    if frame is None:
        frame = ShapefileRepository(cfg.input.shapefile).load()
    records = list(ShapefileRepository.iter_records(frame))

    geo = resolve_geo_extent(cfg, frame)
    projection_info: dict[str, Any] = {
        "geo": geo.to_dict(),
        "geo_source": "config" if cfg.extent.geo is not None else "shapefile_bounds",
        "screen": cfg.extent.screen.to_dict(),
    }
    try:
        build_projection(geo, cfg)
        projection_info["valid"] = True
    except ValueError as exc:
        projection_info["valid"] = False
        projection_info["error"] = str(exc)

    payload = {
        "meta": {
            "shapefile": str(cfg.input.shapefile),
            "feature_count": int(len(frame)),
            "shape": cfg.style.shape,
            "color": cfg.style.color,
            "size": cfg.style.size,
        },
        "projection": projection_info,
        "summary": summarize_records(records),
    }
    if output_json is not None:
        write_json(output_json, payload)
    return payload
