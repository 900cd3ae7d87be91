"""Shapefile loading and conversion of Shapely geometries into records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, Sequence

from .models import Coordinate, GeoExtent, GeometryKind, GeometryRecord

_LOGGER = logging.getLogger("shpdeck.io_shp")


def _xy(coords: Any) -> list[Coordinate]:
    return [(float(c[0]), float(c[1])) for c in coords]


def _flatten_parts(rings: Sequence[list[Coordinate]]) -> tuple[list[int], list[Coordinate]]:
    parts: list[int] = []
    points: list[Coordinate] = []
    for ring in rings:
        if not ring:
            continue
        parts.append(len(points))
        points.extend(ring)
    return (parts, points)


def _polygon_rings(geometry: Any) -> list[list[Coordinate]]:
    rings = [_xy(geometry.exterior.coords)]
    for interior in geometry.interiors:
        rings.append(_xy(interior.coords))
    return rings


def records_from_geometry(geometry: Any) -> list[GeometryRecord]:
    """Convert one Shapely geometry into zero or more records.

    Multi-part geometries become one record whose parts are the member
    strands or rings; collections are flattened.
    """
    if geometry is None or getattr(geometry, "is_empty", True):
        return []
    geom_type = getattr(geometry, "geom_type", "")

    if geom_type == "Point":
        return [GeometryRecord.point(geometry.x, geometry.y)]

    if geom_type == "MultiPoint":
        return [GeometryRecord.multipoint([(pt.x, pt.y) for pt in geometry.geoms])]

    if geom_type in ("LineString", "LinearRing"):
        return [GeometryRecord.polyline([0], _xy(geometry.coords))]

    if geom_type == "MultiLineString":
        parts, points = _flatten_parts([_xy(line.coords) for line in geometry.geoms])
        return [GeometryRecord(kind=GeometryKind.POLYLINE, points=tuple(points), parts=tuple(parts))]

    if geom_type == "Polygon":
        parts, points = _flatten_parts(_polygon_rings(geometry))
        return [GeometryRecord(kind=GeometryKind.POLYGON, points=tuple(points), parts=tuple(parts))]

    if geom_type == "MultiPolygon":
        rings: list[list[Coordinate]] = []
        for polygon in geometry.geoms:
            if not polygon.is_empty:
                rings.extend(_polygon_rings(polygon))
        parts, points = _flatten_parts(rings)
        return [GeometryRecord(kind=GeometryKind.POLYGON, points=tuple(points), parts=tuple(parts))]

    if geom_type == "GeometryCollection":
        records: list[GeometryRecord] = []
        for member in geometry.geoms:
            records.extend(records_from_geometry(member))
        return records

    _LOGGER.warning("Unsupported geometry type %r; skipped", geom_type)
    return []


class ShapefileRepository:
    """Thin wrapper around shapefile access via GeoPandas."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Any:
        if not self.path.exists():
            raise FileNotFoundError(f"Shapefile not found: {self.path}")
        gpd = self._require_geopandas()
        frame = gpd.read_file(self.path)
        _LOGGER.debug("Loaded %d features from %s", len(frame), self.path)
        return frame

    @staticmethod
    def bounds(frame: Any) -> GeoExtent:
        """Overall geographic extent of every feature in the frame."""
        return GeoExtent.from_bounds(tuple(frame.total_bounds))

    @staticmethod
    def iter_records(frame: Any) -> Iterator[GeometryRecord]:
        for geometry in frame.geometry:
            yield from records_from_geometry(geometry)

    @staticmethod
    def _require_geopandas() -> Any:
        try:
            import geopandas as gpd
        except ImportError as exc:  # pragma: no cover
            raise RuntimeError("geopandas is required for shapefile loading") from exc
        return gpd
