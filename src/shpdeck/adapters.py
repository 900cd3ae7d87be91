"""Per-geometry-kind conversion of shapefile records into deck markup."""

from __future__ import annotations

import logging
from typing import Iterator, TextIO

from .markup import emit_dots, emit_shape, format_dot
from .models import EmitStatus, GeometryKind, GeometryRecord, StyleConfig
from .projection import MapProjection
from .style import split_style

_LOGGER = logging.getLogger("shpdeck.adapters")


def _iter_projected_parts(
    record: GeometryRecord, projection: MapProjection
) -> Iterator[tuple[list[float], list[float]]]:
    """Yield projected `(xs, ys)` per part.

    Records without part structure are treated as a single part spanning all
    points. Empty records yield nothing.
    """
    if not record.points:
        return
    if not record.kind.has_parts:
        yield projection.project_points(record.points)
        return
    for start, end in record.part_ranges():
        yield projection.project_points(record.points[start:end])


def point_coords(
    dest: TextIO, record: GeometryRecord, projection: MapProjection, style: StyleConfig
) -> tuple[EmitStatus, ...]:
    """Place one dot at the point, whatever shape keyword is configured."""
    x, y = projection.project_point(record.points[0])
    fill, opacity = split_style(style.color)
    dest.write(format_dot(x, y, fill, opacity, style.size))
    return (EmitStatus.RENDERED,)


def multipoint_coords(
    dest: TextIO, record: GeometryRecord, projection: MapProjection, style: StyleConfig
) -> tuple[EmitStatus, ...]:
    """Place one dot per coordinate, whatever shape keyword is configured."""
    return tuple(
        emit_dots(dest, xs, ys, style.color, style.size)
        for xs, ys in _iter_projected_parts(record, projection)
    )


def _part_coords(
    dest: TextIO, record: GeometryRecord, projection: MapProjection, style: StyleConfig
) -> tuple[EmitStatus, ...]:
    results: list[EmitStatus] = []
    for idx, (xs, ys) in enumerate(_iter_projected_parts(record, projection)):
        status = emit_shape(
            dest, xs, ys, style.shape, style.color, style.size, close_loop=style.close_loop
        )
        if status is EmitStatus.SKIPPED:
            _LOGGER.debug(
                "Skipped %s part %d (%d points, shape=%r)",
                record.kind.value,
                idx,
                len(xs),
                style.shape,
            )
        results.append(status)
    return tuple(results)


def polyline_coords(
    dest: TextIO, record: GeometryRecord, projection: MapProjection, style: StyleConfig
) -> tuple[EmitStatus, ...]:
    """Draw every part of a polyline as an independent shape."""
    return _part_coords(dest, record, projection, style)


def polygon_coords(
    dest: TextIO, record: GeometryRecord, projection: MapProjection, style: StyleConfig
) -> tuple[EmitStatus, ...]:
    """Draw every ring of a polygon as an independent shape."""
    return _part_coords(dest, record, projection, style)


_ADAPTERS = {
    GeometryKind.POINT: point_coords,
    GeometryKind.POLYLINE: polyline_coords,
    GeometryKind.POLYGON: polygon_coords,
    GeometryKind.MULTIPOINT: multipoint_coords,
}


def render_record(
    dest: TextIO, record: GeometryRecord, projection: MapProjection, style: StyleConfig
) -> tuple[EmitStatus, ...]:
    return _ADAPTERS[record.kind](dest, record, projection, style)
