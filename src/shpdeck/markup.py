"""Deck markup writers for polygons, line chains and dots."""

from __future__ import annotations

import logging
from html import escape
from typing import Sequence, TextIO

from .models import EmitStatus
from .style import SHAPE_DOT, SHAPE_LINE, SHAPE_POLYGON, canonical_shape, split_style

_LOGGER = logging.getLogger("shpdeck.markup")

LINE_FORMAT = (
    '<line xp1="{x1:.7f}" yp1="{y1:.7f}" xp2="{x2:.7f}" yp2="{y2:.7f}" '
    'color="{color}" opacity="{opacity}" sp="{size:.3f}"/>\n'
)
DOT_FORMAT = (
    '<ellipse xp="{x:.7f}" yp="{y:.7f}" hr="100" '
    'color="{color}" opacity="{opacity}" wp="{size:.3f}"/>\n'
)
POLYGON_FORMAT = '<polygon color="{color}" opacity="{opacity}" xc="{xc}" yc="{yc}"/>\n'

MIN_POLYGON_POINTS = 3


def _attr(value: str) -> str:
    return escape(value, quote=True)


def _check_parallel(xs: Sequence[float], ys: Sequence[float]) -> None:
    if len(xs) != len(ys):
        raise ValueError(f"X/Y coordinate lengths differ: {len(xs)} != {len(ys)}")


def format_dot(x: float, y: float, color: str, opacity: str, size: float) -> str:
    return DOT_FORMAT.format(x=x, y=y, color=_attr(color), opacity=_attr(opacity), size=size)


def format_line(
    x1: float, y1: float, x2: float, y2: float, color: str, opacity: str, size: float
) -> str:
    return LINE_FORMAT.format(
        x1=x1, y1=y1, x2=x2, y2=y2, color=_attr(color), opacity=_attr(opacity), size=size
    )


def emit_polygon(dest: TextIO, xs: Sequence[float], ys: Sequence[float], color: str) -> EmitStatus:
    """Write one filled polygon; fewer than three vertices is a silent skip."""
    if len(xs) < MIN_POLYGON_POINTS or len(xs) != len(ys):
        return EmitStatus.SKIPPED
    fill, opacity = split_style(color)
    dest.write(
        POLYGON_FORMAT.format(
            color=_attr(fill),
            opacity=_attr(opacity),
            xc=" ".join(f"{x:.5f}" for x in xs),
            yc=" ".join(f"{y:.5f}" for y in ys),
        )
    )
    return EmitStatus.RENDERED


def emit_dots(
    dest: TextIO, xs: Sequence[float], ys: Sequence[float], color: str, size: float
) -> EmitStatus:
    """Write one circle per coordinate, in input order."""
    _check_parallel(xs, ys)
    if not xs:
        return EmitStatus.SKIPPED
    fill, opacity = split_style(color)
    for x, y in zip(xs, ys):
        dest.write(format_dot(x, y, fill, opacity, size))
    return EmitStatus.RENDERED


def emit_polyline(
    dest: TextIO,
    xs: Sequence[float],
    ys: Sequence[float],
    color: str,
    size: float,
    *,
    close_loop: bool = True,
) -> EmitStatus:
    """Write a chain of line segments between consecutive coordinates.

    With `close_loop` an extra segment joins the last coordinate back to the
    first, so a single coordinate yields one zero-length segment.
    """
    _check_parallel(xs, ys)
    count = len(xs)
    if count == 0 or (count < 2 and not close_loop):
        return EmitStatus.SKIPPED
    fill, opacity = split_style(color)
    for i in range(count - 1):
        dest.write(format_line(xs[i], ys[i], xs[i + 1], ys[i + 1], fill, opacity, size))
    if close_loop:
        dest.write(format_line(xs[0], ys[0], xs[-1], ys[-1], fill, opacity, size))
    return EmitStatus.RENDERED


def emit_shape(
    dest: TextIO,
    xs: Sequence[float],
    ys: Sequence[float],
    shape: str,
    color: str,
    size: float,
    *,
    close_loop: bool = True,
) -> EmitStatus:
    """Write markup for `shape`; unknown keywords draw nothing."""
    canonical = canonical_shape(shape)
    if canonical == SHAPE_POLYGON:
        return emit_polygon(dest, xs, ys, color)
    if canonical == SHAPE_LINE:
        return emit_polyline(dest, xs, ys, color, size, close_loop=close_loop)
    if canonical == SHAPE_DOT:
        return emit_dots(dest, xs, ys, color, size)
    _LOGGER.debug("Unknown shape keyword %r; nothing drawn", shape)
    return EmitStatus.SKIPPED
