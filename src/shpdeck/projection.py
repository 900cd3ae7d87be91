"""Linear geographic-to-screen coordinate mapping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .models import Coordinate, GeoExtent, ScreenExtent


def project(value: float, src_low: float, src_high: float, dst_low: float, dst_high: float) -> float:
    """Map `value` from `[src_low, src_high]` onto `[dst_low, dst_high]`.

    Values outside the source interval extrapolate linearly; nothing is clamped.
    """
    if src_high == src_low:
        raise ValueError(f"Cannot project from zero-width interval [{src_low}, {src_high}]")
    return dst_low + (dst_high - dst_low) * (value - src_low) / (src_high - src_low)


@dataclass(frozen=True, slots=True)
class MapProjection:
    """Affine mapping defined by a geographic extent and the screen extent it fills."""

    geo: GeoExtent
    screen: ScreenExtent

    def __post_init__(self) -> None:
        if self.geo.degenerate:
            raise ValueError(f"Degenerate geographic extent: {self.geo}")
        if self.screen.degenerate:
            raise ValueError(f"Degenerate screen extent: {self.screen}")

    def project_x(self, lon: float) -> float:
        return project(lon, self.geo.lon_min, self.geo.lon_max, self.screen.x_min, self.screen.x_max)

    def project_y(self, lat: float) -> float:
        return project(lat, self.geo.lat_min, self.geo.lat_max, self.screen.y_min, self.screen.y_max)

    def project_point(self, point: Coordinate) -> Coordinate:
        return (self.project_x(point[0]), self.project_y(point[1]))

    def project_points(self, points: Iterable[Coordinate]) -> tuple[list[float], list[float]]:
        """Project coordinates into parallel X and Y lists."""
        xs: list[float] = []
        ys: list[float] = []
        for lon, lat in points:
            xs.append(self.project_x(lon))
            ys.append(self.project_y(lat))
        return (xs, ys)
