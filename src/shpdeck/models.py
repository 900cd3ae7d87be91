"""Domain models shared across rendering modules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Mapping, Sequence

Coordinate = tuple[float, float]


def _require_float(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Expected numeric value for '{field_name}'")
    return float(value)


@dataclass(frozen=True, slots=True)
class GeoExtent:
    """Geographic bounding rectangle (degrees)."""

    lon_min: float
    lon_max: float
    lat_min: float
    lat_max: float

    @property
    def degenerate(self) -> bool:
        return self.lon_min == self.lon_max or self.lat_min == self.lat_max

    @classmethod
    def from_bounds(cls, bounds: Sequence[float]) -> GeoExtent:
        """Build from a `(minx, miny, maxx, maxy)` tuple as returned by `total_bounds`."""
        if len(bounds) != 4:
            raise ValueError(f"Expected 4 bound values, got {len(bounds)}")
        minx, miny, maxx, maxy = (float(v) for v in bounds)
        return cls(lon_min=minx, lon_max=maxx, lat_min=miny, lat_max=maxy)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], prefix: str = "extent.geo") -> GeoExtent:
        return cls(
            lon_min=_require_float(raw.get("lon_min"), f"{prefix}.lon_min"),
            lon_max=_require_float(raw.get("lon_max"), f"{prefix}.lon_max"),
            lat_min=_require_float(raw.get("lat_min"), f"{prefix}.lat_min"),
            lat_max=_require_float(raw.get("lat_max"), f"{prefix}.lat_max"),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "lon_min": self.lon_min,
            "lon_max": self.lon_max,
            "lat_min": self.lat_min,
            "lat_max": self.lat_max,
        }


@dataclass(frozen=True, slots=True)
class ScreenExtent:
    """Output canvas rectangle in markup units."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def degenerate(self) -> bool:
        return self.x_min == self.x_max or self.y_min == self.y_max

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], prefix: str = "extent.screen") -> ScreenExtent:
        return cls(
            x_min=_require_float(raw.get("x_min"), f"{prefix}.x_min"),
            x_max=_require_float(raw.get("x_max"), f"{prefix}.x_max"),
            y_min=_require_float(raw.get("y_min"), f"{prefix}.y_min"),
            y_max=_require_float(raw.get("y_max"), f"{prefix}.y_max"),
        )

    @classmethod
    def default(cls) -> ScreenExtent:
        return cls(x_min=5.0, x_max=95.0, y_min=5.0, y_max=95.0)

    def to_dict(self) -> dict[str, float]:
        return {
            "x_min": self.x_min,
            "x_max": self.x_max,
            "y_min": self.y_min,
            "y_max": self.y_max,
        }


@dataclass(frozen=True, slots=True)
class StyleConfig:
    """Shape keyword, compound color and size shared by every emission of a run."""

    shape: str
    color: str
    size: float
    close_loop: bool = True


class GeometryKind(Enum):
    POINT = "point"
    POLYLINE = "polyline"
    POLYGON = "polygon"
    MULTIPOINT = "multipoint"

    @property
    def has_parts(self) -> bool:
        return self in (GeometryKind.POLYLINE, GeometryKind.POLYGON)


class EmitStatus(Enum):
    """Outcome of one emitter call."""

    RENDERED = "rendered"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class GeometryRecord:
    """One shapefile geometry in geographic coordinates.

    Polyline and polygon records carry part-start offsets into `points`; a
    part spans from its offset up to the next one, the last part running to
    the end of the point list. Point and multipoint records have no parts.
    """

    kind: GeometryKind
    points: tuple[Coordinate, ...]
    parts: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if self.kind is GeometryKind.POINT and len(self.points) != 1:
            raise ValueError(f"Point record needs exactly one coordinate, got {len(self.points)}")
        if not self.kind.has_parts:
            if self.parts:
                raise ValueError(f"{self.kind.value} record cannot have parts")
            return
        if not self.parts:
            return
        if not self.points:
            # a record with part offsets but no coordinates has nothing to draw
            object.__setattr__(self, "parts", ())
            return
        if self.parts[0] != 0:
            raise ValueError(f"First part must start at offset 0, got {self.parts[0]}")
        previous = -1
        for offset in self.parts:
            if offset <= previous:
                raise ValueError(f"Part offsets must be strictly increasing: {self.parts}")
            if offset >= len(self.points):
                raise ValueError(
                    f"Part offset {offset} out of range for {len(self.points)} points"
                )
            previous = offset

    @property
    def num_points(self) -> int:
        return len(self.points)

    @property
    def num_parts(self) -> int:
        return len(self.parts)

    def part_ranges(self) -> Iterator[tuple[int, int]]:
        """Yield half-open `(start, end)` index ranges, one per part."""
        bounds = (*self.parts, self.num_points)
        for start, end in zip(bounds, bounds[1:]):
            yield (start, end)

    @classmethod
    def point(cls, x: float, y: float) -> GeometryRecord:
        return cls(kind=GeometryKind.POINT, points=((float(x), float(y)),))

    @classmethod
    def multipoint(cls, points: Sequence[Coordinate]) -> GeometryRecord:
        return cls(kind=GeometryKind.MULTIPOINT, points=_as_coords(points))

    @classmethod
    def polyline(cls, parts: Sequence[int], points: Sequence[Coordinate]) -> GeometryRecord:
        return cls(kind=GeometryKind.POLYLINE, points=_as_coords(points), parts=tuple(parts))

    @classmethod
    def polygon(cls, parts: Sequence[int], points: Sequence[Coordinate]) -> GeometryRecord:
        return cls(kind=GeometryKind.POLYGON, points=_as_coords(points), parts=tuple(parts))


def _as_coords(points: Sequence[Sequence[float]]) -> tuple[Coordinate, ...]:
    return tuple((float(p[0]), float(p[1])) for p in points)
