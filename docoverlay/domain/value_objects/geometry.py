"""
Geometry value objects

Polygons arrive from the analysis engine as flat coordinate sequences
``[x1, y1, x2, y2, ...]`` in document units (inches or pixels depending on
the page ``unit``). Canvas rectangles are their pixel-space projections.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..exceptions import InvalidGeometry

MIN_POLYGON_COORDINATES = 8


@dataclass(frozen=True)
class Point:
    """A single (x, y) coordinate."""
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Polygon:
    """
    Immutable polygon in document units.

    Construction validates the coordinate sequence: at least 4 points
    (8 values) and an even number of values. Malformed input raises
    :class:`InvalidGeometry` rather than being coerced.
    """
    coordinates: Tuple[float, ...]

    def __post_init__(self):
        coords = self.coordinates
        if coords is None or isinstance(coords, (str, bytes)):
            raise InvalidGeometry("Polygon coordinates must be a sequence of numbers")
        try:
            values = tuple(float(value) for value in coords)
        except (TypeError, ValueError) as exc:
            raise InvalidGeometry(
                "Polygon coordinates must be numeric",
                original_error=exc,
            ) from exc
        if len(values) < MIN_POLYGON_COORDINATES:
            raise InvalidGeometry(
                "Invalid polygon: must have at least 4 points (8 coordinates)",
                context={"length": len(values)},
            )
        if len(values) % 2:
            raise InvalidGeometry(
                "Invalid polygon: coordinate count must be even",
                context={"length": len(values)},
            )
        object.__setattr__(self, "coordinates", values)

    @classmethod
    def from_raw(cls, raw: Optional[Iterable[Any]]) -> Optional[Polygon]:
        """
        Build a polygon from engine output.

        Returns ``None`` when no polygon was reported at all; a present but
        malformed sequence still raises :class:`InvalidGeometry`.
        """
        if raw is None:
            return None
        values = list(raw)
        if not values:
            return None
        return cls(tuple(values))

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> Polygon:
        coords: List[float] = []
        for point in points:
            coords.extend((point.x, point.y))
        return cls(tuple(coords))

    @property
    def points(self) -> Tuple[Point, ...]:
        coords = self.coordinates
        return tuple(Point(coords[i], coords[i + 1]) for i in range(0, len(coords), 2))

    def __len__(self) -> int:
        return len(self.coordinates)

    def __iter__(self):
        return iter(self.coordinates)

    def to_list(self) -> List[float]:
        return list(self.coordinates)


@dataclass(frozen=True)
class CanvasRect:
    """
    Axis-aligned pixel rectangle, optionally carrying the projected points of
    the polygon it was computed from.

    When ``points`` is empty the rectangle is the only geometry available and
    inverse mapping falls back to its four corners.
    """
    x: float
    y: float
    width: float
    height: float
    points: Tuple[Point, ...] = field(default_factory=tuple)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def has_points(self) -> bool:
        return bool(self.points)

    def to_dict(self, include_points: bool = True) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }
        if include_points:
            data["points"] = [point.to_dict() for point in self.points]
        return data

    def __str__(self) -> str:
        return f"Rect(x={self.x:.1f}, y={self.y:.1f}, w={self.width:.1f}, h={self.height:.1f})"


@dataclass(frozen=True)
class PageSize:
    """Dimensions of a page in document units."""
    page_number: int
    width: float
    height: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidGeometry(
                "Page dimensions must be positive",
                context={"page_number": self.page_number, "width": self.width, "height": self.height},
            )


def points_from_sequence(values: Sequence[float]) -> Tuple[Point, ...]:
    """Pair a flat coordinate sequence into points without validation."""
    return tuple(Point(values[i], values[i + 1]) for i in range(0, len(values) - 1, 2))
