"""
GeometryMapper domain service.

Pure functions converting polygons reported in document units into
pixel-space rectangles on an arbitrary render surface, and back.

For a page of ``page_width x page_height`` document units rendered into a
``canvas_width x canvas_height`` canvas at ``scale``::

    canvas_x = (doc_x / page_width) * canvas_width * scale
    canvas_y = (doc_y / page_height) * canvas_height * scale

Nothing here holds state, so the same polygon can be projected for several
views (e.g. two zoom levels) at once.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, Union

from docoverlay.domain.exceptions import InvalidGeometry
from docoverlay.domain.value_objects.geometry import CanvasRect, Point, Polygon

PolygonLike = Union[Polygon, Sequence[float]]


def _as_polygon(polygon: PolygonLike) -> Polygon:
    if isinstance(polygon, Polygon):
        return polygon
    if polygon is None:
        raise InvalidGeometry("Invalid polygon: no coordinates")
    return Polygon(tuple(polygon))


def _check_dimensions(**dimensions: float) -> None:
    for name, value in dimensions.items():
        if value is None or value <= 0:
            raise InvalidGeometry(
                f"{name} must be positive",
                context=dict(dimensions),
            )


def bounding_rect(points: Sequence[Point]) -> CanvasRect:
    """Axis-aligned bounding rectangle of ``points`` (which it keeps)."""
    if not points:
        raise InvalidGeometry("Cannot bound an empty point list")
    xs = [point.x for point in points]
    ys = [point.y for point in points]
    min_x, min_y = min(xs), min(ys)
    return CanvasRect(
        x=min_x,
        y=min_y,
        width=max(xs) - min_x,
        height=max(ys) - min_y,
        points=tuple(points),
    )


def polygon_to_canvas(
    polygon: PolygonLike,
    page_width: float,
    page_height: float,
    canvas_width: float,
    canvas_height: float,
    scale: float = 1.0,
) -> CanvasRect:
    """
    Project a document-unit polygon onto a canvas.

    Args:
        polygon: ``Polygon`` or flat ``[x1, y1, x2, y2, ...]`` sequence
        page_width, page_height: Page size in document units
        canvas_width, canvas_height: Render surface size in pixels
        scale: Zoom factor applied on top of the canvas size

    Returns:
        Bounding rectangle of the transformed points, carrying the points

    Raises:
        InvalidGeometry: If the polygon has fewer than 4 points, an odd number
            of coordinates, or any dimension is not positive

    Examples:
        >>> polygon_to_canvas([0, 0, 100, 0, 100, 100, 0, 100], 100, 100, 200, 200)
        CanvasRect(x=0.0, y=0.0, width=200.0, height=200.0, points=(...))
    """
    shape = _as_polygon(polygon)
    _check_dimensions(
        page_width=page_width,
        page_height=page_height,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        scale=scale,
    )

    x_factor = canvas_width * scale / page_width
    y_factor = canvas_height * scale / page_height
    points = tuple(Point(point.x * x_factor, point.y * y_factor) for point in shape.points)
    return bounding_rect(points)


def canvas_to_document(
    rect: CanvasRect,
    page_width: float,
    page_height: float,
    canvas_width: float,
    canvas_height: float,
    scale: float = 1.0,
) -> Tuple[float, ...]:
    """
    Map a projected rectangle back into document units.

    When ``rect`` carries its points each one is mapped back exactly. A bare
    rectangle is first expanded to its four corners (clockwise from top-left),
    so any skew of the original polygon is lost.

    Returns:
        Flat coordinate tuple ``(x1, y1, x2, y2, ...)``
    """
    _check_dimensions(
        page_width=page_width,
        page_height=page_height,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        scale=scale,
    )
    x_factor = page_width / (canvas_width * scale)
    y_factor = page_height / (canvas_height * scale)

    if rect.points:
        points: Iterable[Point] = rect.points
    else:
        points = rect_corners(rect)

    coords: List[float] = []
    for point in points:
        coords.extend((point.x * x_factor, point.y * y_factor))
    return tuple(coords)


def polygon_points(polygon: PolygonLike) -> Tuple[Point, ...]:
    """Validated point list of a flat polygon."""
    return _as_polygon(polygon).points


def points_to_polygon(points: Iterable[Point]) -> Tuple[float, ...]:
    """Flatten points into ``(x1, y1, x2, y2, ...)``."""
    return Polygon.from_points(points).coordinates


def rect_corners(rect: CanvasRect) -> Tuple[Point, Point, Point, Point]:
    return (
        Point(rect.x, rect.y),
        Point(rect.right, rect.y),
        Point(rect.right, rect.bottom),
        Point(rect.x, rect.bottom),
    )


def scale_rect(rect: CanvasRect, factor: float) -> CanvasRect:
    """Scale a rectangle (and its points) around the canvas origin."""
    return CanvasRect(
        x=rect.x * factor,
        y=rect.y * factor,
        width=rect.width * factor,
        height=rect.height * factor,
        points=tuple(Point(point.x * factor, point.y * factor) for point in rect.points),
    )


def point_in_rect(point: Point, rect: CanvasRect) -> bool:
    """Inclusive containment test against the rectangle edges."""
    return rect.x <= point.x <= rect.right and rect.y <= point.y <= rect.bottom


def point_in_polygon(point: Point, vertices: Sequence[Point]) -> bool:
    """Ray casting containment test for a (possibly skewed) polygon."""
    inside = False
    j = len(vertices) - 1
    for i, current in enumerate(vertices):
        previous = vertices[j]
        if (current.y > point.y) != (previous.y > point.y):
            crossing = (previous.x - current.x) * (point.y - current.y) / (previous.y - current.y) + current.x
            if point.x < crossing:
                inside = not inside
        j = i
    return inside


def rects_overlap(first: CanvasRect, second: CanvasRect) -> bool:
    return not (
        first.right < second.x
        or second.right < first.x
        or first.bottom < second.y
        or second.bottom < first.y
    )


def rect_center(rect: CanvasRect) -> Point:
    return Point(rect.x + rect.width / 2, rect.y + rect.height / 2)


def rect_area(rect: CanvasRect) -> float:
    return rect.width * rect.height


def clamp_to_canvas(point: Point, canvas_width: float, canvas_height: float) -> Point:
    return Point(
        max(0.0, min(canvas_width, point.x)),
        max(0.0, min(canvas_height, point.y)),
    )
