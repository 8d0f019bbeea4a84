"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import LineString
from shapely.geometry import Point as ShapelyPoint

from shapecanvas.models.geometry import Bounds, Point

# Below this fraction of the squared extent, the shoelace centroid is undefined.
_AREA_EPS = 1e-12


def _as_array(points: Sequence[Point]) -> NDArray[np.float64]:
    if not points:
        return np.empty((0, 2))
    return np.array([(p.x, p.y) for p in points], dtype=np.float64)


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def midpoint(p1: Point, p2: Point) -> Point:
    return Point(x=(p1.x + p2.x) / 2, y=(p1.y + p2.y) / 2)


def points_equal(p1: Point, p2: Point, epsilon: float = 1e-9) -> bool:
    """Value equality within an absolute tolerance."""
    return math.isclose(p1.x, p2.x, abs_tol=epsilon) and math.isclose(p1.y, p2.y, abs_tol=epsilon)


def is_closed(points: Sequence[Point], epsilon: float = 1e-9) -> bool:
    """At least three points and the last one returns to the first."""
    return len(points) >= 3 and points_equal(points[0], points[-1], epsilon)


def should_snap_to_start(current: Point, start: Point, snap_distance: float = 20.0) -> bool:
    """True if ``current`` is within ``snap_distance`` of ``start``.

    Does not look at how many points the shape has; callers require
    at least three before treating a snap as closing the shape.
    """
    return distance(current, start) <= snap_distance


def calculate_quadratic_control_points(points: Sequence[Point]) -> list[Point]:
    """One control point per segment: the midpoint of its two anchors."""
    if len(points) < 2:
        return []
    return [midpoint(points[i], points[i + 1]) for i in range(len(points) - 1)]


def calculate_centroid(points: Sequence[Point], is_closed: bool = True) -> Point:
    """Area-weighted polygon centroid (shoelace formula).

    Open input is closed by logically repeating the first point. Zero-area
    input (collinear or repeated points) has no area centroid; the mean of the
    distinct vertices is returned instead.
    """
    if len(points) < 2:
        return Point(x=0.0, y=0.0)

    ring = list(points) if is_closed else [*points, points[0]]
    arr = _as_array(ring)
    # Work relative to the first vertex to keep precision far from the origin
    origin = arr[0]
    local = arr - origin
    x, y = local[:-1, 0], local[:-1, 1]
    x1, y1 = local[1:, 0], local[1:, 1]
    cross = x * y1 - x1 * y
    area = 0.5 * float(np.sum(cross))
    extent = float(np.max(np.ptp(local, axis=0)))

    if extent > 0 and abs(area) > _AREA_EPS * extent * extent:
        cx = float(np.sum((x + x1) * cross)) / (6.0 * area) + float(origin[0])
        cy = float(np.sum((y + y1) * cross)) / (6.0 * area) + float(origin[1])
        if math.isfinite(cx) and math.isfinite(cy):
            return Point(x=cx, y=cy)

    vertices = arr[:-1] if not is_closed or points_equal(points[0], points[-1]) else arr
    return Point(x=float(np.mean(vertices[:, 0])), y=float(np.mean(vertices[:, 1])))


def compute_bounds(points: Sequence[Point], extra_points: Sequence[Point] = ()) -> Bounds:
    """Axis-aligned bounding box over ``points`` and ``extra_points``."""
    if not points:
        return Bounds()
    arr = _as_array([*points, *extra_points])
    xmin, ymin = arr.min(axis=0)
    xmax, ymax = arr.max(axis=0)
    return Bounds(
        x=float(xmin),
        y=float(ymin),
        width=float(xmax - xmin),
        height=float(ymax - ymin),
    )


def rank_by_distance(points: Sequence[Point], target: Point) -> list[int]:
    """Indices of ``points`` ordered by ascending distance to ``target``.

    Ties keep their original order.
    """
    if not points:
        return []
    arr = _as_array(points)
    dists = np.hypot(arr[:, 0] - target.x, arr[:, 1] - target.y)
    return [int(i) for i in np.argsort(dists, kind="stable")]


def find_two_nearest_points(
    points: Sequence[Point], target: Point
) -> tuple[Point, Point] | None:
    """The nearest and second-nearest points to ``target``, or None if fewer than two."""
    if len(points) < 2:
        return None
    order = rank_by_distance(points, target)
    return points[order[0]], points[order[1]]


def plan_insertion_index(points: Sequence[Point], new_point: Point) -> int | None:
    """Where to insert ``new_point`` into a closed ring of vertices.

    Vertex-proximity heuristic: find the two existing vertices nearest to the
    new point. The ring's last edge wraps back to index 0, which is why both
    end cases can fall back to appending.

    - nearest is the first vertex: insert between it and the second vertex if
      that is the runner-up, otherwise append (the point sits on the closing edge);
    - nearest is the last vertex: insert just before it if its predecessor is the
      runner-up, otherwise append;
    - otherwise insert immediately before the nearest vertex.

    Returns None for fewer than two points.
    """
    if len(points) < 2:
        return None
    order = rank_by_distance(points, new_point)
    nearest, second = order[0], order[1]
    last = len(points) - 1

    if nearest == 0:
        return 1 if second == 1 else len(points)
    if nearest == last:
        return last if second == last - 1 else len(points)
    return nearest


def plan_insertion_index_by_segment(points: Sequence[Point], new_point: Point) -> int | None:
    """Where to insert ``new_point`` using true point-to-segment distance.

    Every ring edge (including the closing edge) is measured; the point goes
    right after the start vertex of the nearest edge.
    """
    if len(points) < 2:
        return None
    target = ShapelyPoint(new_point.x, new_point.y)
    best_index = len(points)
    best_dist = math.inf
    for i, start in enumerate(points):
        end = points[(i + 1) % len(points)]
        if points_equal(start, end):
            continue
        d = LineString([(start.x, start.y), (end.x, end.y)]).distance(target)
        if d < best_dist:
            best_dist = d
            best_index = i + 1
    return best_index


def insert_point(
    points: Sequence[Point], new_point: Point, by_segment: bool = False
) -> list[Point]:
    """Return a copy of ``points`` with ``new_point`` inserted at its planned index."""
    plan = plan_insertion_index_by_segment if by_segment else plan_insertion_index
    index = plan(points, new_point)
    if index is None:
        return [*points, new_point]
    return [*points[:index], new_point, *points[index:]]


def constrain_to_axis(current: Point, reference: Point) -> Point:
    """Lock a drag to horizontal or vertical, whichever delta is larger."""
    dx = current.x - reference.x
    dy = current.y - reference.y
    if abs(dx) > abs(dy):
        return Point(x=current.x, y=reference.y)
    return Point(x=reference.x, y=current.y)


def translate_points(points: Sequence[Point], dx: float, dy: float) -> list[Point]:
    return [Point(x=p.x + dx, y=p.y + dy) for p in points]
