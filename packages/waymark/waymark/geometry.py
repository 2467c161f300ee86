"""Curve densification and arc-length lookup.

Curves are centripetal Catmull-Rom splines: knots are spaced by chord length
raised to ``ALPHA = 0.5``, which keeps unevenly spaced waypoints from
producing cusps or self-intersections. Every function here is pure and
evaluates its arithmetic in a fixed order, so preview and export sample
bit-identical curves.
"""
from __future__ import annotations

import bisect
import itertools
import math
from typing import Sequence

from waymark.types import Point

ALPHA = 0.5
DEFAULT_DENSITY = 20
DEFAULT_TENSION = 0.5


def distance(a: Point, b: Point) -> float:
    dx = b.x - a.x
    dy = b.y - a.y
    return math.sqrt(dx * dx + dy * dy)


def _knot_interval(a: Point, b: Point) -> float:
    # Clamped neighbors coincide with their endpoint; a unit interval keeps the
    # pyramid finite without moving the curve's ends.
    d = distance(a, b)
    if d == 0.0:
        return 1.0
    return d**ALPHA


def _blend(
    ax: float, ay: float, bx: float, by: float, ta: float, tb: float, t: float
) -> tuple[float, float]:
    span = tb - ta
    wa = (tb - t) / span
    wb = (t - ta) / span
    return wa * ax + wb * bx, wa * ay + wb * by


def catmull_rom_centripetal(
    p0: Point,
    p1: Point,
    p2: Point,
    p3: Point,
    u: float,
    tension: float = DEFAULT_TENSION,
) -> Point:
    """Evaluate the span between ``p1`` and ``p2`` at local parameter ``u`` in [0, 1].

    ``tension`` blends the result between the straight chord (0) and the full
    curve (1).
    """
    if u <= 0.0:
        return p1
    if u >= 1.0:
        return p2
    d12 = distance(p1, p2)
    if d12 == 0.0:
        return p1

    t0 = 0.0
    t1 = t0 + _knot_interval(p0, p1)
    t2 = t1 + d12**ALPHA
    t3 = t2 + _knot_interval(p2, p3)
    t = t1 + u * (t2 - t1)

    a1x, a1y = _blend(p0.x, p0.y, p1.x, p1.y, t0, t1, t)
    a2x, a2y = _blend(p1.x, p1.y, p2.x, p2.y, t1, t2, t)
    a3x, a3y = _blend(p2.x, p2.y, p3.x, p3.y, t2, t3, t)
    b1x, b1y = _blend(a1x, a1y, a2x, a2y, t0, t2, t)
    b2x, b2y = _blend(a2x, a2y, a3x, a3y, t1, t3, t)
    cx, cy = _blend(b1x, b1y, b2x, b2y, t1, t2, t)

    lx = (1.0 - u) * p1.x + u * p2.x
    ly = (1.0 - u) * p1.y + u * p2.y
    return Point(
        lx * (1.0 - tension) + cx * tension,
        ly * (1.0 - tension) + cy * tension,
    )


def _control_points(
    points: Sequence[Point], i: int
) -> tuple[Point, Point, Point, Point]:
    last = len(points) - 1
    return (
        points[max(0, i - 1)],
        points[i],
        points[i + 1],
        points[min(last, i + 2)],
    )


def smooth_curve(
    points: Sequence[Point],
    density: int = DEFAULT_DENSITY,
    tension: float = DEFAULT_TENSION,
) -> list[Point]:
    """Densify ``points`` into a smooth curve.

    Each consecutive pair contributes ``density`` samples, the last of which is
    the pair's end point, so input point ``i`` lands at output index
    ``i * density``. Fewer than two points are returned unchanged.
    """
    if density < 1:
        raise ValueError("density must be at least 1")
    if len(points) < 2:
        return list(points)

    curve: list[Point] = [points[0]]
    for i in range(len(points) - 1):
        p0, p1, p2, p3 = _control_points(points, i)
        for j in range(1, density + 1):
            curve.append(catmull_rom_centripetal(p0, p1, p2, p3, j / density, tension))
    return curve


def build_arc_length_table(points: Sequence[Point]) -> tuple[float, ...]:
    if not points:
        return ()
    table = [0.0]
    total = 0.0
    for i in range(1, len(points)):
        total += distance(points[i - 1], points[i])
        table.append(total)
    return tuple(table)


def _check_aligned(points: Sequence[Point], table: Sequence[float]) -> None:
    if not points:
        raise ValueError("points must not be empty")
    if len(points) != len(table):
        raise ValueError(
            f"arc length table has {len(table)} entries for {len(points)} points"
        )


def _span_index(table: Sequence[float], target: float) -> int:
    i = bisect.bisect_right(table, target) - 1
    return min(max(i, 0), len(table) - 2)


def position_at_arc_length(
    points: Sequence[Point],
    table: Sequence[float],
    target: float,
    tension: float = DEFAULT_TENSION,
) -> Point:
    """Point on the curve ``target`` pixels from its start, clamped to the curve."""
    _check_aligned(points, table)
    if len(points) == 1:
        return points[0]

    total = table[-1]
    if target <= 0.0:
        return points[0]
    if target >= total:
        return points[-1]

    i = _span_index(table, target)
    span = table[i + 1] - table[i]
    if span == 0.0:
        return points[i]
    u = (target - table[i]) / span
    p0, p1, p2, p3 = _control_points(points, i)
    return catmull_rom_centripetal(p0, p1, p2, p3, u, tension)


def heading_at_arc_length(
    points: Sequence[Point], table: Sequence[float], target: float
) -> float:
    """Direction of travel in degrees at ``target``, in image space (y down).

    Zero-length spans borrow the heading of the nearest span before them, then
    after them. A curve with no length at all heads 0.
    """
    _check_aligned(points, table)
    if len(points) == 1:
        return 0.0

    total = table[-1]
    i = _span_index(table, min(max(target, 0.0), total))
    for k in itertools.chain(range(i, -1, -1), range(i + 1, len(points) - 1)):
        a, b = points[k], points[k + 1]
        if a != b:
            return math.degrees(math.atan2(b.y - a.y, b.x - a.x))
    return 0.0
