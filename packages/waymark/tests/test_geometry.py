"""Tests for curve densification and arc-length lookup."""

import pytest
from waymark.geometry import (
    DEFAULT_DENSITY,
    build_arc_length_table,
    catmull_rom_centripetal,
    distance,
    heading_at_arc_length,
    position_at_arc_length,
    smooth_curve,
)
from waymark.types import Point

ZIGZAG = [Point(0, 0), Point(100, 0), Point(100, 100), Point(200, 100)]


# --- catmull_rom_centripetal ---

def test_span_endpoints_are_exact():
    p0, p1, p2, p3 = ZIGZAG
    assert catmull_rom_centripetal(p0, p1, p2, p3, 0.0) == p1
    assert catmull_rom_centripetal(p0, p1, p2, p3, 1.0) == p2


def test_zero_tension_is_the_straight_chord():
    p0, p1, p2, p3 = ZIGZAG
    mid = catmull_rom_centripetal(p0, p1, p2, p3, 0.5, tension=0.0)
    assert mid == Point(100.0, 50.0)


def test_full_tension_bends_away_from_chord():
    p0, p1, p2, p3 = ZIGZAG
    quarter = catmull_rom_centripetal(p0, p1, p2, p3, 0.25, tension=1.0)
    assert quarter.x == pytest.approx(104.6875)
    assert quarter.y == pytest.approx(20.3125)


def test_coincident_neighbors_stay_finite():
    """Clamped end neighbors coincide with the endpoint."""
    p = Point(0, 0)
    q = Point(50, 0)
    mid = catmull_rom_centripetal(p, p, q, q, 0.5)
    assert 0.0 < mid.x < 50.0
    assert mid.y == 0.0


def test_zero_length_span_returns_start():
    p = Point(10, 10)
    assert catmull_rom_centripetal(Point(0, 0), p, p, Point(20, 20), 0.4) == p


def test_distance():
    assert distance(Point(0, 0), Point(3, 4)) == 5.0


# --- smooth_curve ---

def test_smooth_curve_short_input_unchanged():
    assert smooth_curve([]) == []
    assert smooth_curve([Point(1, 2)]) == [Point(1, 2)]


def test_smooth_curve_length():
    curve = smooth_curve(ZIGZAG, density=10)
    assert len(curve) == 1 + 3 * 10


def test_smooth_curve_passes_through_every_control_point():
    for density in (1, 5, DEFAULT_DENSITY):
        curve = smooth_curve(ZIGZAG, density=density)
        for i, p in enumerate(ZIGZAG):
            assert curve[i * density] == p


def test_smooth_curve_density_one_is_the_input():
    assert smooth_curve(ZIGZAG, density=1) == ZIGZAG


def test_smooth_curve_collinear_stays_on_line():
    curve = smooth_curve([Point(0, 0), Point(50, 0), Point(100, 0)])
    assert all(p.y == 0.0 for p in curve)
    xs = [p.x for p in curve]
    assert xs == sorted(xs)
    assert xs[0] == 0.0 and xs[-1] == 100.0


def test_smooth_curve_rejects_bad_density():
    with pytest.raises(ValueError):
        smooth_curve(ZIGZAG, density=0)


def test_smooth_curve_is_deterministic():
    assert smooth_curve(ZIGZAG, 17, 0.7) == smooth_curve(ZIGZAG, 17, 0.7)


def test_uneven_spacing_has_no_loops():
    """Tightly bunched waypoints next to a long leg must not fold back."""
    pts = [Point(0, 0), Point(1, 0), Point(2, 0), Point(300, 0)]
    curve = smooth_curve(pts, density=30, tension=1.0)
    xs = [p.x for p in curve]
    assert xs == sorted(xs)


# --- build_arc_length_table ---

def test_arc_length_table_empty():
    assert build_arc_length_table([]) == ()


def test_arc_length_table_values():
    table = build_arc_length_table([Point(0, 0), Point(3, 4), Point(3, 4), Point(6, 8)])
    assert table == (0.0, 5.0, 5.0, 10.0)


def test_arc_length_table_non_decreasing():
    curve = smooth_curve(ZIGZAG + [Point(200, 100), Point(0, 0)], density=13)
    table = build_arc_length_table(curve)
    assert table[0] == 0.0
    assert all(b >= a for a, b in zip(table, table[1:]))


# --- position_at_arc_length ---

def test_position_endpoints_exact():
    curve = smooth_curve(ZIGZAG)
    table = build_arc_length_table(curve)
    assert position_at_arc_length(curve, table, 0.0) == ZIGZAG[0]
    assert position_at_arc_length(curve, table, table[-1]) == ZIGZAG[-1]


def test_position_clamps_out_of_range():
    curve = smooth_curve(ZIGZAG)
    table = build_arc_length_table(curve)
    assert position_at_arc_length(curve, table, -50.0) == ZIGZAG[0]
    assert position_at_arc_length(curve, table, table[-1] + 50.0) == ZIGZAG[-1]


def test_position_on_evenly_spaced_line():
    pts = [Point(0, 0), Point(10, 0), Point(20, 0), Point(30, 0)]
    table = build_arc_length_table(pts)
    pos = position_at_arc_length(pts, table, 15.0, tension=1.0)
    assert pos.x == pytest.approx(15.0)
    assert pos.y == 0.0


def test_position_at_sample_is_the_sample():
    curve = smooth_curve(ZIGZAG, density=8)
    table = build_arc_length_table(curve)
    assert position_at_arc_length(curve, table, table[5]) == curve[5]


def test_position_single_point():
    assert position_at_arc_length([Point(4, 2)], (0.0,), 10.0) == Point(4, 2)


def test_position_skips_repeated_points():
    pts = [Point(0, 0), Point(10, 0), Point(10, 0), Point(20, 0)]
    table = build_arc_length_table(pts)
    assert position_at_arc_length(pts, table, 10.0) == Point(10, 0)


def test_position_rejects_empty_points():
    with pytest.raises(ValueError):
        position_at_arc_length([], (), 0.0)


def test_position_rejects_misaligned_table():
    with pytest.raises(ValueError):
        position_at_arc_length(ZIGZAG, (0.0, 1.0), 0.5)


# --- heading_at_arc_length ---

def test_heading_follows_span_direction():
    pts = [Point(0, 0), Point(10, 0), Point(10, 10)]
    table = build_arc_length_table(pts)
    assert heading_at_arc_length(pts, table, 5.0) == 0.0
    assert heading_at_arc_length(pts, table, 15.0) == pytest.approx(90.0)


def test_heading_borrows_from_neighbor_span():
    pts = [Point(0, 0), Point(-10, 0), Point(-10, 0)]
    table = build_arc_length_table(pts)
    assert heading_at_arc_length(pts, table, 10.0) == pytest.approx(180.0)


def test_heading_over_long_stationary_tail():
    pts = [Point(0, 0), Point(10, 0)] + [Point(10, 0)] * 1000
    table = build_arc_length_table(pts)
    assert heading_at_arc_length(pts, table, 10.0) == 0.0
    assert heading_at_arc_length(pts, table, 99.0) == 0.0


def test_heading_of_degenerate_curve_is_zero():
    pts = [Point(3, 3), Point(3, 3)]
    assert heading_at_arc_length(pts, (0.0, 0.0), 0.0) == 0.0
