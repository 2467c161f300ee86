"""Segment timing maps: time <-> normalized progress along a path.

A map holds one segment per pair of consecutive major waypoints. Segments
split progress [0, 1] evenly by count, while their durations come either
from a fixed nominal time per segment or from the segment's arc length at a
constant pixel speed. Optional dwell windows follow every segment except
the last.
"""
from __future__ import annotations

import logging
from typing import Sequence

from waymark.easing import inverse_quadratic_ease_in_out, quadratic_ease_in_out
from waymark.geometry import DEFAULT_DENSITY, DEFAULT_TENSION, build_arc_length_table, smooth_curve
from waymark.types import (
    InconsistentWaypointsError,
    PauseMode,
    Point,
    Segment,
    SegmentTimingMap,
    TimingConfig,
    TimingMode,
    Waypoint,
)

logger = logging.getLogger(__name__)


def _check_waypoints(waypoints: Sequence[Waypoint]) -> None:
    seen: set[str] = set()
    for wp in waypoints:
        if wp.id in seen:
            raise InconsistentWaypointsError(
                f"Duplicate waypoint id {wp.id!r}", waypoint_id=wp.id
            )
        seen.add(wp.id)


def curve_index(waypoint_index: int, waypoint_count: int, point_count: int) -> int:
    """Index in a densified curve where waypoint ``waypoint_index`` lies."""
    if waypoint_count < 2:
        return 0
    return (waypoint_index * (point_count - 1)) // (waypoint_count - 1)


def build_timing_map(
    waypoints: Sequence[Waypoint],
    config: TimingConfig,
    points: Sequence[Point] | None = None,
) -> SegmentTimingMap:
    """Build a fresh timing map for ``waypoints``.

    ``points`` is the densified curve through the waypoints; it is derived with
    the default density and tension when omitted. Fewer than two major
    waypoints produce an empty, non-animatable map.
    """
    _check_waypoints(waypoints)
    if points is None:
        points = smooth_curve([wp.point for wp in waypoints], DEFAULT_DENSITY, DEFAULT_TENSION)
    elif len(waypoints) >= 2:
        if len(points) < 2 or (len(points) - 1) % (len(waypoints) - 1) != 0:
            raise InconsistentWaypointsError(
                f"Curve of {len(points)} points was not densified from "
                f"{len(waypoints)} waypoints"
            )

    table = build_arc_length_table(points)
    total_path_length = table[-1] if table else 0.0
    majors = [i for i, wp in enumerate(waypoints) if wp.is_major]

    if len(majors) < 2:
        logger.debug("fewer than two major waypoints; map is not animatable")
        return SegmentTimingMap(
            segments=(),
            total_duration=0.0,
            total_path_length=total_path_length,
            mode=config.mode,
            base_speed=config.base_speed_px_per_sec,
            pause_mode=config.pause_mode,
            ease_in_out=config.ease_in_out,
        )

    n = len(majors) - 1
    segments: list[Segment] = []
    clock = 0.0
    for k in range(n):
        start_idx = majors[k]
        end_idx = majors[k + 1]

        if config.mode is TimingMode.CONSTANT_TIME:
            duration = config.segment_seconds
        else:
            a = curve_index(start_idx, len(waypoints), len(points))
            b = curve_index(end_idx, len(waypoints), len(points))
            length = table[b] - table[a]
            if length == 0.0:
                logger.warning(
                    "segment %s -> %s has zero length",
                    waypoints[start_idx].id,
                    waypoints[end_idx].id,
                )
            duration = length / config.base_speed_px_per_sec

        has_pause = config.pause_mode is not PauseMode.NONE and k < n - 1
        pause = config.pause_seconds if has_pause else 0.0

        segments.append(
            Segment(
                start_time=clock,
                end_time=clock + duration,
                duration=duration,
                start_progress=k / n,
                end_progress=(k + 1) / n,
                start_waypoint_index=start_idx,
                end_waypoint_index=end_idx,
                has_pause=has_pause,
                pause_duration=pause,
            )
        )
        clock = clock + duration + pause

    logger.debug(
        "built %s timing map: %d segments, %.3fs, %.1fpx",
        config.mode.value,
        len(segments),
        clock,
        total_path_length,
    )
    return SegmentTimingMap(
        segments=tuple(segments),
        total_duration=clock,
        total_path_length=total_path_length,
        mode=config.mode,
        base_speed=config.base_speed_px_per_sec,
        pause_mode=config.pause_mode,
        ease_in_out=config.ease_in_out,
    )


def _eased(timing_map: SegmentTimingMap, index: int) -> bool:
    # The path's first and last segments are left linear so the absolute
    # start and end are not eased twice.
    return timing_map.ease_in_out and 0 < index < len(timing_map.segments) - 1


def active_segment_index(timing_map: SegmentTimingMap, time: float) -> int:
    """Index of the segment whose motion+dwell window contains ``time``; -1 if empty."""
    segments = timing_map.segments
    if not segments:
        return -1
    time = max(0.0, time)
    for i, seg in enumerate(segments):
        if seg.start_time <= time < seg.window_end:
            return i
    return len(segments) - 1


def active_segment(timing_map: SegmentTimingMap, time: float) -> Segment | None:
    index = active_segment_index(timing_map, time)
    if index < 0:
        return None
    return timing_map.segments[index]


def progress_at_time(timing_map: SegmentTimingMap, time: float) -> float:
    if not timing_map.segments:
        return 0.0
    if time >= timing_map.total_duration:
        return 1.0
    if time <= 0.0:
        return 0.0

    index = active_segment_index(timing_map, time)
    seg = timing_map.segments[index]
    if time >= seg.end_time:
        return seg.end_progress

    ratio = (time - seg.start_time) / seg.duration if seg.duration > 0 else 1.0
    if _eased(timing_map, index):
        ratio = quadratic_ease_in_out(ratio)
    return seg.start_progress + (seg.end_progress - seg.start_progress) * ratio


def time_at_progress(timing_map: SegmentTimingMap, progress: float) -> float:
    """Earliest time at which ``progress`` is reached.

    Progress pinned during a dwell maps to the start of that dwell.
    """
    segments = timing_map.segments
    if not segments:
        return 0.0
    if progress <= 0.0:
        return 0.0
    if progress >= 1.0:
        return timing_map.total_duration

    index = len(segments) - 1
    for i, seg in enumerate(segments):
        if seg.start_progress <= progress <= seg.end_progress:
            index = i
            break
    seg = segments[index]

    local = (progress - seg.start_progress) / (seg.end_progress - seg.start_progress)
    if _eased(timing_map, index):
        local = inverse_quadratic_ease_in_out(local)
    return seg.start_time + local * seg.duration


def step_at_time(timing_map: SegmentTimingMap, time: float) -> int:
    """Index of the last major waypoint the marker has reached at ``time``."""
    index = active_segment_index(timing_map, time)
    if index < 0:
        return 0
    seg = timing_map.segments[index]
    if time >= seg.end_time:
        return index + 1
    return index


def time_at_step(timing_map: SegmentTimingMap, step: int) -> float:
    """Arrival time at major waypoint ``step``, clamped to the existing majors."""
    segments = timing_map.segments
    if not segments or step <= 0:
        return 0.0
    step = min(step, len(segments))
    return segments[step - 1].end_time
