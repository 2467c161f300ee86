"""Route - an immutable curve + timing snapshot built from authored waypoints."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from waymark.geometry import (
    DEFAULT_DENSITY,
    DEFAULT_TENSION,
    build_arc_length_table,
    heading_at_arc_length,
    position_at_arc_length,
    smooth_curve,
)
from waymark.timing import build_timing_map, curve_index, progress_at_time
from waymark.types import Point, SegmentTimingMap, TimingConfig, Waypoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Route:
    """Densified curve, its arc length table and timing map, built together.

    Rebuild a new Route whenever waypoints or timing change; a Route already
    handed to a runtime or an export is never patched in place.
    """

    waypoints: tuple[Waypoint, ...]
    points: tuple[Point, ...]
    arc_lengths: tuple[float, ...]
    timing_map: SegmentTimingMap
    tension: float = DEFAULT_TENSION
    density: int = DEFAULT_DENSITY

    @classmethod
    def build(
        cls,
        waypoints: Sequence[Waypoint],
        config: TimingConfig,
        tension: float = DEFAULT_TENSION,
        density: int = DEFAULT_DENSITY,
    ) -> Route:
        points = tuple(smooth_curve([wp.point for wp in waypoints], density, tension))
        timing_map = build_timing_map(waypoints, config, points)
        logger.debug(
            "built route: %d waypoints -> %d curve points", len(waypoints), len(points)
        )
        return cls(
            waypoints=tuple(waypoints),
            points=points,
            arc_lengths=build_arc_length_table(points),
            timing_map=timing_map,
            tension=tension,
            density=density,
        )

    @property
    def total_length(self) -> float:
        return self.arc_lengths[-1] if self.arc_lengths else 0.0

    def _waypoint_arc_length(self, waypoint_index: int) -> float:
        i = curve_index(waypoint_index, len(self.waypoints), len(self.points))
        return self.arc_lengths[i]

    def arc_length_at_progress(self, progress: float) -> float:
        """Distance along the curve for a normalized progress value.

        Progress is split evenly between major waypoints; inside a segment it
        scales linearly over that segment's stretch of curve.
        """
        progress = max(0.0, min(progress, 1.0))
        segments = self.timing_map.segments
        if not segments:
            return self.total_length * progress

        seg = segments[-1]
        for candidate in segments:
            if candidate.start_progress <= progress <= candidate.end_progress:
                seg = candidate
                break
        start = self._waypoint_arc_length(seg.start_waypoint_index)
        end = self._waypoint_arc_length(seg.end_waypoint_index)
        if progress >= seg.end_progress:
            return end
        local = (progress - seg.start_progress) / (seg.end_progress - seg.start_progress)
        return start + (end - start) * local

    def position_at_progress(self, progress: float) -> Point:
        return position_at_arc_length(
            self.points,
            self.arc_lengths,
            self.arc_length_at_progress(progress),
            self.tension,
        )

    def heading_at_progress(self, progress: float) -> float:
        return heading_at_arc_length(
            self.points, self.arc_lengths, self.arc_length_at_progress(progress)
        )

    def position_at_time(self, time: float) -> Point:
        return self.position_at_progress(progress_at_time(self.timing_map, time))
