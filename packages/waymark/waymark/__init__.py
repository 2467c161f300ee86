"""waymark - Deterministic path animation engine: curves, timing maps and fixed-step playback."""

from waymark.clock import FrameClock
from waymark.route import Route
from waymark.runtime import Runtime
from waymark.types import (
    InconsistentWaypointsError,
    NoTimingMapError,
    PauseMode,
    Phase,
    Point,
    RuntimeState,
    Segment,
    SegmentTimingMap,
    TimingConfig,
    TimingMode,
    WaymarkError,
    Waypoint,
)

__all__ = [
    "Route",
    "Runtime",
    "FrameClock",
    "Point",
    "Waypoint",
    "TimingMode",
    "PauseMode",
    "TimingConfig",
    "Segment",
    "SegmentTimingMap",
    "RuntimeState",
    "Phase",
    "WaymarkError",
    "InconsistentWaypointsError",
    "NoTimingMapError",
]
