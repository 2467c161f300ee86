"""Shared value types and errors for the waymark engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Nominal duration of one segment in constant-time mode.
DEFAULT_SEGMENT_SECONDS = 3.0


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Waypoint:
    """An authored path vertex. Major waypoints anchor timing; minor ones only shape the curve."""

    id: str
    x: float
    y: float
    is_major: bool = True
    label_id: str | None = None

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


class TimingMode(str, Enum):
    CONSTANT_TIME = "constantTime"
    CONSTANT_SPEED = "constantSpeed"


class PauseMode(str, Enum):
    NONE = "none"
    SECONDS = "seconds"
    CLICK = "click"


@dataclass(frozen=True, slots=True)
class TimingConfig:
    mode: TimingMode = TimingMode.CONSTANT_TIME
    base_speed_px_per_sec: float = 200.0
    pause_mode: PauseMode = PauseMode.NONE
    pause_seconds: float = 2.0
    ease_in_out: bool = True
    segment_seconds: float = DEFAULT_SEGMENT_SECONDS

    def __post_init__(self) -> None:
        if self.base_speed_px_per_sec <= 0:
            raise ValueError("base_speed_px_per_sec must be positive")
        if self.segment_seconds <= 0:
            raise ValueError("segment_seconds must be positive")
        if self.pause_seconds < 0:
            raise ValueError("pause_seconds must not be negative")


@dataclass(frozen=True, slots=True)
class Segment:
    """Motion between two consecutive major waypoints, plus its trailing dwell."""

    start_time: float
    end_time: float
    duration: float
    start_progress: float
    end_progress: float
    start_waypoint_index: int
    end_waypoint_index: int
    has_pause: bool = False
    pause_duration: float = 0.0

    @property
    def window_end(self) -> float:
        return self.end_time + self.pause_duration


@dataclass(frozen=True, slots=True)
class SegmentTimingMap:
    segments: tuple[Segment, ...]
    total_duration: float
    total_path_length: float
    mode: TimingMode
    base_speed: float
    pause_mode: PauseMode = PauseMode.NONE
    ease_in_out: bool = True

    @property
    def animatable(self) -> bool:
        return len(self.segments) > 0


class Phase(str, Enum):
    IDLE = "idle"
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    ENDED = "ended"


@dataclass(frozen=True, slots=True)
class RuntimeState:
    time: float = 0.0
    normalized_progress: float = 0.0
    current_segment_index: int = 0
    is_playing: bool = False
    speed: float = 1.0
    frame: int = 0
    fps: int = 25
    phase: Phase = Phase.IDLE
    step: int = 0


class WaymarkError(Exception):
    """Base class for waymark errors."""


class InconsistentWaypointsError(WaymarkError, ValueError):
    """Raised when major waypoints do not line up with the waypoint sequence."""

    def __init__(self, message: str, waypoint_id: str | None = None) -> None:
        self.waypoint_id = waypoint_id
        super().__init__(message)


class NoTimingMapError(WaymarkError, RuntimeError):
    """Raised when a Runtime operation needs a timing map and none is installed."""
