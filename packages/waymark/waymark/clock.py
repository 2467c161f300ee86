"""FrameClock - fixed-timestep frame counter for the runtime."""
from __future__ import annotations


class FrameClock:
    """Counts fixed steps since the last anchor point.

    Time is always derived from the integer step count, never accumulated, so
    stepping from zero at speed 1 and seeking straight to frame ``n`` both
    land on exactly ``n / fps``.
    """

    def __init__(self, fps: int) -> None:
        if fps <= 0:
            raise ValueError("fps must be positive")
        self._fps = fps
        self._dt = 1.0 / fps
        self._anchor_time = 0.0
        self._anchor_frame = 0
        self._speed = 1.0
        self._ticks = 0

    @property
    def fps(self) -> int:
        return self._fps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def frame(self) -> int:
        return self._anchor_frame + self._ticks

    @property
    def time(self) -> float:
        return self._anchor_time + (self._ticks * self._speed) / self._fps

    def advance(self) -> int:
        self._ticks += 1
        return self.frame

    def anchor(self, time: float, frame: int, speed: float) -> None:
        self._anchor_time = time
        self._anchor_frame = frame
        self._speed = speed
        self._ticks = 0

    def reset(self, speed: float = 1.0) -> None:
        self.anchor(0.0, 0, speed)
