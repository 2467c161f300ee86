"""Runtime - deterministic playback over a segment timing map."""
from __future__ import annotations

import dataclasses
import logging
import math
from typing import Callable

from waymark.clock import FrameClock
from waymark.timing import (
    active_segment_index,
    progress_at_time,
    step_at_time,
    time_at_progress,
    time_at_step,
)
from waymark.types import (
    NoTimingMapError,
    PauseMode,
    Phase,
    RuntimeState,
    SegmentTimingMap,
)

logger = logging.getLogger(__name__)

DEFAULT_FPS = 25
MIN_SPEED = 0.25
MAX_SPEED = 8.0

# Absorbs representation error when converting seconds to frame numbers.
_FRAME_EPSILON = 1e-9

Hook = Callable[[RuntimeState], None]


def clamp_speed(multiplier: float) -> float:
    return max(MIN_SPEED, min(multiplier, MAX_SPEED))


class Runtime:
    """Fixed-step playback state machine.

    Phases run Idle -> Ready -> Playing <-> Paused -> Ended. Time only moves
    through :meth:`step` (one ``speed / fps`` increment per call) or through
    explicit seeks; :meth:`update` converts wall-clock time into whole steps.
    Every transition replaces :attr:`state` with a new immutable snapshot and
    returns it. Hooks fire synchronously inside the transition that causes
    them.
    """

    def __init__(self, fps: int = DEFAULT_FPS, speed: float = 1.0) -> None:
        self._clock = FrameClock(fps)
        self._map: SegmentTimingMap | None = None
        self._state = RuntimeState(fps=fps, speed=clamp_speed(speed))
        self._accumulator = 0.0
        self._last_timestamp: float | None = None
        self._held_segment: int | None = None
        self._ready_hooks: list[Hook] = []
        self._state_hooks: list[Hook] = []
        self._ended_hooks: list[Hook] = []

    @property
    def state(self) -> RuntimeState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def timing_map(self) -> SegmentTimingMap | None:
        return self._map

    @property
    def fps(self) -> int:
        return self._clock.fps

    @property
    def fixed_timestep(self) -> float:
        return self._clock.dt

    @property
    def total_frames(self) -> int:
        """Frames needed to show the whole map, both endpoints included."""
        timing_map = self._require_map()
        if not timing_map.animatable:
            return 1
        return math.ceil(timing_map.total_duration * self.fps - _FRAME_EPSILON) + 1

    @property
    def awaiting_resume(self) -> bool:
        """True while held at a waypoint in click pause mode."""
        return self._held_segment is not None

    # -- Hooks --

    def on_ready(self, hook: Hook) -> None:
        self._ready_hooks.append(hook)

    def on_state(self, hook: Hook) -> None:
        self._state_hooks.append(hook)

    def on_ended(self, hook: Hook) -> None:
        self._ended_hooks.append(hook)

    # -- Internals --

    def _require_map(self) -> SegmentTimingMap:
        if self._map is None:
            raise NoTimingMapError("No timing map installed")
        return self._map

    def _snapshot(
        self, time: float, frame: int, is_playing: bool, phase: Phase
    ) -> RuntimeState:
        timing_map = self._require_map()
        return RuntimeState(
            time=time,
            normalized_progress=progress_at_time(timing_map, time),
            current_segment_index=max(active_segment_index(timing_map, time), 0),
            is_playing=is_playing,
            speed=self._state.speed,
            frame=frame,
            fps=self.fps,
            phase=phase,
            step=step_at_time(timing_map, time),
        )

    def _commit(self, new: RuntimeState, announce: bool) -> RuntimeState:
        old = self._state
        self._state = new
        changed = (old.step, old.is_playing, old.speed) != (
            new.step,
            new.is_playing,
            new.speed,
        )
        if announce or changed:
            for hook in self._state_hooks:
                hook(new)
        if new.phase is Phase.ENDED and old.phase is not Phase.ENDED:
            for hook in self._ended_hooks:
                hook(new)
        return new

    def _frame_at(self, time: float) -> int:
        return math.floor(time * self.fps + _FRAME_EPSILON)

    def _dwell_at(self, time: float) -> int | None:
        """Segment whose click-mode dwell window contains ``time``."""
        timing_map = self._require_map()
        if timing_map.pause_mode is not PauseMode.CLICK:
            return None
        for i, seg in enumerate(timing_map.segments):
            if seg.has_pause and seg.end_time <= time < seg.window_end:
                return i
        return None

    # -- Map installation --

    def set_timing_map(self, timing_map: SegmentTimingMap) -> RuntimeState:
        """Install ``timing_map`` and reset to Ready at time 0."""
        self._map = timing_map
        self._clock.reset(self._state.speed)
        self._accumulator = 0.0
        self._last_timestamp = None
        self._held_segment = None
        self._state = self._snapshot(0.0, 0, False, Phase.READY)
        logger.debug(
            "installed timing map: %d segments, %.3fs at %d fps",
            len(timing_map.segments),
            timing_map.total_duration,
            self.fps,
        )
        for hook in self._ready_hooks:
            hook(self._state)
        return self._state

    # -- Play / pause --

    def play(self) -> RuntimeState:
        timing_map = self._map
        if timing_map is None or not timing_map.animatable or self._state.is_playing:
            return self._state

        time = self._state.time
        frame = self._state.frame
        if self._held_segment is not None:
            time = timing_map.segments[self._held_segment].window_end
            self._held_segment = None
            self._clock.anchor(time, frame, self._state.speed)
        if time >= timing_map.total_duration:
            time = 0.0
            frame = 0
            self._clock.anchor(time, frame, self._state.speed)
        self._last_timestamp = None
        return self._commit(self._snapshot(time, frame, True, Phase.PLAYING), announce=True)

    def pause(self) -> RuntimeState:
        if self._map is None or not self._state.is_playing:
            return self._state
        paused = dataclasses.replace(self._state, is_playing=False, phase=Phase.PAUSED)
        return self._commit(paused, announce=True)

    def toggle_play_pause(self) -> RuntimeState:
        if self._state.is_playing:
            return self.pause()
        return self.play()

    # -- Clock --

    def step(self) -> RuntimeState:
        """Advance exactly one fixed step if Playing."""
        timing_map = self._require_map()
        if not self._state.is_playing:
            return self._state

        previous = self._state.time
        frame = self._clock.advance()
        time = self._clock.time

        if time >= timing_map.total_duration:
            time = timing_map.total_duration
            return self._commit(self._snapshot(time, frame, False, Phase.ENDED), announce=False)

        if timing_map.pause_mode is PauseMode.CLICK:
            for i, seg in enumerate(timing_map.segments):
                if seg.has_pause and previous < seg.end_time <= time:
                    self._held_segment = i
                    self._clock.anchor(seg.end_time, frame, self._state.speed)
                    held = self._snapshot(seg.end_time, frame, False, Phase.PAUSED)
                    return self._commit(held, announce=False)

        return self._commit(self._snapshot(time, frame, True, Phase.PLAYING), announce=False)

    def update(self, timestamp: float) -> RuntimeState:
        """Advance by whole fixed steps for the wall-clock seconds since the last call.

        The remainder carries over, so any cadence of calls visits exactly the
        states that the same number of :meth:`step` calls would.
        """
        self._require_map()
        if not self._state.is_playing:
            self._last_timestamp = None
            return self._state
        if self._last_timestamp is None:
            self._last_timestamp = timestamp
            return self._state

        elapsed = max(0.0, timestamp - self._last_timestamp)
        self._last_timestamp = timestamp
        self._accumulator += elapsed

        dt = self._clock.dt
        while self._accumulator >= dt and self._state.is_playing:
            self.step()
            self._accumulator -= dt
        if not self._state.is_playing:
            self._accumulator = 0.0
        return self._state

    # -- Seeking --

    def _seek(self, time: float, frame: int) -> RuntimeState:
        timing_map = self._require_map()
        self._clock.anchor(time, frame, self._state.speed)
        self._accumulator = 0.0
        self._last_timestamp = None
        # Landing inside a click dwell holds there until the next play().
        self._held_segment = self._dwell_at(time)

        is_playing = self._state.is_playing
        phase = self._state.phase
        if is_playing and timing_map.animatable and time >= timing_map.total_duration:
            is_playing = False
            phase = Phase.ENDED
        elif is_playing and self._held_segment is not None:
            is_playing = False
            phase = Phase.PAUSED
        elif phase is Phase.ENDED and time < timing_map.total_duration:
            phase = Phase.PAUSED
        return self._commit(self._snapshot(time, frame, is_playing, phase), announce=True)

    def seek_to_time(self, time: float) -> RuntimeState:
        timing_map = self._require_map()
        time = max(0.0, min(time, timing_map.total_duration))
        return self._seek(time, self._frame_at(time))

    def seek_to_progress(self, progress: float) -> RuntimeState:
        timing_map = self._require_map()
        time = time_at_progress(timing_map, max(0.0, min(progress, 1.0)))
        return self._seek(time, self._frame_at(time))

    def seek_to_frame(self, frame: int) -> RuntimeState:
        timing_map = self._require_map()
        frame = max(0, min(frame, self.total_frames - 1))
        time = min(frame / self.fps, timing_map.total_duration)
        return self._seek(time, frame)

    def seek_to_step(self, step: int) -> RuntimeState:
        """Seek to the arrival time at major waypoint ``step``."""
        time = time_at_step(self._require_map(), step)
        return self._seek(time, self._frame_at(time))

    def seek_to_start(self) -> RuntimeState:
        return self.seek_to_time(0.0)

    def seek_to_end(self) -> RuntimeState:
        return self.seek_to_time(self._require_map().total_duration)

    # -- Speed --

    def set_speed(self, multiplier: float) -> RuntimeState:
        speed = clamp_speed(multiplier)
        self._clock.anchor(self._state.time, self._state.frame, speed)
        updated = dataclasses.replace(self._state, speed=speed)
        if self._map is None:
            self._state = updated
            return updated
        return self._commit(updated, announce=True)
