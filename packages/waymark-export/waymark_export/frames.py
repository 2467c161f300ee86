"""Per-frame snapshots for export pipelines."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from waymark.route import Route
from waymark.runtime import Runtime
from waymark.types import RuntimeState


@dataclass(frozen=True, slots=True)
class FrameState:
    """Everything a renderer needs to draw one output frame."""

    index: int
    time: float
    progress: float
    segment_index: int
    x: float
    y: float
    heading: float


def frame_state(state: RuntimeState, route: Route) -> FrameState:
    position = route.position_at_progress(state.normalized_progress)
    return FrameState(
        index=state.frame,
        time=state.time,
        progress=state.normalized_progress,
        segment_index=state.current_segment_index,
        x=position.x,
        y=position.y,
        heading=route.heading_at_progress(state.normalized_progress),
    )


def _install(runtime: Runtime, route: Route) -> None:
    if runtime.timing_map is not route.timing_map:
        runtime.set_timing_map(route.timing_map)


def iter_frames(runtime: Runtime, route: Route) -> Iterator[FrameState]:
    """Yield every output frame by seeking, from frame 0 to the last.

    Seeking ignores speed and click holds, so pauses render as timed dwells.
    The runtime is left stopped on the final frame.
    """
    _install(runtime, route)
    runtime.pause()
    for frame in range(runtime.total_frames):
        yield frame_state(runtime.seek_to_frame(frame), route)


def play_frames(runtime: Runtime, route: Route) -> Iterator[FrameState]:
    """Yield output frames by playing the runtime one fixed step at a time.

    At speed 1 this visits the same frames as :func:`iter_frames`. Click holds
    are resumed immediately.
    """
    _install(runtime, route)
    state = runtime.seek_to_start()
    yield frame_state(state, route)
    if not route.timing_map.animatable:
        return
    runtime.play()
    while True:
        if not runtime.state.is_playing:
            if not runtime.awaiting_resume:
                return
            runtime.play()
        yield frame_state(runtime.step(), route)
