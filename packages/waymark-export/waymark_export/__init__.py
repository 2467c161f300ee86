"""waymark-export - Frame-accurate export iteration and frame sinks."""
from __future__ import annotations

from waymark_export.export import export_frames
from waymark_export.frames import FrameState, frame_state, iter_frames, play_frames
from waymark_export.sinks import FrameSink, JsonLinesSink, MemorySink

__all__ = [
    "FrameState",
    "FrameSink",
    "JsonLinesSink",
    "MemorySink",
    "export_frames",
    "frame_state",
    "iter_frames",
    "play_frames",
]
