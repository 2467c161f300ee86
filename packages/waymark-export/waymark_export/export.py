"""Drive a frame sink from a runtime and route."""
from __future__ import annotations

import logging

from waymark.route import Route
from waymark.runtime import Runtime
from waymark_export.frames import iter_frames, play_frames
from waymark_export.sinks import FrameSink

logger = logging.getLogger(__name__)

# Debug progress record every this many frames.
_PROGRESS_EVERY = 250


def export_frames(
    runtime: Runtime,
    route: Route,
    sink: FrameSink,
    *,
    seek: bool = True,
) -> int:
    """Write every frame of ``route`` to ``sink`` and close it.

    With ``seek`` (the default) frames come from :func:`iter_frames`;
    otherwise from :func:`play_frames`. Returns the number of frames written.
    """
    frames = iter_frames(runtime, route) if seek else play_frames(runtime, route)
    count = 0
    logger.debug("export started at %d fps", runtime.fps)
    try:
        for frame in frames:
            sink.write(frame)
            count += 1
            if count % _PROGRESS_EVERY == 0:
                logger.debug("exported %d frames (t=%.2fs)", count, frame.time)
    finally:
        sink.close()
    logger.info("exported %d frames", count)
    return count
