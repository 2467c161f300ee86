"""Frame sinks: where exported frames go."""
from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import IO, Protocol, runtime_checkable

from waymark_export.frames import FrameState


@runtime_checkable
class FrameSink(Protocol):
    """Consumer of exported frames, in order.

    Implementations encode, render or store frames. ``close`` is called once
    after the last frame.
    """

    def write(self, frame: FrameState) -> None:
        ...

    def close(self) -> None:
        ...


class JsonLinesSink:
    """Writes one JSON object per frame.

    Args:
        target: A path to create, or an open text stream. Streams passed in
            are flushed but left open on close.
    """

    def __init__(self, target: Path | str | IO[str]) -> None:
        if isinstance(target, (str, Path)):
            self._stream: IO[str] = open(target, "w", encoding="utf-8")
            self._owned = True
        else:
            self._stream = target
            self._owned = False
        self.frames_written = 0

    def write(self, frame: FrameState) -> None:
        self._stream.write(json.dumps(dataclasses.asdict(frame)) + "\n")
        self.frames_written += 1

    def close(self) -> None:
        if self._owned:
            self._stream.close()
        else:
            self._stream.flush()

    def __enter__(self) -> JsonLinesSink:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class MemorySink:
    """Collects frames in a list. Useful for previews and tests."""

    def __init__(self) -> None:
        self.frames: list[FrameState] = []
        self.closed = False

    def write(self, frame: FrameState) -> None:
        self.frames.append(frame)

    def close(self) -> None:
        self.closed = True
