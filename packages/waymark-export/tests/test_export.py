"""Tests for frame iteration and sinks."""
from __future__ import annotations

import io
import json

import pytest
from waymark.route import Route
from waymark.runtime import Runtime
from waymark.types import PauseMode, Phase, TimingConfig, TimingMode, Waypoint
from waymark_export import (
    FrameSink,
    FrameState,
    JsonLinesSink,
    MemorySink,
    export_frames,
    iter_frames,
    play_frames,
)

ROW = [Waypoint(f"w{i}", i * 100.0, 0.0) for i in range(3)]


def _route(**kwargs) -> Route:
    return Route.build(ROW, TimingConfig(**kwargs))


class TestIterFrames:
    def test_covers_both_ends(self):
        route = _route()
        frames = list(iter_frames(Runtime(fps=25), route))
        assert len(frames) == 151
        assert frames[0].index == 0
        assert frames[0].progress == 0.0
        assert (frames[0].x, frames[0].y) == (0.0, 0.0)
        assert frames[-1].time == 6.0
        assert frames[-1].progress == 1.0
        assert (frames[-1].x, frames[-1].y) == (200.0, 0.0)

    def test_indices_are_consecutive(self):
        frames = list(iter_frames(Runtime(fps=30), _route()))
        assert [f.index for f in frames] == list(range(len(frames)))

    def test_installs_route_map(self):
        route = _route()
        runtime = Runtime()
        list(iter_frames(runtime, route))
        assert runtime.timing_map is route.timing_map

    def test_leaves_runtime_stopped(self):
        route = _route()
        runtime = Runtime()
        runtime.set_timing_map(route.timing_map)
        runtime.play()
        frames = list(iter_frames(runtime, route))
        assert not runtime.state.is_playing
        assert runtime.state.time == frames[-1].time

    def test_ignores_speed(self):
        route = _route()
        runtime = Runtime(speed=4.0)
        assert len(list(iter_frames(runtime, route))) == 151

    def test_click_pause_renders_timed_dwell(self):
        route = _route(pause_mode=PauseMode.CLICK, pause_seconds=1)
        frames = list(iter_frames(Runtime(fps=25), route))
        assert len(frames) == 176
        dwell = [f for f in frames if 3.0 <= f.time < 4.0]
        assert {f.progress for f in dwell} == {0.5}
        assert {(f.x, f.y) for f in dwell} == {(100.0, 0.0)}

    def test_heading_follows_path(self):
        frames = list(iter_frames(Runtime(), _route()))
        assert frames[40].heading == pytest.approx(0.0)

    def test_not_animatable_route_is_one_frame(self):
        route = Route.build([Waypoint("a", 5, 5)], TimingConfig())
        frames = list(iter_frames(Runtime(), route))
        assert frames == [FrameState(0, 0.0, 0.0, 0, 5, 5, 0.0)]


class TestPlayFrames:
    def test_matches_seek_at_speed_one(self):
        route = _route(mode=TimingMode.CONSTANT_SPEED, pause_mode=PauseMode.SECONDS, pause_seconds=0.5)
        sought = list(iter_frames(Runtime(fps=25), route))
        played = list(play_frames(Runtime(fps=25), route))
        assert played == sought

    def test_runtime_ends(self):
        route = _route()
        runtime = Runtime()
        list(play_frames(runtime, route))
        assert runtime.phase is Phase.ENDED

    def test_speed_skips_frames(self):
        route = _route()
        frames = list(play_frames(Runtime(fps=25, speed=2.0), route))
        assert len(frames) == 76
        assert frames[-1].time == 6.0

    def test_click_holds_are_resumed(self):
        route = _route(pause_mode=PauseMode.CLICK, pause_seconds=1)
        frames = list(play_frames(Runtime(fps=25), route))
        assert frames[-1].progress == 1.0
        # Resuming skips the one-second dwell.
        assert len(frames) < 176

    def test_not_animatable_route(self):
        route = Route.build([Waypoint("a", 5, 5)], TimingConfig())
        assert len(list(play_frames(Runtime(), route))) == 1


class TestSinks:
    def test_protocol(self):
        assert isinstance(MemorySink(), FrameSink)
        assert isinstance(JsonLinesSink(io.StringIO()), FrameSink)

    def test_export_to_memory(self):
        sink = MemorySink()
        count = export_frames(Runtime(), _route(), sink)
        assert count == 151
        assert len(sink.frames) == 151
        assert sink.closed

    def test_export_by_playing(self):
        sink = MemorySink()
        route = _route()
        assert export_frames(Runtime(), route, sink, seek=False) == 151
        assert sink.frames == list(iter_frames(Runtime(), route))

    def test_json_lines_stream(self):
        stream = io.StringIO()
        sink = JsonLinesSink(stream)
        export_frames(Runtime(fps=10), _route(), sink)
        lines = stream.getvalue().splitlines()
        assert len(lines) == 61
        assert sink.frames_written == 61
        first = json.loads(lines[0])
        assert first == {
            "index": 0,
            "time": 0.0,
            "progress": 0.0,
            "segment_index": 0,
            "x": 0.0,
            "y": 0.0,
            "heading": 0.0,
        }
        assert not stream.closed

    def test_json_lines_file(self, tmp_path):
        target = tmp_path / "frames.jsonl"
        with JsonLinesSink(target) as sink:
            for frame in iter_frames(Runtime(fps=5), _route()):
                sink.write(frame)
        rows = [json.loads(line) for line in target.read_text().splitlines()]
        assert len(rows) == 31
        assert rows[-1]["progress"] == 1.0

    def test_sink_closed_on_error(self):
        class Failing(MemorySink):
            def write(self, frame):
                if frame.index == 3:
                    raise RuntimeError("disk full")
                super().write(frame)

        sink = Failing()
        with pytest.raises(RuntimeError):
            export_frames(Runtime(), _route(), sink)
        assert sink.closed
        assert len(sink.frames) == 3
