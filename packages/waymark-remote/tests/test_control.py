"""Tests for RemoteControl message routing."""
from __future__ import annotations

import pytest
from waymark.runtime import Runtime
from waymark.timing import build_timing_map
from waymark.types import NoTimingMapError, PauseMode, Phase, TimingConfig, Waypoint
from waymark_remote import RemoteControl, SignalBus, UnknownCommandError


def _timing_map():
    waypoints = [Waypoint(f"w{i}", i * 100.0, 0) for i in range(3)]
    return build_timing_map(waypoints, TimingConfig(pause_mode=PauseMode.SECONDS))


def _wired():
    bus = SignalBus()
    received = []
    for name in ("ready", "state", "ended"):
        bus.subscribe(name, lambda n, data: received.append((n, data)))
    runtime = Runtime()
    remote = RemoteControl(runtime, bus)
    return remote, runtime, received


class TestOutbound:
    """Runtime events are published as they happen."""

    def test_ready_on_install(self):
        remote, runtime, received = _wired()
        runtime.set_timing_map(_timing_map())
        assert received == [("ready", {"fps": 25})]

    def test_state_on_play(self):
        remote, runtime, received = _wired()
        runtime.set_timing_map(_timing_map())
        received.clear()
        runtime.play()
        assert received == [("state", {"step": 0, "playing": True, "speed": 1.0})]

    def test_state_when_step_changes(self):
        remote, runtime, received = _wired()
        runtime.set_timing_map(_timing_map())
        runtime.play()
        received.clear()
        for _ in range(75):
            runtime.step()
        assert received == [("state", {"step": 1, "playing": True, "speed": 1.0})]

    def test_ended(self):
        remote, runtime, received = _wired()
        runtime.set_timing_map(_timing_map())
        runtime.play()
        received.clear()
        while runtime.state.is_playing:
            runtime.step()
        assert received[-1] == ("ended", {"step": 2})
        assert ("state", {"step": 2, "playing": False, "speed": 1.0}) in received

    def test_default_bus(self):
        remote = RemoteControl(Runtime())
        assert isinstance(remote.bus, SignalBus)


class TestDispatch:
    """Inbound embed messages."""

    def _remote(self):
        remote, runtime, received = _wired()
        runtime.set_timing_map(_timing_map())
        received.clear()
        return remote, runtime, received

    def test_play_and_pause(self):
        remote, runtime, _ = self._remote()
        assert remote.dispatch({"type": "play"}).is_playing
        state = remote.dispatch({"type": "pause"})
        assert state.phase is Phase.PAUSED

    def test_seek_to_step(self):
        remote, runtime, received = self._remote()
        state = remote.dispatch({"type": "seekToStep", "step": 1})
        assert state.time == 3.0
        assert state.step == 1
        assert received == [("state", {"step": 1, "playing": False, "speed": 1.0})]

    def test_seek_to_step_clamps(self):
        remote, runtime, _ = self._remote()
        state = remote.dispatch({"type": "seekToStep", "step": 99})
        assert state.time == runtime.timing_map.total_duration

    def test_set_speed(self):
        remote, runtime, received = self._remote()
        assert remote.dispatch({"type": "setSpeed", "speed": 2}).speed == 2.0
        assert received[-1][1]["speed"] == 2.0
        assert remote.dispatch({"type": "setSpeed", "speed": 50}).speed == 8.0

    def test_unknown_command(self):
        remote, _, _ = self._remote()
        with pytest.raises(UnknownCommandError) as exc_info:
            remote.dispatch({"type": "rewind"})
        assert exc_info.value.command_type == "rewind"
        assert isinstance(exc_info.value, KeyError)
        assert "rewind" in str(exc_info.value)

    def test_missing_type(self):
        remote, _, _ = self._remote()
        with pytest.raises(UnknownCommandError):
            remote.dispatch({})

    def test_missing_argument(self):
        remote, _, _ = self._remote()
        with pytest.raises(ValueError):
            remote.dispatch({"type": "seekToStep"})
        with pytest.raises(ValueError):
            remote.dispatch({"type": "setSpeed"})

    def test_seek_without_map(self):
        remote = RemoteControl(Runtime())
        with pytest.raises(NoTimingMapError):
            remote.dispatch({"type": "seekToStep", "step": 0})

    def test_commands(self):
        remote = RemoteControl(Runtime())
        assert remote.commands == ["play", "pause", "seekToStep", "setSpeed"]
