"""waymark-remote - Embed/remote-control surface for a waymark runtime."""
from __future__ import annotations

from waymark_remote.bus import SignalBus
from waymark_remote.control import RemoteControl, UnknownCommandError

__all__ = ["SignalBus", "RemoteControl", "UnknownCommandError"]
