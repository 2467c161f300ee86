"""RemoteControl - routes embed messages to a runtime and runtime events to a bus."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from waymark.runtime import Runtime
from waymark.types import RuntimeState, WaymarkError
from waymark_remote.bus import SignalBus

logger = logging.getLogger(__name__)

READY = "ready"
STATE = "state"
ENDED = "ended"

_Command = Callable[[Mapping[str, Any]], RuntimeState]


class UnknownCommandError(WaymarkError, KeyError):
    def __init__(self, command_type: object) -> None:
        super().__init__(f"Unknown command type {command_type!r}")
        self.command_type = command_type

    def __str__(self) -> str:
        return self.args[0]


def _state_payload(state: RuntimeState) -> dict[str, Any]:
    return {"step": state.step, "playing": state.is_playing, "speed": state.speed}


def _require(message: Mapping[str, Any], key: str) -> Any:
    if key not in message:
        raise ValueError(f"{message.get('type')!r} command requires {key!r}")
    return message[key]


class RemoteControl:
    """Embed surface for one runtime.

    Outbound, the runtime's hooks publish ``ready``, ``state`` (with ``step``,
    ``playing`` and ``speed``) and ``ended`` on the bus as they happen.
    Inbound, :meth:`dispatch` accepts ``{"type": ...}`` messages:
    ``play``, ``pause``, ``seekToStep`` (``step``) and ``setSpeed``
    (``speed``).
    """

    def __init__(self, runtime: Runtime, bus: SignalBus | None = None) -> None:
        self.runtime = runtime
        self.bus = bus if bus is not None else SignalBus()
        self._commands: dict[str, _Command] = {
            "play": lambda message: runtime.play(),
            "pause": lambda message: runtime.pause(),
            "seekToStep": lambda message: runtime.seek_to_step(int(_require(message, "step"))),
            "setSpeed": lambda message: runtime.set_speed(float(_require(message, "speed"))),
        }
        runtime.on_ready(self._on_ready)
        runtime.on_state(self._on_state)
        runtime.on_ended(self._on_ended)

    @property
    def commands(self) -> list[str]:
        return list(self._commands)

    def dispatch(self, message: Mapping[str, Any]) -> RuntimeState:
        """Apply one inbound message and return the resulting runtime state."""
        command_type = message.get("type")
        command = self._commands.get(command_type)  # type: ignore[arg-type]
        if command is None:
            raise UnknownCommandError(command_type)
        logger.debug("remote command %s", command_type)
        return command(message)

    def _on_ready(self, state: RuntimeState) -> None:
        self.bus.publish(READY, fps=state.fps)

    def _on_state(self, state: RuntimeState) -> None:
        self.bus.publish(STATE, **_state_payload(state))

    def _on_ended(self, state: RuntimeState) -> None:
        self.bus.publish(ENDED, step=state.step)
