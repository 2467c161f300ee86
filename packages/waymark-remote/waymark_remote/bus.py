"""In-memory pub/sub signal bus with immediate dispatch."""
from __future__ import annotations

from typing import Any, Callable

_Handler = Callable[[str, dict[str, Any]], None]


class SignalBus:
    """Publishes call every subscribed handler before returning.

    Handlers run in subscription order. A handler subscribed or removed
    during a publish takes effect from the next publish.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Handler]] = {}

    def subscribe(self, signal_name: str, handler: _Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: _Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, signal_name: str, **data: Any) -> None:
        for handler in list(self._subscribers.get(signal_name, [])):
            handler(signal_name, data)

    def clear(self) -> None:
        self._subscribers.clear()
