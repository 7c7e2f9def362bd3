"""Game event bus: phases publish, subscribers hear about it after the command."""
from __future__ import annotations

from typing import Any, Callable

ANY = "*"

GameEventHandler = Callable[[str, dict[str, Any]], None]


class SignalBus:
    """Queues game events and delivers them in publish order on ``flush``.

    Handlers subscribed to ``ANY`` receive every event after the
    handlers registered for that event's name.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[GameEventHandler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, signal_name: str, handler: GameEventHandler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: GameEventHandler) -> None:
        handlers = self._subscribers.get(signal_name, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, signal_name: str, **data: Any) -> None:
        if signal_name == ANY:
            raise ValueError(f"{ANY!r} is reserved for catch-all subscribers")
        self._queue.append((signal_name, data))

    def pending(self) -> int:
        return len(self._queue)

    def flush(self) -> int:
        """Deliver queued events; returns how many were delivered."""
        batch, self._queue = self._queue, []
        catch_all = self._subscribers.get(ANY, [])
        for signal_name, data in batch:
            for handler in self._subscribers.get(signal_name, []) + catch_all:
                handler(signal_name, data)
        return len(batch)

    def clear(self) -> None:
        self._queue.clear()
