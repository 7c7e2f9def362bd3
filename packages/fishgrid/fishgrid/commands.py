"""Player commands and the queue that routes them to a Game."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from fishgrid.types import Direction

if TYPE_CHECKING:
    from fishgrid.game import Game

Handler = Callable[[Any, "Game"], bool]


@dataclass(frozen=True)
class Move:
    """Try to swim the player one tile."""
    direction: Direction


@dataclass(frozen=True)
class Tick:
    """Advance the game by one full step."""


@dataclass(frozen=True)
class Click:
    """Clear the rocks on a tile."""
    x: int
    y: int


@dataclass(frozen=True)
class Reset:
    """Start over on a fresh board."""


class CommandQueue:
    """Routes input commands to handlers, first in first out.

    One handler per command class, dispatched by exact type. Commands are
    applied only when ``drain`` is called, so a front end can enqueue from
    its event loop and apply them between frames.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[Any], Handler] = {}
        self._pending: deque[Any] = deque()

    def handle(self, cmd_type: type[Any], handler: Handler) -> None:
        """Register ``handler(cmd, game) -> bool``; later calls overwrite."""
        self._handlers[cmd_type] = handler

    def enqueue(self, cmd: Any) -> None:
        self._pending.append(cmd)

    def pending(self) -> int:
        return len(self._pending)

    def drain(self, game: Game) -> list[tuple[Any, bool]]:
        """Apply all pending commands.  Returns ``[(cmd, accepted), ...]``.

        Raises ``TypeError`` if no handler is registered for a command's type;
        commands behind it stay queued.
        """
        results: list[tuple[Any, bool]] = []
        while self._pending:
            cmd = self._pending[0]
            handler = self._handlers.get(type(cmd))
            if handler is None:
                raise TypeError(
                    f"No handler registered for {type(cmd).__qualname__}"
                )
            self._pending.popleft()
            results.append((cmd, handler(cmd, game)))
        return results


def _handle_move(cmd: Move, game: Game) -> bool:
    return game.move_player(cmd.direction)


def _handle_tick(cmd: Tick, game: Game) -> bool:
    game.step()
    return True


def _handle_click(cmd: Click, game: Game) -> bool:
    return game.click(cmd.x, cmd.y) > 0


def _handle_reset(cmd: Reset, game: Game) -> bool:
    game.reset()
    return True


def register_game_handlers(queue: CommandQueue) -> None:
    queue.handle(Move, _handle_move)
    queue.handle(Tick, _handle_tick)
    queue.handle(Click, _handle_click)
    queue.handle(Reset, _handle_reset)


def make_command_queue() -> CommandQueue:
    queue = CommandQueue()
    register_game_handlers(queue)
    return queue
