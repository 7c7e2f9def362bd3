"""Shared types, errors, and protocols for fishgrid."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Protocol

if TYPE_CHECKING:
    from fishgrid.entity import Entity
    from fishgrid.game import Game
    from fishgrid.world import World


class Kind(enum.Enum):
    ROCK = "rock"
    FALLING_ROCK = "falling_rock"
    SNAIL = "snail"
    HEART = "heart"
    HOME = "home"
    FISH = "fish"
    PLAYER = "player"


class Direction(enum.Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


DIRECTIONS: tuple[Direction, ...] = tuple(Direction)


class RandomSource(Protocol):
    """Anything that hands out uniform doubles and bounded ints.

    ``random.Random`` satisfies this.
    """

    def random(self) -> float: ...
    def randrange(self, stop: int) -> int: ...


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    random: RandomSource


class DuplicateRegistrationError(ValueError):
    """Raised when registering an entity the world already holds."""


class NotRegisteredError(KeyError):
    """Raised when operating on an entity that is not in the world."""

    def __init__(self, entity: Any, message: str) -> None:
        self.entity = entity
        super().__init__(message)


class WorldFullError(RuntimeError):
    """Raised when there is no free tile left to place something on."""


Phase = Callable[["Game", TickContext], None]
Behavior = Callable[["Entity", "World"], None]
