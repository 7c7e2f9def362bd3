"""Entity record, per-kind constructors, and kind dispatch tables."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fishgrid.types import Behavior, Kind

if TYPE_CHECKING:
    from fishgrid.config import GameConfig
    from fishgrid.types import RandomSource
    from fishgrid.world import World

HISTORY_SIZE = 64

# Index 0 belongs to the player; every other index is one lost fish.
FISH_COLORS: tuple[str, ...] = (
    "red",
    "pink",
    "orange",
    "yellow",
    "green",
    "cyan",
    "blue",
    "magenta",
    "gray",
    "dark_gray",
    "light_gray",
)

PLAYER_COLOR = 0


@dataclass(eq=False)
class Entity:
    """Anything that sits on a tile.

    ``history`` is newest-first and always starts with the current
    position once the entity has been placed.
    """

    kind: Kind
    x: int = 0
    y: int = 0
    color: int = 0
    points: int = 0
    fast: bool = False
    boredom: int = 0
    eid: int | None = None
    history: deque[tuple[int, int]] = field(
        default_factory=lambda: deque(maxlen=HISTORY_SIZE), repr=False
    )

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def is_player(self) -> bool:
        return self.kind is Kind.PLAYER

    def set_position(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        self.history.appendleft((x, y))


def fish_points(color: int) -> int:
    # warm colors are worth the most, grays the least
    if color < 4:
        return 15
    if color < 8:
        return 10
    return 7


def make_rock() -> Entity:
    return Entity(Kind.ROCK)


def make_falling_rock() -> Entity:
    return Entity(Kind.FALLING_ROCK)


def make_snail() -> Entity:
    return Entity(Kind.SNAIL)


def make_heart(points: int = 10) -> Entity:
    return Entity(Kind.HEART, points=points)


def make_home() -> Entity:
    return Entity(Kind.HOME)


def make_player() -> Entity:
    return Entity(Kind.PLAYER, color=PLAYER_COLOR)


def make_fish(
    color: int,
    rng: RandomSource | None = None,
    config: GameConfig | None = None,
    fast: bool | None = None,
) -> Entity:
    """Build a lost fish of a given color.

    When ``fast`` is not given it is rolled from ``rng`` against
    ``config.fast_chance``.
    """
    if not 0 < color < len(FISH_COLORS):
        raise ValueError(
            f"fish color must be in 1..{len(FISH_COLORS) - 1}, got {color}"
        )
    if fast is None:
        if rng is None or config is None:
            raise ValueError("make_fish needs rng and config to roll 'fast'")
        fast = rng.random() < config.fast_chance
    return Entity(Kind.FISH, color=color, points=fish_points(color), fast=fast)


# -- Behavior dispatch --

def _fall(entity: Entity, world: World) -> None:
    x, y = entity.x, entity.y + 1
    if world.can_move(entity, x, y):
        world.move(entity, x, y)


BEHAVIORS: dict[Kind, Behavior] = {
    Kind.FALLING_ROCK: _fall,
}

# Kinds nobody may share a tile with.
BLOCKS_EVERYONE = frozenset({Kind.ROCK, Kind.FALLING_ROCK, Kind.SNAIL})
# Kinds only the player may step onto. The player is in neither set, so
# a falling rock may land on it and a lost fish may swim into it.
BLOCKS_NON_PLAYER = frozenset({Kind.FISH})
# Kinds a click removes.
DESTRUCTIBLE = frozenset({Kind.ROCK, Kind.FALLING_ROCK})


def step_entity(entity: Entity, world: World) -> None:
    behavior = BEHAVIORS.get(entity.kind)
    if behavior is not None:
        behavior(entity, world)
