"""Game - the missing/found/safe state machine driven one tick at a time."""
from __future__ import annotations

import logging
import os
import random
from typing import Sequence

from fishgrid import setup
from fishgrid.clock import Clock
from fishgrid.config import GameConfig
from fishgrid.entity import (
    DESTRUCTIBLE,
    FISH_COLORS,
    Entity,
    make_heart,
    make_home,
    make_player,
)
from fishgrid.follow import follow
from fishgrid.signals import SignalBus
from fishgrid.types import (
    DIRECTIONS,
    Direction,
    Kind,
    Phase,
    RandomSource,
    TickContext,
    WorldFullError,
)
from fishgrid.world import World

logger = logging.getLogger(__name__)


class Game:
    """Owns the world, the category lists, and the score.

    Each ``step()`` runs the phases in ``PHASES`` in order; later phases
    see what earlier ones changed. Score is awarded when the player brings
    found fish home, and when the player picks up a heart.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: RandomSource | None = None,
        seed: int | None = None,
        populate: bool = True,
    ) -> None:
        self._config = config if config is not None else GameConfig()
        if rng is None:
            if seed is None:
                seed = int.from_bytes(os.urandom(8), "big")
            rng = random.Random(seed)
        self._seed = seed
        self._rng = rng
        self._world = World(self._config.width, self._config.height, rng)
        self._clock = Clock()
        self._signals = SignalBus()
        self._phases: list[Phase] = list(PHASES)
        self._home: Entity | None = None
        self._player: Entity | None = None
        self._missing: list[Entity] = []
        self._found: list[Entity] = []
        self._safe: list[Entity] = []
        self._score = 0
        if populate:
            self._populate()

    def _populate(self) -> None:
        setup.populate(self)

    # -- Read-only state --

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def world(self) -> World:
        return self._world

    @property
    def signals(self) -> SignalBus:
        return self._signals

    @property
    def home(self) -> Entity | None:
        return self._home

    @property
    def player(self) -> Entity | None:
        return self._player

    @property
    def missing(self) -> tuple[Entity, ...]:
        return tuple(self._missing)

    @property
    def found(self) -> tuple[Entity, ...]:
        return tuple(self._found)

    @property
    def safe(self) -> tuple[Entity, ...]:
        return tuple(self._safe)

    @property
    def score(self) -> int:
        return self._score

    @property
    def tick_count(self) -> int:
        return self._clock.tick_number

    def missing_fish_left(self) -> int:
        return len(self._missing) + len(self._found)

    def game_over(self) -> bool:
        return not self._missing and not self._found

    # -- Building a board --

    def _place(self, entity: Entity, x: int | None, y: int | None) -> Entity:
        if x is None or y is None:
            return self._world.insert_randomly(entity)
        return self._world.place(entity, x, y)

    def place_home(self, x: int | None = None, y: int | None = None) -> Entity:
        if self._home is not None:
            raise ValueError("game already has a home")
        self._home = self._place(make_home(), x, y)
        return self._home

    def place_player(self, x: int | None = None, y: int | None = None) -> Entity:
        """Register the player, on the home tile unless told otherwise."""
        if self._player is not None:
            raise ValueError("game already has a player")
        if x is None or y is None:
            if self._home is None:
                raise ValueError("place the home before a player with no position")
            x, y = self._home.position
        self._player = self._place(make_player(), x, y)
        return self._player

    def add_missing(
        self, fish: Entity, x: int | None = None, y: int | None = None
    ) -> Entity:
        _expect_fish(fish)
        self._place(fish, x, y)
        self._missing.append(fish)
        return fish

    # -- Commands --

    def move_player(self, direction: Direction) -> bool:
        player = self._require_player()
        x, y = player.x + direction.dx, player.y + direction.dy
        if not self._world.can_move(player, x, y):
            return False
        self._world.move(player, x, y)
        return True

    def step(self) -> None:
        self._require_player()
        if self._home is None:
            raise RuntimeError("game has no home; call place_home() or reset()")
        self._clock.advance()
        ctx = self._clock.context(self._rng)
        for phase in self._phases:
            phase(self, ctx)

    def click(self, x: int, y: int) -> int:
        """Remove the rocks on a tile; returns how many went."""
        logger.info("clicked on %d,%d", x, y)
        removed = 0
        for it in self._world.find(x, y):
            if it.kind in DESTRUCTIBLE:
                self._world.remove(it)
                removed += 1
        if removed:
            self._signals.publish("cleared", x=x, y=y, count=removed)
        self._signals.flush()
        return removed

    def reset(self) -> None:
        self._world.clear()
        self._clock.reset()
        self._signals.clear()
        self._home = None
        self._player = None
        self._missing.clear()
        self._found.clear()
        self._safe.clear()
        self._score = 0
        self._populate()

    def _require_player(self) -> Entity:
        if self._player is None:
            raise RuntimeError("game has no player; call place_player() or reset()")
        return self._player


def _expect_fish(entity: Entity) -> Entity:
    if entity.kind is not Kind.FISH:
        raise AssertionError(f"{entity!r} must be a fish to be missing/found/safe")
    return entity


def _move_randomly(world: World, entity: Entity, rng: RandomSource) -> bool:
    d = DIRECTIONS[rng.randrange(len(DIRECTIONS))]
    x, y = entity.x + d.dx, entity.y + d.dy
    if not world.can_move(entity, x, y):
        return False
    world.move(entity, x, y)
    return True


# -- Phases, in tick order --

def player_interacts(game: Game, ctx: TickContext) -> None:
    player = game._require_player()
    world = game._world
    overlap = [it for it in world.find_same_cell(player) if it is not player]
    for it in overlap:
        if it in game._missing:
            fish = _expect_fish(it)
            game._missing.remove(fish)
            game._found.append(fish)
            logger.info("found %s fish #%s", FISH_COLORS[fish.color], fish.eid)
            game._signals.publish("found", fish=fish)
        elif it.kind is Kind.HOME:
            for fish in game._found:
                _expect_fish(fish)
                game._safe.append(fish)
                game._score += fish.points
                world.remove(fish)
                logger.info("fish #%s is home (+%d)", fish.eid, fish.points)
                game._signals.publish("saved", fish=fish, points=fish.points, rescued=True)
            game._found.clear()
        elif it.kind is Kind.HEART:
            world.remove(it)
            game._score += it.points
            game._signals.publish("collected", heart=it, points=it.points)


def wander_missing(game: Game, ctx: TickContext) -> None:
    cfg = game._config
    world = game._world
    saved: list[Entity] = []
    for fish in game._missing:
        chance = cfg.fast_move_chance if fish.fast else cfg.slow_move_chance
        if ctx.random.random() < chance:
            _move_randomly(world, fish, ctx.random)

        at_home = False
        for it in world.find_same_cell(fish):
            if it is fish:
                continue
            if it.kind is Kind.HOME:
                at_home = True
            elif it.kind is Kind.HEART:
                world.remove(it)
        if at_home:
            world.remove(fish)
            saved.append(fish)

    for fish in saved:
        game._missing.remove(fish)
        game._safe.append(_expect_fish(fish))
        logger.info("fish #%s swam home on its own", fish.eid)
        game._signals.publish("saved", fish=fish, points=0, rescued=False)


def follow_player(game: Game, ctx: TickContext) -> None:
    follow(game._world, game._require_player(), game._found)


def wander_off(game: Game, ctx: TickContext) -> None:
    cfg = game._config
    bored: list[Entity] = []
    for i, fish in enumerate(game._found):
        if i == 0:
            # right behind the player; never wanders
            continue
        fish.boredom += 1
        if (
            fish.boredom >= cfg.boredom_threshold
            and ctx.random.random() < cfg.wander_off_chance
        ):
            fish.boredom = 0
            bored.append(fish)

    for fish in bored:
        game._found.remove(fish)
        game._missing.append(_expect_fish(fish))
        logger.info("fish #%s got bored and wandered off", fish.eid)
        game._signals.publish("wandered_off", fish=fish)


def spawn_hearts(game: Game, ctx: TickContext) -> None:
    cfg = game._config
    if ctx.random.random() >= cfg.heart_chance:
        return
    try:
        heart = game._world.insert_randomly(make_heart(cfg.heart_points))
    except WorldFullError:
        logger.debug("tick %d: no room for a heart", ctx.tick_number)
        return
    game._signals.publish("spawned", heart=heart)


def step_world(game: Game, ctx: TickContext) -> None:
    game._world.step_all()


def flush_signals(game: Game, ctx: TickContext) -> None:
    game._signals.flush()


PHASES: Sequence[Phase] = (
    player_interacts,
    wander_missing,
    follow_player,
    wander_off,
    spawn_hearts,
    step_world,
    flush_signals,
)
