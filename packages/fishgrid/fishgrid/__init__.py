"""fishgrid - Turn-based fish-herding on a tile grid."""
from __future__ import annotations

from fishgrid.clock import Clock
from fishgrid.commands import (
    Click,
    CommandQueue,
    Move,
    Reset,
    Tick,
    make_command_queue,
    register_game_handlers,
)
from fishgrid.config import GameConfig
from fishgrid.entity import (
    FISH_COLORS,
    HISTORY_SIZE,
    Entity,
    make_falling_rock,
    make_fish,
    make_heart,
    make_home,
    make_player,
    make_rock,
    make_snail,
)
from fishgrid.follow import follow
from fishgrid.game import PHASES, Game
from fishgrid.setup import populate
from fishgrid.signals import SignalBus
from fishgrid.types import (
    Direction,
    DuplicateRegistrationError,
    Kind,
    NotRegisteredError,
    RandomSource,
    TickContext,
    WorldFullError,
)
from fishgrid.world import EntityView, World

__all__ = [
    "Game",
    "GameConfig",
    "PHASES",
    "World",
    "Entity",
    "EntityView",
    "Kind",
    "Direction",
    "Clock",
    "TickContext",
    "RandomSource",
    "SignalBus",
    "CommandQueue",
    "Move",
    "Tick",
    "Click",
    "Reset",
    "make_command_queue",
    "register_game_handlers",
    "follow",
    "populate",
    "FISH_COLORS",
    "HISTORY_SIZE",
    "make_rock",
    "make_falling_rock",
    "make_snail",
    "make_heart",
    "make_home",
    "make_player",
    "make_fish",
    "DuplicateRegistrationError",
    "NotRegisteredError",
    "WorldFullError",
]
