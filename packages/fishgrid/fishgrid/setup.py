"""Opening board: home, rocks, a snail, the player, and the lost fish."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fishgrid.entity import (
    FISH_COLORS,
    PLAYER_COLOR,
    make_falling_rock,
    make_fish,
    make_rock,
    make_snail,
)

if TYPE_CHECKING:
    from fishgrid.game import Game


def populate(game: Game) -> None:
    """Lay out a fresh board on an empty game.

    Raises ``WorldFullError`` if the configured pieces do not fit.
    """
    cfg = game.config
    world = game.world
    rng = world.rng

    game.place_home()

    for _ in range(cfg.num_rocks):
        if rng.random() < cfg.falling_rock_chance:
            world.insert_randomly(make_falling_rock())
        else:
            world.insert_randomly(make_rock())

    for _ in range(cfg.num_snails):
        world.insert_randomly(make_snail())

    # the player starts at home
    game.place_player()

    for color in range(len(FISH_COLORS)):
        if color == PLAYER_COLOR:
            continue
        game.add_missing(make_fish(color, rng, cfg))
