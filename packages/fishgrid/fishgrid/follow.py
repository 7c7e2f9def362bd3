"""Trail followers along a leader's recent path."""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from fishgrid.entity import Entity
    from fishgrid.world import World


def follow(world: World, leader: Entity, followers: Sequence[Entity]) -> None:
    """Put ``followers[i]`` on the tile the leader held ``i + 1`` moves ago.

    ``history[0]`` is the leader's own tile, so the first follower lands
    one step behind rather than on top of it. Followers past the end of the
    recorded history keep their current tile.
    """
    put_where = list(leader.history)
    for i in range(min(len(followers), len(put_where) - 1)):
        x, y = put_where[i + 1]
        world.move(followers[i], x, y)
