"""Game configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable tunables for a fishgrid game.

    Attributes:
        width: Number of tile columns.
        height: Number of tile rows.
        num_rocks: Rocks placed at setup.
        falling_rock_chance: Chance each setup rock is a falling rock.
        num_snails: Snails (hazards) placed at setup.
        fast_chance: Chance a new fish is fast (harder to catch).
        fast_move_chance: Per-tick chance a missing fast fish tries to move.
        slow_move_chance: Per-tick chance any other missing fish tries to move.
        boredom_threshold: Ticks a follower must trail before it may wander off.
        wander_off_chance: Per-tick chance a bored follower wanders off.
        heart_chance: Per-tick chance a heart appears.
        heart_points: Score for the player collecting a heart.
    """

    width: int = 16
    height: int = 12
    num_rocks: int = 10
    falling_rock_chance: float = 0.5
    num_snails: int = 1
    fast_chance: float = 0.2
    fast_move_chance: float = 0.8
    slow_move_chance: float = 0.3
    boredom_threshold: int = 20
    wander_off_chance: float = 0.05
    heart_chance: float = 0.03
    heart_points: int = 10

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"grid must be at least 1x1, got {self.width}x{self.height}"
            )
        for name in ("num_rocks", "num_snails", "boredom_threshold", "heart_points"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")
        for name in (
            "falling_rock_chance",
            "fast_chance",
            "fast_move_chance",
            "slow_move_chance",
            "wander_off_chance",
            "heart_chance",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
