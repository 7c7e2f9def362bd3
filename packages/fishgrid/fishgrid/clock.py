"""Clock - discrete tick counter for turn-based play."""
from __future__ import annotations

from fishgrid.types import RandomSource, TickContext


class Clock:
    def __init__(self) -> None:
        self._tick_number = 0

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def advance(self) -> int:
        self._tick_number += 1
        return self._tick_number

    def context(self, rng: RandomSource) -> TickContext:
        return TickContext(tick_number=self._tick_number, random=rng)

    def reset(self, tick_number: int = 0) -> None:
        if tick_number < 0:
            raise ValueError("tick_number must be >= 0")
        self._tick_number = tick_number
