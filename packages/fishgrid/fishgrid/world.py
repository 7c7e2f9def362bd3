"""World - bounded tile grid, live entity registry, and movement rules."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from fishgrid.entity import (
    BLOCKS_EVERYONE,
    BLOCKS_NON_PLAYER,
    Entity,
    step_entity,
)
from fishgrid.types import (
    DuplicateRegistrationError,
    Kind,
    NotRegisteredError,
    RandomSource,
    WorldFullError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EntityView:
    """Read-only snapshot of one entity, for renderers."""

    eid: int
    kind: Kind
    x: int
    y: int
    color: int
    points: int
    fast: bool


class World:
    def __init__(
        self, width: int, height: int, rng: RandomSource | None = None
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"world must be at least 1x1, got {width}x{height}")
        self._width = width
        self._height = height
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._entities: dict[int, Entity] = {}
        self._cells: dict[tuple[int, int], set[int]] = {}
        self._next_id: int = 0
        self._player: Entity | None = None

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def rng(self) -> RandomSource:
        return self._rng

    @property
    def player(self) -> Entity | None:
        return self._player

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity: object) -> bool:
        return (
            isinstance(entity, Entity)
            and entity.eid is not None
            and self._entities.get(entity.eid) is entity
        )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise ValueError(
                f"({x}, {y}) out of bounds for {self._width}x{self._height} world"
            )

    def _index(self, entity: Entity) -> None:
        assert entity.eid is not None
        pos = entity.position
        if pos not in self._cells:
            self._cells[pos] = set()
        self._cells[pos].add(entity.eid)

    def _unindex(self, entity: Entity) -> None:
        pos = entity.position
        cell = self._cells.get(pos)
        if cell is not None:
            cell.discard(entity.eid)  # type: ignore[arg-type]
            if not cell:
                del self._cells[pos]

    # -- Registry --

    def _check_unregistered(self, entity: Entity) -> None:
        if entity in self:
            raise DuplicateRegistrationError(f"{entity!r} is already registered")
        if entity.is_player and self._player is not None:
            raise DuplicateRegistrationError("world already has a player")

    def register(self, entity: Entity) -> None:
        self._check_unregistered(entity)
        self._check_bounds(entity.x, entity.y)
        if not entity.history:
            entity.history.appendleft(entity.position)
        entity.eid = self._next_id
        self._next_id += 1
        self._entities[entity.eid] = entity
        self._index(entity)
        if entity.is_player:
            self._player = entity
        logger.debug("register: %s #%d at %s", entity.kind.value, entity.eid, entity.position)

    def remove(self, entity: Entity) -> None:
        if entity not in self:
            raise NotRegisteredError(
                entity, f"{entity.kind.value} #{entity.eid} is not in the world"
            )
        self._unindex(entity)
        del self._entities[entity.eid]  # type: ignore[arg-type]
        if entity is self._player:
            self._player = None
        logger.debug("remove: %s #%d", entity.kind.value, entity.eid)

    def clear(self) -> None:
        self._entities.clear()
        self._cells.clear()
        self._player = None

    def entities(self) -> tuple[Entity, ...]:
        return tuple(self._entities.values())

    def view(self) -> tuple[EntityView, ...]:
        return tuple(
            EntityView(
                eid=eid,
                kind=e.kind,
                x=e.x,
                y=e.y,
                color=e.color,
                points=e.points,
                fast=e.fast,
            )
            for eid, e in self._entities.items()
        )

    # -- Spatial queries --

    def find(self, x: int, y: int) -> list[Entity]:
        # ids are handed out in registration order
        return [self._entities[eid] for eid in sorted(self._cells.get((x, y), ()))]

    def find_same_cell(self, entity: Entity) -> list[Entity]:
        return self.find(entity.x, entity.y)

    def pick_unused_space(self) -> tuple[int, int]:
        unused = [
            (x, y)
            for x in range(self._width)
            for y in range(self._height)
            if (x, y) not in self._cells
        ]
        if not unused:
            raise WorldFullError(
                f"no free tile left in {self._width}x{self._height} world"
            )
        return unused[self._rng.randrange(len(unused))]

    def place(self, entity: Entity, x: int, y: int) -> Entity:
        """Move a new entity to (x, y) and register it there.

        Every check runs before the entity is touched, so a rejected
        entity keeps its old position and history.
        """
        self._check_unregistered(entity)
        self._check_bounds(x, y)
        entity.set_position(x, y)
        self.register(entity)
        return entity

    def insert_randomly(self, entity: Entity) -> Entity:
        self._check_unregistered(entity)
        x, y = self.pick_unused_space()
        self.place(entity, x, y)
        if entity not in self.find(x, y):
            raise AssertionError(f"{entity!r} cannot find itself at ({x}, {y})")
        return entity

    # -- Movement --

    def can_move(self, requester: Entity, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        for it in self.find(x, y):
            if it.kind in BLOCKS_EVERYONE:
                return False
            if it.kind in BLOCKS_NON_PLAYER and not requester.is_player:
                return False
        return True

    def move(self, entity: Entity, x: int, y: int) -> None:
        self._check_bounds(x, y)
        if entity not in self:
            raise NotRegisteredError(
                entity, f"{entity.kind.value} #{entity.eid} is not in the world"
            )
        self._unindex(entity)
        entity.set_position(x, y)
        self._index(entity)

    def step_all(self) -> None:
        for entity in list(self._entities.values()):
            # an earlier hook may have removed it
            if entity in self:
                step_entity(entity, self)
