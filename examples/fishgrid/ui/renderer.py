"""Board rendering."""
from __future__ import annotations

import pygame

from fishgrid import FISH_COLORS, EntityView, Kind, World
from ui.constants import COLOR_GRID, FISH_RGB, KIND_RGB

# Draw order: ground first, swimmers on top
_LAYER = {
    Kind.HOME: 0,
    Kind.HEART: 1,
    Kind.ROCK: 2,
    Kind.FALLING_ROCK: 2,
    Kind.SNAIL: 3,
    Kind.FISH: 4,
    Kind.PLAYER: 5,
}


def _color_of(view: EntityView) -> tuple[int, int, int]:
    if view.kind in (Kind.FISH, Kind.PLAYER):
        return FISH_RGB.get(FISH_COLORS[view.color], (255, 255, 255))
    return KIND_RGB.get(view.kind, (255, 255, 255))


def draw_grid(surface: pygame.Surface, world: World, tile_size: int) -> None:
    grid_w = world.width * tile_size
    grid_h = world.height * tile_size
    for x in range(world.width + 1):
        pygame.draw.line(surface, COLOR_GRID, (x * tile_size, 0), (x * tile_size, grid_h))
    for y in range(world.height + 1):
        pygame.draw.line(surface, COLOR_GRID, (0, y * tile_size), (grid_w, y * tile_size))


def draw_entities(
    surface: pygame.Surface,
    views: tuple[EntityView, ...],
    tile_size: int,
    found: frozenset[int] = frozenset(),
) -> None:
    """Draw every entity; found fish get a white outline."""
    for view in sorted(views, key=lambda v: _LAYER[v.kind]):
        rect = pygame.Rect(view.x * tile_size, view.y * tile_size, tile_size, tile_size)
        color = _color_of(view)
        inner = rect.inflate(-4, -4)

        if view.kind is Kind.HOME:
            pygame.draw.rect(surface, color, inner, 3)
        elif view.kind is Kind.HEART:
            pygame.draw.circle(surface, color, inner.center, tile_size // 4)
        elif view.kind in (Kind.FISH, Kind.PLAYER):
            pygame.draw.ellipse(surface, color, inner)
            if view.kind is Kind.PLAYER:
                pygame.draw.ellipse(surface, (255, 255, 255), inner, 2)
            elif view.eid in found:
                pygame.draw.ellipse(surface, (255, 255, 255), inner, 1)
            if view.fast:
                pygame.draw.circle(surface, (0, 0, 0), inner.center, 2)
        else:
            pygame.draw.rect(surface, color, inner)
