"""Fishgrid - herd lost fish back home.

Controls:
  Arrows      Swim one tile (each move is one tick)
  Space       Wait one tick
  Left-click  Clear the rocks on a tile
  R           New game
  Escape      Quit
"""
from __future__ import annotations

import argparse
import logging
import sys

import pygame

from fishgrid import Click, Direction, Game, GameConfig, Move, Reset, Tick, make_command_queue
from fishgrid.signals import ANY
from ui.constants import COLOR_BG, FPS, STATUS_H, compute_layout
from ui.renderer import draw_entities, draw_grid
from ui.status import StatusBar

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Fishgrid - fish-herding on a tile grid")
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    p.add_argument("--width", type=int, default=16, help="Board width (4-40, default: 16)")
    p.add_argument("--height", type=int, default=12, help="Board height (4-30, default: 12)")
    p.add_argument("--rocks", type=int, default=10, help="Rocks to scatter (default: 10)")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Logging level (default: WARNING)")
    args = p.parse_args()
    args.width = max(4, min(40, args.width))
    args.height = max(4, min(30, args.height))
    args.rocks = max(0, args.rocks)
    return args


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = GameConfig(width=args.width, height=args.height, num_rocks=args.rocks)
    game = Game(config, seed=args.seed)
    queue = make_command_queue()
    logging.getLogger(__name__).info("new game, seed %s", game.seed)

    layout = compute_layout(config.width, config.height)
    tile_size = layout["tile_size"]

    pygame.init()
    screen = pygame.display.set_mode((layout["screen_w"], layout["screen_h"]))
    pygame.display.set_caption("Fishgrid")
    clock = pygame.time.Clock()

    status = StatusBar(layout["grid_h"], layout["screen_w"], STATUS_H)
    game.signals.subscribe(ANY, status.on_signal)
    status.set("Find the lost fish and lead them home")

    running = True
    while running:
        clock.tick(FPS)

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_r:
                    queue.enqueue(Reset())
                    status.set("New game")
                elif game.game_over():
                    continue
                elif event.key in KEY_DIRECTIONS:
                    queue.enqueue(Move(KEY_DIRECTIONS[event.key]))
                    queue.enqueue(Tick())
                elif event.key == pygame.K_SPACE:
                    queue.enqueue(Tick())

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                mx, my = event.pos[0] // tile_size, event.pos[1] // tile_size
                if game.world.in_bounds(mx, my):
                    queue.enqueue(Click(mx, my))

        # --- Apply input ---
        for cmd, accepted in queue.drain(game):
            if isinstance(cmd, Move) and not accepted:
                status.set("Something is in the way")

        # --- Render ---
        screen.fill(COLOR_BG)
        draw_grid(screen, game.world, tile_size)
        found = frozenset(f.eid for f in game.found if f.eid is not None)
        draw_entities(screen, game.world.view(), tile_size, found)
        status.draw(screen, game)

        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
