"""Layout and color constants."""
from __future__ import annotations

from fishgrid import Kind

STATUS_H = 56
FPS = 30

COLOR_BG = (10, 30, 60)
COLOR_GRID = (20, 45, 80)
COLOR_STATUS_BG = (30, 30, 40)
COLOR_TEXT = (200, 200, 200)

# Fish colors are named on the entity; the player is index 0.
FISH_RGB: dict[str, tuple[int, int, int]] = {
    "red": (220, 50, 50),
    "pink": (240, 140, 180),
    "orange": (240, 140, 40),
    "yellow": (240, 220, 60),
    "green": (80, 200, 90),
    "cyan": (70, 210, 220),
    "blue": (70, 110, 240),
    "magenta": (210, 70, 210),
    "gray": (150, 150, 150),
    "dark_gray": (90, 90, 90),
    "light_gray": (210, 210, 210),
}

KIND_RGB: dict[Kind, tuple[int, int, int]] = {
    Kind.ROCK: (120, 100, 80),
    Kind.FALLING_ROCK: (170, 130, 90),
    Kind.SNAIL: (160, 200, 60),
    Kind.HEART: (255, 60, 120),
    Kind.HOME: (230, 200, 120),
}

# Event colors for the status line
SIGNAL_RGB: dict[str, tuple[int, int, int]] = {
    "found": (100, 220, 220),
    "saved": (100, 255, 100),
    "collected": (255, 120, 170),
    "wandered_off": (255, 180, 80),
    "spawned": (200, 200, 200),
    "cleared": (180, 160, 130),
}


def compute_layout(width: int, height: int) -> dict[str, int]:
    """Pick a tile size that keeps the board under 800x600."""
    tile_size = max(16, min(48, 800 // width, 600 // height))
    return {
        "tile_size": tile_size,
        "grid_w": width * tile_size,
        "grid_h": height * tile_size,
        "screen_w": width * tile_size,
        "screen_h": height * tile_size + STATUS_H,
    }
