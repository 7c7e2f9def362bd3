"""Bottom status bar."""
from __future__ import annotations

import pygame

from fishgrid import Game
from ui.constants import COLOR_STATUS_BG, COLOR_TEXT, SIGNAL_RGB


def describe(signal: str, data: dict) -> str:
    """One line of text for a game signal."""
    if signal == "found":
        return f"Found fish #{data['fish'].eid}"
    if signal == "saved":
        if data["rescued"]:
            return f"Fish #{data['fish'].eid} is home (+{data['points']})"
        return f"Fish #{data['fish'].eid} swam home on its own"
    if signal == "collected":
        return f"Heart collected (+{data['points']})"
    if signal == "wandered_off":
        return f"Fish #{data['fish'].eid} got bored and wandered off"
    if signal == "spawned":
        return "A heart appeared"
    if signal == "cleared":
        return f"Cleared rocks at ({data['x']}, {data['y']})"
    return signal


class StatusBar:
    """Score line plus the most recent game event."""

    def __init__(self, top: int, width: int, height: int) -> None:
        self._rect = pygame.Rect(0, top, width, height)
        self._message = ""
        self._color = COLOR_TEXT
        self._font: pygame.font.Font | None = None

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont("monospace", 14)
        return self._font

    def set(self, message: str, color: tuple[int, int, int] = COLOR_TEXT) -> None:
        self._message = message
        self._color = color

    def on_signal(self, signal: str, data: dict) -> None:
        self.set(describe(signal, data), SIGNAL_RGB.get(signal, COLOR_TEXT))

    def draw(self, surface: pygame.Surface, game: Game) -> None:
        pygame.draw.rect(surface, COLOR_STATUS_BG, self._rect)
        font = self._get_font()

        summary = (
            f"Score {game.score}  Tick {game.tick_count}  "
            f"Lost {len(game.missing)}  Following {len(game.found)}  "
            f"Safe {len(game.safe)}"
        )
        if game.game_over():
            summary += "  ALL HOME! (R to restart)"
        text = font.render(summary, True, COLOR_TEXT)
        surface.blit(text, (8, self._rect.top + 8))

        if self._message:
            text = font.render(self._message, True, self._color)
            surface.blit(text, (8, self._rect.top + 30))
