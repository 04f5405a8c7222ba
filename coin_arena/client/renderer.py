"""Pygame drawing routines for the client."""
from __future__ import annotations

from typing import Iterable, Mapping

import pygame

from .. import config
from ..game.models import Coin, Player

BACKGROUND_COLOR = (255, 255, 255)
COIN_COLOR = pygame.Color("gold")
TEXT_COLOR = (0, 0, 0)
LABEL_OFFSET = 10


def player_label(player: Player) -> str:
    return f"Player {player.id[:5]}: {player.score}"


class Renderer:
    """Draws a world mirror onto a surface the size of the canvas."""

    def __init__(self, surface: pygame.Surface):
        self.surface = surface
        pygame.font.init()
        self.font = pygame.font.Font(None, 20)

    def draw(self, players: Mapping[str, Player], coins: Iterable[Coin]) -> None:
        self.surface.fill(BACKGROUND_COLOR)
        for player in players.values():
            self.draw_player(player)
        for coin in coins:
            self.draw_coin(coin)
        for player in players.values():
            self.draw_label(player)

    def draw_player(self, player: Player) -> None:
        rect = pygame.Rect(round(player.x), round(player.y), player.width, player.height)
        pygame.draw.rect(self.surface, pygame.Color(player.color), rect)

    def draw_coin(self, coin: Coin) -> None:
        if coin.collected:
            return
        pygame.draw.circle(self.surface, COIN_COLOR, (round(coin.x), round(coin.y)), config.COIN_RADIUS)

    def draw_label(self, player: Player) -> None:
        text = self.font.render(player_label(player), True, TEXT_COLOR)
        rect = text.get_rect()
        rect.midbottom = (round(player.x + player.width / 2), round(player.y - LABEL_OFFSET))
        self.surface.blit(text, rect)


__all__ = ["Renderer", "player_label"]
