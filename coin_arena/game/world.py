"""Authoritative world state for a Coin Arena server."""
from __future__ import annotations

import random
import uuid
from typing import Dict, List, Optional

from .. import config
from ..errors import UnknownPlayerError
from .models import Coin, Player, WorldSnapshot


def overlaps_coin(player: Player, coin: Coin) -> bool:
    """Return ``True`` if the player's box touches the coin's collision box.

    The coin box spans ``COIN_HALF_EXTENT`` units right and down from the coin
    origin, so it is smaller than the circle clients draw.
    """

    extent = config.COIN_HALF_EXTENT
    return (
        player.x < coin.x + extent
        and player.x + player.width > coin.x
        and player.y < coin.y + extent
        and player.y + player.height > coin.y
    )


class World:
    """Server-owned players and coin pool.

    Every mutation runs to completion without yielding, so a single event loop
    can share one instance between connection handlers and the broadcast task.
    """

    def __init__(self, seed: Optional[int] = None, coin_count: int = config.COIN_COUNT) -> None:
        self.random = random.Random(seed)
        self.players: Dict[str, Player] = {}
        self.coins: List[Coin] = [self._spawn_coin() for _ in range(coin_count)]

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------
    def _spawn_coin(self) -> Coin:
        margin = config.SPAWN_MARGIN
        return Coin(
            x=self.random.randint(margin, config.CANVAS_WIDTH - margin - 1),
            y=self.random.randint(margin, config.CANVAS_HEIGHT - margin - 1),
        )

    def _spawn_position(self) -> tuple[float, float]:
        margin = config.SPAWN_MARGIN
        x = self.random.random() * (config.CANVAS_WIDTH - 2 * margin) + margin
        y = self.random.random() * (config.CANVAS_HEIGHT - 2 * margin) + margin
        return x, y

    def _random_color(self) -> str:
        return f"#{self.random.randrange(0x1000000):06x}"

    # ------------------------------------------------------------------
    # Player management
    # ------------------------------------------------------------------
    def add_player(self, player_id: Optional[str] = None) -> Player:
        """Create a player at a random spawn point."""

        if player_id is None:
            player_id = uuid.uuid4().hex
        x, y = self._spawn_position()
        player = Player(id=player_id, x=x, y=y, color=self._random_color())
        self.players[player_id] = player
        return player

    def remove_player(self, player_id: str) -> Optional[Player]:
        """Drop a player. Returns the removed record, or ``None`` if absent."""

        return self.players.pop(player_id, None)

    def get_player(self, player_id: str) -> Player:
        try:
            return self.players[player_id]
        except KeyError:
            raise UnknownPlayerError(player_id) from None

    # ------------------------------------------------------------------
    # Movement and pickups
    # ------------------------------------------------------------------
    def move_player(self, player_id: str, x: float, y: float) -> int:
        """Teleport a player and collect any coins under it.

        Client coordinates are trusted as sent; this is where bounds or speed
        validation would go. Returns the number of coins collected.
        """

        player = self.get_player(player_id)
        player.x = x
        player.y = y
        return self.collect_coins(player)

    def collect_coins(self, player: Player) -> int:
        collected = 0
        for coin in self.coins:
            if coin.collected or not overlaps_coin(player, coin):
                continue
            coin.collect()
            player.score += 1
            collected += 1
        return collected

    def coins_remaining(self) -> int:
        return sum(1 for coin in self.coins if not coin.collected)

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------
    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot(
            players={player_id: player.to_dict() for player_id, player in self.players.items()},
            coins=[coin.to_dict() for coin in self.coins],
        )


__all__ = ["World", "overlaps_coin"]
