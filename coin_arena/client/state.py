"""Local mirror of the server's world, as seen by one client."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .. import config, protocol
from ..errors import ProtocolError
from ..game.models import Coin, Player

logger = logging.getLogger(__name__)

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


class ClientState:
    """Last-known players and coins plus the locally driven position.

    ``init`` and ``gameState`` replace the whole mirror. The local position is
    never reconciled with the server's echo; it only seeds from ``init``.
    """

    def __init__(self) -> None:
        self.player_id: Optional[str] = None
        self.players: Dict[str, Player] = {}
        self.coins: List[Coin] = []
        self.x: float = config.CANVAS_WIDTH / 2
        self.y: float = config.CANVAS_HEIGHT / 2

    def apply(self, message: Any) -> None:
        """Fold one server message into the mirror."""

        try:
            event, payload = protocol.split_message(message)
        except ProtocolError as exc:
            logger.warning("Ignoring server message: %s", exc)
            return
        handler = getattr(self, f"_on_{event}", None)
        if handler is None:
            logger.warning("Ignoring unknown server event %r", event)
            return
        handler(payload)

    def _on_init(self, payload: Dict[str, Any]) -> None:
        self.player_id = payload["id"]
        self._replace(payload)
        me = self.players.get(self.player_id)
        if me is not None:
            self.x, self.y = me.x, me.y

    def _on_gameState(self, payload: Dict[str, Any]) -> None:
        self._replace(payload)

    def _on_newPlayer(self, payload: Dict[str, Any]) -> None:
        player_id = payload["id"]
        self.players[player_id] = Player.from_dict(player_id, payload["player"])

    def _on_playerDisconnect(self, payload: Dict[str, Any]) -> None:
        self.players.pop(payload["id"], None)

    def _replace(self, payload: Dict[str, Any]) -> None:
        self.players = {
            player_id: Player.from_dict(player_id, data)
            for player_id, data in payload.get("players", {}).items()
        }
        self.coins = [Coin.from_dict(data) for data in payload.get("coins", [])]

    def step(self, direction: str) -> protocol.Message:
        """Nudge the local position and return the ``playerMove`` to send."""

        dx, dy = DIRECTIONS[direction]
        self.x += dx * config.MOVE_STEP
        self.y += dy * config.MOVE_STEP
        return protocol.player_move_message(self.x, self.y)

    @property
    def me(self) -> Optional[Player]:
        if self.player_id is None:
            return None
        return self.players.get(self.player_id)


__all__ = ["ClientState", "DIRECTIONS"]
