"""Wire format for messages exchanged over the game websocket.

Every message is a JSON object ``{"type": <event>, "payload": {...}}``.
"""
from __future__ import annotations

import json
from dataclasses import asdict
from numbers import Real
from typing import Any, Dict, Tuple

from .errors import ProtocolError
from .game.models import Player, WorldSnapshot

INIT = "init"
NEW_PLAYER = "newPlayer"
GAME_STATE = "gameState"
PLAYER_DISCONNECT = "playerDisconnect"
PLAYER_MOVE = "playerMove"

SERVER_EVENTS = frozenset({INIT, NEW_PLAYER, GAME_STATE, PLAYER_DISCONNECT})
CLIENT_EVENTS = frozenset({PLAYER_MOVE})

Message = Dict[str, Any]


def make_message(event: str, payload: Dict[str, Any]) -> Message:
    return {"type": event, "payload": payload}


def init_message(player_id: str, snapshot: WorldSnapshot) -> Message:
    return make_message(INIT, {"id": player_id, **asdict(snapshot)})


def new_player_message(player: Player) -> Message:
    return make_message(NEW_PLAYER, {"id": player.id, "player": player.to_dict()})


def game_state_message(snapshot: WorldSnapshot) -> Message:
    return make_message(GAME_STATE, asdict(snapshot))


def player_disconnect_message(player_id: str) -> Message:
    return make_message(PLAYER_DISCONNECT, {"id": player_id})


def player_move_message(x: float, y: float) -> Message:
    return make_message(PLAYER_MOVE, {"x": x, "y": y})


def decode(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as exc:
        raise ProtocolError(f"invalid JSON: {exc}") from None


def split_message(message: Any) -> Tuple[str, Dict[str, Any]]:
    """Return ``(event, payload)`` or raise :class:`ProtocolError`."""

    if not isinstance(message, dict):
        raise ProtocolError("message must be a JSON object")
    event = message.get("type")
    if not isinstance(event, str):
        raise ProtocolError("message is missing its type")
    payload = message.get("payload", {})
    if not isinstance(payload, dict):
        raise ProtocolError(f"{event} payload must be a JSON object")
    return event, payload


def parse_move(payload: Dict[str, Any]) -> Tuple[float, float]:
    """Extract the requested position from a ``playerMove`` payload."""

    try:
        x = payload["x"]
        y = payload["y"]
    except KeyError as exc:
        raise ProtocolError(f"playerMove is missing {exc.args[0]!r}") from None
    for value in (x, y):
        if isinstance(value, bool) or not isinstance(value, Real):
            raise ProtocolError(f"playerMove coordinate {value!r} is not a number")
    return x, y


__all__ = [
    "CLIENT_EVENTS",
    "GAME_STATE",
    "INIT",
    "NEW_PLAYER",
    "PLAYER_DISCONNECT",
    "PLAYER_MOVE",
    "SERVER_EVENTS",
    "Message",
    "decode",
    "game_state_message",
    "init_message",
    "make_message",
    "new_player_message",
    "parse_move",
    "player_disconnect_message",
    "player_move_message",
    "split_message",
]
