"""Exceptions raised by the Coin Arena game rules and protocol."""
from __future__ import annotations


class CoinArenaError(RuntimeError):
    """Base class for game related failures."""


class UnknownPlayerError(CoinArenaError):
    """Raised when an operation names a player that is not in the world."""

    def __init__(self, player_id: str):
        super().__init__(f"unknown player {player_id!r}")
        self.player_id = player_id


class ProtocolError(CoinArenaError):
    """Raised when a client message cannot be decoded into an event."""


__all__ = ["CoinArenaError", "UnknownPlayerError", "ProtocolError"]
