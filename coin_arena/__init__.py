"""Coin Arena: a small real-time multiplayer coin collecting game."""

from .game import World
from .hub import Hub

__all__ = ["Hub", "World"]
