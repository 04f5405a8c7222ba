"""Game rules: players, coins and the authoritative world."""

from .models import Coin, Player, WorldSnapshot
from .world import World, overlaps_coin

__all__ = ["Coin", "Player", "World", "WorldSnapshot", "overlaps_coin"]
