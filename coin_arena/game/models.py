"""Data structures shared by the server world and the client mirror."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .. import config


@dataclass
class Player:
    """A connected player's square on the playfield."""

    id: str
    x: float
    y: float
    color: str
    width: int = config.PLAYER_WIDTH
    height: int = config.PLAYER_HEIGHT
    score: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "score": self.score,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, player_id: str, data: Dict[str, object]) -> "Player":
        return cls(
            id=player_id,
            x=data["x"],
            y=data["y"],
            color=data["color"],
            width=data.get("width", config.PLAYER_WIDTH),
            height=data.get("height", config.PLAYER_HEIGHT),
            score=data.get("score", 0),
        )


@dataclass
class Coin:
    """A pickup that can be collected once."""

    x: float
    y: float
    collected: bool = False

    def collect(self) -> bool:
        """Flip the coin to collected. Returns ``False`` if it already was."""
        if self.collected:
            return False
        self.collected = True
        return True

    def to_dict(self) -> Dict[str, object]:
        return {"x": self.x, "y": self.y, "collected": self.collected}

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Coin":
        return cls(x=data["x"], y=data["y"], collected=bool(data.get("collected", False)))


@dataclass
class WorldSnapshot:
    """Serializable view of the complete world state."""

    players: Dict[str, Dict[str, object]] = field(default_factory=dict)
    coins: List[Dict[str, object]] = field(default_factory=list)


__all__ = ["Player", "Coin", "WorldSnapshot"]
