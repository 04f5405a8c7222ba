"""Desktop client: a local mirror of the world drawn with pygame."""

from .state import ClientState

__all__ = ["ClientState"]
