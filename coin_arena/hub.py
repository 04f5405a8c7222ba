"""Connection management and state broadcasting for the game server."""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Dict, Optional, Protocol

from starlette.websockets import WebSocketState

from . import config, protocol
from .errors import ProtocolError, UnknownPlayerError
from .game import World

logger = logging.getLogger(__name__)


class Connection(Protocol):
    application_state: WebSocketState

    async def send_json(self, data: Any) -> None: ...

    async def close(self, code: int = 1000) -> None: ...


class Hub:
    """Binds the authoritative :class:`World` to the open websocket clients.

    Two producers write to the same channel: the per-move broadcast in
    :meth:`handle_move` and the fixed-rate timer started by :meth:`start`.
    Both snapshot the world and send it whole, so their interleaving does not
    matter to clients.
    """

    def __init__(self, world: Optional[World] = None, broadcast_rate: float = config.BROADCAST_RATE):
        self.world = world if world is not None else World()
        self.connections: Dict[str, Connection] = {}
        self.broadcast_rate = broadcast_rate
        self.loop_task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------
    async def connect(self, websocket: Connection) -> str:
        """Create a player for an accepted websocket and announce it."""

        player = self.world.add_player()
        self.connections[player.id] = websocket
        try:
            await websocket.send_json(protocol.init_message(player.id, self.world.snapshot()))
        except Exception:
            await self.disconnect(player.id)
            raise
        logger.info("New player connected: %s", player.id)
        await self.broadcast(protocol.new_player_message(player), exclude=player.id)
        return player.id

    async def disconnect(self, player_id: str) -> None:
        """Forget a player. Calling this twice for one id is a no-op."""

        websocket = self.connections.pop(player_id, None)
        if websocket is not None:
            await self._close(websocket)
        if self.world.remove_player(player_id) is None:
            return
        logger.info("Player disconnected: %s", player_id)
        await self.broadcast(protocol.player_disconnect_message(player_id))

    # ------------------------------------------------------------------
    # Inbound events
    # ------------------------------------------------------------------
    async def handle_text(self, player_id: str, text: str) -> None:
        try:
            message = protocol.decode(text)
        except ProtocolError as exc:
            logger.warning("Dropping message from %s: %s", player_id, exc)
            return
        await self.handle_message(player_id, message)

    async def handle_message(self, player_id: str, message: Any) -> None:
        try:
            event, payload = protocol.split_message(message)
            if event != protocol.PLAYER_MOVE:
                raise ProtocolError(f"unsupported event {event!r}")
            x, y = protocol.parse_move(payload)
        except ProtocolError as exc:
            logger.warning("Dropping message from %s: %s", player_id, exc)
            return
        await self.handle_move(player_id, x, y)

    async def handle_move(self, player_id: str, x: float, y: float) -> None:
        try:
            collected = self.world.move_player(player_id, x, y)
        except UnknownPlayerError:
            return
        if collected:
            logger.debug("Player %s collected %d coin(s)", player_id, collected)
        await self.broadcast_state()

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------
    async def broadcast_state(self) -> None:
        await self.broadcast(protocol.game_state_message(self.world.snapshot()))

    async def broadcast(self, message: Dict[str, Any], exclude: Optional[str] = None) -> None:
        """Send a JSON message to every connection except ``exclude``."""

        stale: list[str] = []
        for player_id, websocket in list(self.connections.items()):
            if player_id == exclude:
                continue
            try:
                await websocket.send_json(message)
            except Exception as exc:
                logger.debug("Send to %s failed (%r); dropping connection", player_id, exc)
                stale.append(player_id)
        for player_id in stale:
            await self.disconnect(player_id)

    async def _close(self, websocket: Connection) -> None:
        if websocket.application_state != WebSocketState.CONNECTED:
            return
        try:
            await websocket.close()
        except Exception:
            logger.debug("Ignoring error while closing a websocket", exc_info=True)

    # ------------------------------------------------------------------
    # Fixed-rate broadcast
    # ------------------------------------------------------------------
    async def start(self) -> None:
        if self.broadcast_rate <= 0:
            return
        if self.loop_task is None or self.loop_task.done():
            self.loop_task = asyncio.create_task(self._run_loop())

    async def stop(self) -> None:
        if self.loop_task:
            self.loop_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self.loop_task
            self.loop_task = None

    async def _run_loop(self) -> None:
        interval = 1.0 / self.broadcast_rate
        while True:
            try:
                await self.broadcast_state()
            except Exception:
                logger.exception("State broadcast failed")
            await asyncio.sleep(interval)


__all__ = ["Connection", "Hub"]
