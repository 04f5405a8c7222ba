"""Websocket connection to the game server for the pygame client.

Networking runs on its own asyncio loop in a daemon thread so the frame loop
never blocks; the two sides talk through thread-safe queues.
"""
from __future__ import annotations

import asyncio
import json
import logging
import threading
from queue import Empty, Queue
from typing import Any, Dict, List, Optional

import websockets

from .. import config

logger = logging.getLogger(__name__)


class NetworkClient:
    """Ships ``playerMove`` messages out and server events in."""

    def __init__(self, url: str = config.SERVER_URL):
        self.url = url
        self.connected = False
        self.running = False
        self.incoming: Queue = Queue()
        self.outgoing: Queue = Queue()
        self._thread: Optional[threading.Thread] = None

    def connect(self) -> None:
        self.running = True
        self._thread = threading.Thread(target=self._run, name="coin-arena-network", daemon=True)
        self._thread.start()

    def disconnect(self) -> None:
        self.running = False
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=1.0)

    def send(self, message: Dict[str, Any]) -> None:
        if self.connected:
            self.outgoing.put(message)

    def poll(self) -> List[Dict[str, Any]]:
        """Drain every message received since the last call."""

        messages = []
        while True:
            try:
                messages.append(self.incoming.get_nowait())
            except Empty:
                return messages

    # ------------------------------------------------------------------
    # Network thread
    # ------------------------------------------------------------------
    def _run(self) -> None:
        try:
            asyncio.run(self._session())
        except (OSError, websockets.exceptions.WebSocketException) as exc:
            logger.error("Could not reach %s: %s", self.url, exc)

    async def _session(self) -> None:
        logger.info("Connecting to %s", self.url)
        async with websockets.connect(self.url) as websocket:
            self.connected = True
            try:
                await asyncio.gather(self._receive_loop(websocket), self._send_loop(websocket))
            except websockets.exceptions.ConnectionClosed as exc:
                logger.info("Connection closed: %s", exc)
            finally:
                self.connected = False

    async def _receive_loop(self, websocket) -> None:
        async for raw in websocket:
            try:
                self.incoming.put(json.loads(raw))
            except ValueError as exc:
                logger.warning("Discarding undecodable message: %s", exc)
        self.connected = False

    async def _send_loop(self, websocket) -> None:
        while self.running and self.connected:
            try:
                message = self.outgoing.get_nowait()
            except Empty:
                await asyncio.sleep(0.005)
                continue
            await websocket.send(json.dumps(message))
        await websocket.close()


__all__ = ["NetworkClient"]
