"""FastAPI application exposing Coin Arena over websockets."""
from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from . import config
from .game import World
from .hub import Hub

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"
INDEX_FILE = STATIC_DIR / "index.html"


def create_app(world: Optional[World] = None, broadcast_rate: float = config.BROADCAST_RATE) -> FastAPI:
    """Create the application with a fresh world and coin pool.

    A ``broadcast_rate`` of zero disables the fixed-rate timer, leaving only
    the broadcasts triggered by moves.
    """

    hub = Hub(world, broadcast_rate=broadcast_rate)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await hub.start()
        try:
            yield
        finally:
            await hub.stop()

    app = FastAPI(title=config.GAME_NAME, version="0.1.0", lifespan=lifespan)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    app.state.hub = hub

    app.add_api_route("/", serve_index, methods=["GET"])
    app.add_api_route("/health", healthcheck, methods=["GET"])
    app.add_api_websocket_route(config.WEBSOCKET_PATH, websocket_endpoint)
    return app


async def get_hub(request: Request) -> Hub:
    return request.app.state.hub


async def get_socket_hub(websocket: WebSocket) -> Hub:
    return websocket.app.state.hub


async def serve_index() -> FileResponse:
    if not INDEX_FILE.exists():
        raise HTTPException(status_code=500, detail="Missing web assets")
    return FileResponse(INDEX_FILE)


async def healthcheck(hub: Hub = Depends(get_hub)) -> JSONResponse:
    """Simple readiness probe."""

    return JSONResponse(
        {
            "status": "ok",
            "players": len(hub.world.players),
            "coins_remaining": hub.world.coins_remaining(),
        }
    )


async def websocket_endpoint(websocket: WebSocket, hub: Hub = Depends(get_socket_hub)) -> None:
    await websocket.accept()
    try:
        player_id = await hub.connect(websocket)
    except (RuntimeError, WebSocketDisconnect):
        return
    try:
        while True:
            text = await websocket.receive_text()
            await hub.handle_text(player_id, text)
    except WebSocketDisconnect:
        pass
    finally:
        await hub.disconnect(player_id)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("Server running on http://localhost:%d", config.PORT)
    uvicorn.run(create_app(), host=config.HOST, port=config.PORT, log_level="info")


if __name__ == "__main__":
    main()


__all__ = ["create_app", "main"]
