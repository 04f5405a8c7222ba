"""Runs the desktop client's network thread against a live server."""
from __future__ import annotations

import socket
import threading
import time
from typing import Callable, List

import pytest
import uvicorn

from coin_arena import protocol
from coin_arena.client.network import NetworkClient
from coin_arena.game import World
from coin_arena.server import create_app


def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def wait_for(condition: Callable[[], bool], timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.01)
    return condition()


@pytest.fixture()
def live_server():
    port = free_port()
    app = create_app(world=World(seed=9), broadcast_rate=0)
    server = uvicorn.Server(uvicorn.Config(app, host="127.0.0.1", port=port, log_level="warning"))
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()
    assert wait_for(lambda: server.started), "server did not start"
    yield server, f"ws://127.0.0.1:{port}/ws"
    server.should_exit = True
    thread.join(timeout=5)


def test_client_receives_init_and_round_trips_a_move(live_server) -> None:
    server, url = live_server
    network = NetworkClient(url)
    inbox: List[dict] = []
    network.connect()
    try:
        assert wait_for(lambda: inbox.extend(network.poll()) or bool(inbox))
        assert inbox[0]["type"] == protocol.INIT
        player_id = inbox[0]["payload"]["id"]
        assert network.connected

        network.send(protocol.player_move_message(321, 123))
        assert wait_for(
            lambda: inbox.extend(network.poll()) or any(m["type"] == protocol.GAME_STATE for m in inbox)
        )
        state = next(m for m in inbox if m["type"] == protocol.GAME_STATE)["payload"]
        assert (state["players"][player_id]["x"], state["players"][player_id]["y"]) == (321, 123)
    finally:
        network.disconnect()


def test_server_shutdown_stops_network_thread(live_server) -> None:
    server, url = live_server
    network = NetworkClient(url)
    network.connect()
    assert wait_for(lambda: network.connected)

    server.should_exit = True

    assert wait_for(lambda: not network.connected)
    network._thread.join(timeout=5)
    assert not network._thread.is_alive()


def test_unreachable_server_ends_thread_quietly() -> None:
    network = NetworkClient(f"ws://127.0.0.1:{free_port()}/ws")
    network.connect()
    network._thread.join(timeout=5)
    assert not network._thread.is_alive()
    assert network.connected is False
