"""Pygame front-end: window, keyboard input and the frame loop."""
from __future__ import annotations

import argparse
import logging
from typing import Optional

import pygame

from .. import config
from .network import NetworkClient
from .renderer import Renderer
from .state import ClientState

logger = logging.getLogger(__name__)

KEY_DIRECTIONS = {
    pygame.K_UP: "up",
    pygame.K_DOWN: "down",
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
}
KEY_REPEAT_DELAY = 250
KEY_REPEAT_INTERVAL = 33


class GameClient:
    """Runs the redraw loop independently of server broadcast timing."""

    def __init__(self, network: NetworkClient, state: Optional[ClientState] = None):
        self.network = network
        self.state = state or ClientState()
        self.running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            direction = KEY_DIRECTIONS.get(event.key)
            if direction is not None:
                self.network.send(self.state.step(direction))

    def pump_network(self) -> None:
        for message in self.network.poll():
            self.state.apply(message)

    def run(self) -> None:
        pygame.init()
        screen = pygame.display.set_mode((config.CANVAS_WIDTH, config.CANVAS_HEIGHT))
        pygame.display.set_caption(config.GAME_NAME)
        pygame.key.set_repeat(KEY_REPEAT_DELAY, KEY_REPEAT_INTERVAL)
        renderer = Renderer(screen)
        clock = pygame.time.Clock()

        self.network.connect()
        self.running = True
        try:
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.pump_network()
                renderer.draw(self.state.players, self.state.coins)
                pygame.display.flip()
                clock.tick(config.FRAME_RATE)
        finally:
            self.network.disconnect()
            pygame.quit()


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=f"{config.GAME_NAME} desktop client")
    parser.add_argument("--url", default=config.SERVER_URL, help="websocket URL of the game server")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    GameClient(NetworkClient(args.url)).run()


if __name__ == "__main__":
    main()


__all__ = ["GameClient", "KEY_DIRECTIONS", "main"]
