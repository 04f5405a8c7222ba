"""Configuration constants for the Coin Arena server and clients.

The playfield bounds derive from an 800x600 canvas with a 10 unit margin on
every side. Values are plain module constants; tests override the world and
broadcast rate through ``create_app`` instead of patching these.
"""

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600
SPAWN_MARGIN = 10

PLAYER_WIDTH = 20
PLAYER_HEIGHT = 20

COIN_COUNT = 10
COIN_HALF_EXTENT = 10  # Collision box, measured from the coin origin.
COIN_RADIUS = 10  # Drawn circle; larger than the collision box.

BROADCAST_RATE = 60  # Full state broadcasts per second.

HOST = "0.0.0.0"
PORT = 3000
WEBSOCKET_PATH = "/ws"

# Client configuration hints.
GAME_NAME = "Coin Arena"
MOVE_STEP = 5
FRAME_RATE = 60
SERVER_URL = f"ws://localhost:{PORT}{WEBSOCKET_PATH}"
