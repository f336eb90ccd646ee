# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They cover the
window, rendering and asset conventions of the host application; the
tunable constants of each coin effect live in config.json instead.
"""

# Visualization settings
# Set to True to run in borderless fullscreen mode.
# Set to False to run in a fixed-size window (WINDOW_WIDTH x WINDOW_HEIGHT).
FULLSCREEN = False
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 450
WINDOW_TITLE = "Coin Burst"
FPS = 60
BACKGROUND_COLOR = (24, 24, 24) # Dark Gray

# --- Assets ---
# Frames are read from <ASSET_DIR>/<texture_prefix>/<index:03d>.png
ASSET_DIR = "gfx"
FRAME_FILE_EXTENSION = ".png"

# --- Procedural coin frames (used when no asset files are found) ---
COIN_TEXTURE_SIZE = 64
COIN_FACE_COLOR = (255, 204, 0)   # Gold
COIN_RIM_COLOR = (184, 134, 11)   # Dark Goldenrod
COIN_SHINE_COLOR = (255, 240, 160)
COIN_RIM_WIDTH = 4

DEFAULT_CONFIG_PATH = "config.json"
