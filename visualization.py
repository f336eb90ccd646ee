# visualization.py
"""
Handles the rendering of coin effects using Pygame.

This is the host side of the application: it loads (or draws) the coin
texture frames, provides the sprite objects the effects write into, and
renders them every frame.
"""
import logging
import math
import os
from typing import Dict, Optional, Sequence, Tuple

import pygame

from constants import (
    ASSET_DIR, BACKGROUND_COLOR, COIN_FACE_COLOR, COIN_RIM_COLOR,
    COIN_RIM_WIDTH, COIN_SHINE_COLOR, COIN_TEXTURE_SIZE, FPS,
    FRAME_FILE_EXTENSION, FULLSCREEN, WINDOW_HEIGHT, WINDOW_TITLE,
    WINDOW_WIDTH
)

# --- Data Contracts ---
#
# class TextureCache:
#   - load_frames(self, prefix: str, frame_count: int) -> int:
#     - Outputs: number of frames read from disk (the rest are drawn).
#     - Side Effects: Registers "<prefix><index:03d>" for every frame.
#
#   - lookup(self, name: str) -> Optional[pygame.Surface]:
#     - Outputs: the texture, or None when the name is unknown.
#     - Side Effects: Logs a warning the first time a name is missing.
#
# class Visualizer:
#   - __init__(self, width: int, height: int, fps: int, background_color: tuple):
#     - Side Effects: Initializes Pygame and creates a display surface.
#
#   - draw(self, sprites: Sequence[CoinSprite]) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Renders sprites to the screen, handles Pygame events.


def draw_coin_frame(index: int, frame_count: int, size: int = COIN_TEXTURE_SIZE) -> pygame.Surface:
    """
    Draws one frame of a spinning coin.

    The coin is an ellipse whose width follows |cos| of the spin angle, so
    a full cycle of frames looks like a coin turning around its vertical axis.
    """
    surface = pygame.Surface((size, size), pygame.SRCALPHA)
    angle = 2.0 * math.pi * index / frame_count
    face_width = max(2, int(round(size * abs(math.cos(angle)))))
    rect = pygame.Rect(0, 0, face_width, size)
    rect.center = (size // 2, size // 2)

    pygame.draw.ellipse(surface, COIN_RIM_COLOR, rect)
    inner = rect.inflate(-COIN_RIM_WIDTH * 2, -COIN_RIM_WIDTH * 2)
    if inner.width > 0 and inner.height > 0:
        pygame.draw.ellipse(surface, COIN_FACE_COLOR, inner)
        shine = pygame.Rect(0, 0, max(1, inner.width // 4), inner.height // 2)
        shine.center = (inner.centerx - inner.width // 6, inner.centery - inner.height // 6)
        pygame.draw.ellipse(surface, COIN_SHINE_COLOR, shine)
    return surface


class TextureCache:
    """
    Name-addressed store of coin textures.
    """
    def __init__(self, asset_dir: str = ASSET_DIR):
        self.asset_dir = asset_dir
        self.textures: Dict[str, pygame.Surface] = {}
        self._reported_missing = set()

    def add(self, name: str, texture: pygame.Surface):
        self.textures[name] = texture

    def load_frames(self, prefix: str, frame_count: int) -> int:
        """
        Loads frames from <asset_dir>/<prefix>/<index:03d>.png, drawing
        a procedural coin for every frame that cannot be read.
        """
        loaded = 0
        for i in range(frame_count):
            number = f"{i:03d}"
            name = f"{prefix}{number}"
            path = os.path.join(self.asset_dir, prefix, number + FRAME_FILE_EXTENSION)
            texture = None
            if os.path.isfile(path):
                try:
                    texture = pygame.image.load(path)
                    if pygame.display.get_surface() is not None:
                        texture = texture.convert_alpha()
                    loaded += 1
                except pygame.error as e:
                    logging.warning(f"Could not load texture '{name}' from {path}: {e}. Drawing it instead.")
            if texture is None:
                texture = draw_coin_frame(i, frame_count)
            self.add(name, texture)

        if loaded < frame_count:
            logging.info(
                f"Loaded {loaded}/{frame_count} '{prefix}' frames from {self.asset_dir}; "
                f"{frame_count - loaded} drawn procedurally."
            )
        else:
            logging.info(f"Loaded all {frame_count} '{prefix}' frames from {self.asset_dir}.")
        return loaded

    def lookup(self, name: str) -> Optional[pygame.Surface]:
        texture = self.textures.get(name)
        if texture is None and name not in self._reported_missing:
            self._reported_missing.add(name)
            logging.warning(f"Texture '{name}' does not exist!")
        return texture


class CoinSprite:
    """
    A drawable coin. Position, rotation and pivot are in screen pixels,
    rotation in radians, alpha in [0, 1].
    """
    def __init__(self, texture: pygame.Surface):
        self.texture = texture
        self.x = 0.0
        self.y = 0.0
        self.scale_x = 1.0
        self.scale_y = 1.0
        self.alpha = 1.0
        self.rotation = 0.0
        self.pivot_x = 0.0
        self.pivot_y = 0.0

    @property
    def width(self) -> float:
        return self.texture.get_width() * abs(self.scale_x)

    @property
    def height(self) -> float:
        return self.texture.get_height() * abs(self.scale_y)

    def render(self) -> Tuple[pygame.Surface, pygame.Rect]:
        """Returns the transformed image and the rect it should be blitted at."""
        w, h = self.texture.get_size()
        scaled = pygame.transform.scale(
            self.texture,
            (max(1, int(w * abs(self.scale_x))), max(1, int(h * abs(self.scale_y))))
        )
        image = pygame.transform.rotate(scaled, -math.degrees(self.rotation))
        image.set_alpha(int(round(self.alpha * 255)))

        # Keep the pivot pinned at (x, y) while rotating around it
        offset = pygame.math.Vector2(
            (w / 2 - self.pivot_x) * abs(self.scale_x),
            (h / 2 - self.pivot_y) * abs(self.scale_y)
        ).rotate_rad(self.rotation)
        rect = image.get_rect(center=(self.x + offset.x, self.y + offset.y))
        return image, rect


class Visualizer:
    """
    Renders coin sprites in a Pygame window.
    """
    def __init__(
        self,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
        fps: int = FPS,
        background_color: tuple = BACKGROUND_COLOR,
    ):
        """
        Initializes Pygame and the display window.
        """
        pygame.init()

        if FULLSCREEN:
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode((width, height))

        self.width = width
        self.height = height
        self.fps = fps
        self.background_color = tuple(background_color)

        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def viewport_height(self) -> float:
        return float(self.height)

    def create_sprite(self, texture: pygame.Surface) -> CoinSprite:
        return CoinSprite(texture)

    def draw(self, sprites: Sequence[CoinSprite]) -> bool:
        """
        Draws all sprites and handles events.

        Returns:
            bool: False if the application should exit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False

        self.screen.fill(self.background_color)
        for sprite in sprites:
            if sprite.alpha <= 0:
                continue
            image, rect = sprite.render()
            self.screen.blit(image, rect)

        pygame.display.flip()
        self.clock.tick(self.fps)
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
