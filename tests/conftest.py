import os

# Pygame runs headless under test.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from particle import FieldConfig


@pytest.fixture
def config():
    """The gold coin effect with a fixed seed."""
    return FieldConfig(seed=1234)


@pytest.fixture
def single_config():
    return FieldConfig(particle_count=1, seed=7)


class FakeSprite:
    """Minimal drawable with a fixed 40x20 texture."""
    def __init__(self, texture="initial"):
        self.texture = texture
        self.x = self.y = 0.0
        self.scale_x = self.scale_y = 1.0
        self.alpha = 1.0
        self.rotation = 0.0
        self.pivot_x = self.pivot_y = 0.0

    @property
    def width(self):
        return 40 * self.scale_x

    @property
    def height(self):
        return 20 * self.scale_y


class FakeTextureCache:
    def __init__(self, names=()):
        self.textures = {name: f"texture:{name}" for name in names}
        self.lookups = []

    def lookup(self, name):
        self.lookups.append(name)
        return self.textures.get(name)


@pytest.fixture
def fake_sprite_cls():
    return FakeSprite


@pytest.fixture
def fake_cache_cls():
    return FakeTextureCache
