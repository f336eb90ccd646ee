import logging

import pygame
import pytest

from visualization import CoinSprite, TextureCache, Visualizer, draw_coin_frame


@pytest.fixture(autouse=True)
def pygame_session():
    pygame.init()
    yield
    pygame.quit()


def test_coin_frame_is_transparent_around_the_coin():
    frame = draw_coin_frame(0, 9, size=64)
    assert frame.get_size() == (64, 64)
    assert frame.get_at((0, 0)).a == 0
    assert frame.get_at((32, 32)).a == 255


def test_edge_on_frame_is_narrower_than_face_on():
    def opaque_columns(surface):
        w, h = surface.get_size()
        return sum(1 for x in range(w) if surface.get_at((x, h // 2)).a > 0)

    face_on = draw_coin_frame(0, 8)
    edge_on = draw_coin_frame(2, 8)
    assert opaque_columns(edge_on) < opaque_columns(face_on)


def test_missing_assets_fall_back_to_drawn_frames(tmp_path):
    cache = TextureCache(str(tmp_path))
    assert cache.load_frames("CoinsGold", 9) == 0
    assert sorted(cache.textures) == [f"CoinsGold{i:03d}" for i in range(9)]


def test_frames_are_loaded_from_disk(tmp_path):
    folder = tmp_path / "CoinsGold"
    folder.mkdir()
    marker = pygame.Surface((10, 12), pygame.SRCALPHA)
    marker.fill((1, 2, 3, 255))
    pygame.image.save(marker, str(folder / "000.png"))

    cache = TextureCache(str(tmp_path))
    assert cache.load_frames("CoinsGold", 3) == 1
    assert cache.lookup("CoinsGold000").get_size() == (10, 12)


def test_lookup_warns_once_per_missing_name(caplog):
    cache = TextureCache()
    with caplog.at_level(logging.WARNING):
        assert cache.lookup("CoinsGold042") is None
        assert cache.lookup("CoinsGold042") is None
    warnings = [r for r in caplog.records if "CoinsGold042" in r.getMessage()]
    assert len(warnings) == 1


def test_sprite_size_follows_scale():
    sprite = CoinSprite(pygame.Surface((40, 20), pygame.SRCALPHA))
    sprite.scale_x = sprite.scale_y = 0.5
    assert (sprite.width, sprite.height) == (20, 10)


def test_sprite_renders_centered_on_its_pivot():
    sprite = CoinSprite(pygame.Surface((40, 20), pygame.SRCALPHA))
    sprite.pivot_x, sprite.pivot_y = 20, 10
    sprite.x, sprite.y = 100, 50
    sprite.alpha = 0.5

    image, rect = sprite.render()
    assert rect.center == (100, 50)
    assert image.get_alpha() == 128


def test_visualizer_reports_height_and_stops_on_quit():
    visualizer = Visualizer(width=200, height=100, fps=1000)
    try:
        assert visualizer.viewport_height() == 100.0
        sprite = visualizer.create_sprite(draw_coin_frame(0, 9))
        sprite.x, sprite.y = 50, 50
        assert visualizer.draw([sprite]) is True

        pygame.event.post(pygame.event.Event(pygame.QUIT))
        assert visualizer.draw([sprite]) is False
    finally:
        visualizer.close()
