import logging

import numpy as np
import pytest

from particle import ConfigurationError, FieldConfig, ParticleField, random_range


def test_default_config_is_the_gold_coin_effect():
    cfg = FieldConfig()
    assert cfg.particle_count == 20
    assert cfg.frame_count == 9
    assert cfg.texture_prefix == "CoinsGold"
    assert cfg.fade_step == pytest.approx(0.1)


@pytest.mark.parametrize("overrides", [
    {"particle_count": -1},
    {"particle_count": 2.5},
    {"duration": 0},
    {"duration": -10},
    {"start": -1},
    {"upward_chance": 1.5},
    {"min_gravity": 0.5},
    {"max_gravity": -0.1},
    {"min_size": 0.5, "max_size": 0.1},
    {"min_rotation": 1.0, "max_rotation": -1.0},
    {"min_x_velocity": 3.0, "max_x_velocity": -3.0},
    {"rotation_damping": 0},
    {"fade_amount": -1},
    {"fade_divider": 0},
    {"frame_count": 0},
    {"reset_margin": -5},
    {"gravity_multiplier": float("nan")},
    {"duration": "1000"},
    {"seed": "abc"},
])
def test_malformed_config_fails_fast(overrides):
    with pytest.raises(ConfigurationError):
        FieldConfig(**overrides)


def test_from_params_ignores_unknown_keys(caplog):
    with caplog.at_level(logging.WARNING):
        cfg = FieldConfig.from_params({"particle_count": 3, "sparkle": True})
    assert cfg.particle_count == 3
    assert "sparkle" in caplog.text


def test_from_params_accepts_integer_numbers():
    cfg = FieldConfig.from_params({"duration": 500, "rotation_damping": 10, "start_x": 0})
    assert cfg.duration == 500
    assert cfg.start_x == 0


def test_random_range_scales_the_unit_draw():
    class FixedRng:
        def __init__(self, value):
            self.value = value

        def random(self):
            return self.value

    assert random_range(FixedRng(0.0), -7.0, 7.0) == -7.0
    assert random_range(FixedRng(0.5), -7.0, 7.0) == 0.0
    assert random_range(FixedRng(0.25), 0.0, 4.0) == 1.0


def test_seeding_respects_configured_ranges():
    cfg = FieldConfig(particle_count=500, seed=99)
    field = ParticleField(cfg)

    assert field.positions.shape == (500, 2)
    assert np.all(field.alphas == 0.0)
    assert np.all(field.rotations == 0.0)
    assert np.all(field.positions[:, 0] == cfg.start_x)
    assert np.all(field.positions[:, 1] == cfg.start_y)
    assert np.all((field.scales >= cfg.min_size) & (field.scales <= cfg.max_size))
    assert np.all((field.x_velocities >= cfg.min_x_velocity) & (field.x_velocities <= cfg.max_x_velocity))
    assert np.all((field.rotation_speeds >= cfg.min_rotation) & (field.rotation_speeds <= cfg.max_rotation))

    upward = field.gravities < 0
    assert np.all(field.gravities[upward] >= cfg.min_gravity)
    assert np.all((field.gravities[~upward] >= 0) & (field.gravities[~upward] < cfg.max_gravity))
    # Both directions show up in a pool this size
    assert upward.any() and (~upward).any()


def test_upward_chance_extremes_pick_a_single_direction():
    always_up = ParticleField(FieldConfig(particle_count=50, upward_chance=1.0, seed=3))
    never_up = ParticleField(FieldConfig(particle_count=50, upward_chance=0.0, seed=3))
    assert np.all(always_up.gravities < 0)
    assert np.all(never_up.gravities >= 0)


def test_same_seed_gives_the_same_field():
    a = ParticleField(FieldConfig(seed=42))
    b = ParticleField(FieldConfig(seed=42))
    np.testing.assert_array_equal(a.gravities, b.gravities)
    np.testing.assert_array_equal(a.scales, b.scales)
    np.testing.assert_array_equal(a.x_velocities, b.x_velocities)


def test_injected_generator_is_used():
    cfg = FieldConfig(seed=1)
    a = ParticleField(cfg, rng=np.random.default_rng(5))
    b = ParticleField(cfg, rng=np.random.default_rng(5))
    c = ParticleField(cfg)
    np.testing.assert_array_equal(a.rotation_speeds, b.rotation_speeds)
    assert not np.array_equal(a.rotation_speeds, c.rotation_speeds)


def test_empty_field_is_valid():
    field = ParticleField(FieldConfig(particle_count=0))
    assert field.particle_count == 0
    assert field.positions.shape == (0, 2)


def test_reset_returns_particle_to_spawn(config):
    field = ParticleField(config)
    field.positions[3] = (12.0, 999.0)
    field.alphas[3] = 1.0
    field.rotations[3] = 2.5
    scale = field.scales[3]

    field.reset(3)

    assert tuple(field.positions[3]) == (config.start_x, config.start_y)
    assert field.alphas[3] == 0.0
    assert field.scales[3] == scale
    assert field.rotations[3] == 2.5
    assert config.min_gravity <= field.gravities[3] < config.max_gravity
    assert config.min_x_velocity <= field.x_velocities[3] <= config.max_x_velocity


def test_reset_only_touches_the_given_particle(config):
    field = ParticleField(config)
    before = field.gravities.copy()
    field.reset(0)
    np.testing.assert_array_equal(field.gravities[1:], before[1:])


def test_reset_direction_follows_upward_chance():
    field = ParticleField(FieldConfig(particle_count=1, upward_chance=0.4, seed=2024))
    trials = 10_000
    upward = 0
    for _ in range(trials):
        field.reset(0)
        if field.gravities[0] < 0:
            upward += 1

    # Four standard deviations of a binomial(10000, 0.4)
    tolerance = 4 * np.sqrt(0.4 * 0.6 / trials)
    assert abs(upward / trials - 0.4) < tolerance
