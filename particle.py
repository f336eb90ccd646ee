# particle.py
"""
Manages the state of all coin particles in a field.

This module defines the FieldConfig record, which holds the tunable
constants of one coin effect, and the ParticleField class, which is
responsible for seeding and storing particle data (position, alpha,
rotation, motion parameters) in NumPy arrays and for respawning
particles in place.
"""
import logging
import math
from dataclasses import dataclass, fields
from typing import Dict, Any, Optional

import numpy as np

# --- Data Contracts ---
#
# class FieldConfig (frozen dataclass):
#   - from_params(params: Dict[str, Any]) -> FieldConfig:
#     - Inputs: one entry of the "effects" list in config.json.
#     - Outputs: a validated, immutable configuration.
#     - Side Effects: Logs a warning for unknown keys.
#     - Raises: ConfigurationError for wrong types or inconsistent ranges.
#
# class ParticleField:
#   - __init__(self, config: FieldConfig, rng: Optional[np.random.Generator] = None):
#     - Inputs:
#       - config: validated FieldConfig.
#       - rng: generator owned by the field. Defaults to
#         np.random.default_rng(config.seed).
#     - Side Effects: Initializes the NumPy state arrays.
#     - Invariants:
#       - Every state array has length config.particle_count, which never changes.
#       - self.positions is a NumPy array of shape (N, 2) of dtype float64.
#       - 0 <= self.alphas <= 1.
#
#   - reset(self, index: int) -> None:
#     - Side Effects: Returns particle `index` to the spawn point, zeroes its
#       alpha and redraws gravity, x velocity and rotation speed.
#       Scale and rotation are left untouched.


class ConfigurationError(ValueError):
    """Raised when an effect configuration is malformed."""


@dataclass(frozen=True)
class FieldConfig:
    """Tunable constants of one coin effect. Defaults are the gold coin burst."""
    particle_count: int = 20
    duration: float = 1000.0
    start: float = 0.0
    start_x: float = 400.0
    start_y: float = 225.0
    upward_chance: float = 0.4
    min_gravity: float = -3.0
    max_gravity: float = 0.6
    gravity_acceleration: float = 0.07
    gravity_multiplier: float = 3.5
    min_size: float = 0.15
    max_size: float = 0.35
    min_rotation: float = -0.4
    max_rotation: float = 0.4
    rotation_damping: float = 25.0
    min_x_velocity: float = -7.0
    max_x_velocity: float = 7.0
    fade_amount: float = 10.0
    fade_divider: float = 100.0
    frame_count: int = 9
    texture_prefix: str = "CoinsGold"
    reset_margin: float = 0.0
    seed: Optional[int] = None

    def __post_init__(self):
        self._validate()

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> "FieldConfig":
        """Builds a config from a params dict, ignoring (and logging) unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            logging.warning(f"Ignoring unknown effect parameters: {', '.join(unknown)}")
        return cls(**{k: v for k, v in params.items() if k in known})

    @property
    def fade_step(self) -> float:
        return self.fade_amount / self.fade_divider

    def _fail(self, msg: str):
        msg = f"Configuration error: {msg}"
        logging.critical(msg)
        raise ConfigurationError(msg)

    def _validate(self):
        for name in ("particle_count", "frame_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                self._fail(f"{name} must be an integer, got {value!r}.")

        for f in fields(self):
            if f.name in ("texture_prefix", "seed", "particle_count", "frame_count"):
                continue
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                self._fail(f"{f.name} must be a number, got {value!r}.")
            if not math.isfinite(value):
                self._fail(f"{f.name} must be finite, got {value!r}.")

        if not isinstance(self.texture_prefix, str):
            self._fail(f"texture_prefix must be a string, got {self.texture_prefix!r}.")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            self._fail(f"seed must be an integer or null, got {self.seed!r}.")

        if self.particle_count < 0:
            self._fail(f"particle_count must be >= 0, got {self.particle_count}.")
        if self.frame_count < 1:
            self._fail(f"frame_count must be >= 1, got {self.frame_count}.")
        if self.duration <= 0:
            self._fail(f"duration must be > 0, got {self.duration}.")
        if self.start < 0:
            self._fail(f"start must be >= 0, got {self.start}.")
        if not 0.0 <= self.upward_chance <= 1.0:
            self._fail(f"upward_chance must be within [0, 1], got {self.upward_chance}.")
        if not self.min_gravity <= 0.0 <= self.max_gravity:
            self._fail(
                f"gravity range must satisfy min_gravity <= 0 <= max_gravity, "
                f"got [{self.min_gravity}, {self.max_gravity}]."
            )
        for low, high in (("min_size", "max_size"),
                          ("min_rotation", "max_rotation"),
                          ("min_x_velocity", "max_x_velocity")):
            if getattr(self, low) > getattr(self, high):
                self._fail(
                    f"{low} ({getattr(self, low)}) is greater than "
                    f"{high} ({getattr(self, high)})."
                )
        if self.rotation_damping == 0:
            self._fail("rotation_damping must not be zero.")
        if self.fade_amount < 0:
            self._fail(f"fade_amount must be >= 0, got {self.fade_amount}.")
        if self.fade_divider <= 0:
            self._fail(f"fade_divider must be > 0, got {self.fade_divider}.")
        if self.reset_margin < 0:
            self._fail(f"reset_margin must be >= 0, got {self.reset_margin}.")


def random_range(rng: np.random.Generator, low: float, high: float) -> float:
    """Returns a float uniformly distributed in [low, high)."""
    return rng.random() * (high - low) + low


class ParticleField:
    """
    A fixed-size pool of coin particles, stored as NumPy arrays.
    """
    def __init__(self, config: FieldConfig, rng: Optional[np.random.Generator] = None):
        """
        Seeds every particle at the spawn point, fully transparent.

        Args:
            config (FieldConfig): The effect configuration.
            rng (np.random.Generator, optional): Generator used for every
                random draw of this field.
        """
        self.config = config
        self.particle_count = config.particle_count
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

        n = self.particle_count
        self.positions = np.empty((n, 2), dtype=np.float64)
        self.positions[:, 0] = config.start_x
        self.positions[:, 1] = config.start_y
        self.alphas = np.zeros(n, dtype=np.float64)
        self.rotations = np.zeros(n, dtype=np.float64)
        self.scales = np.empty(n, dtype=np.float64)
        self.gravities = np.empty(n, dtype=np.float64)
        self.x_velocities = np.empty(n, dtype=np.float64)
        self.rotation_speeds = np.empty(n, dtype=np.float64)

        # Draw order per particle: scale, direction, gravity, x velocity, rotation speed.
        for i in range(n):
            self.scales[i] = random_range(self.rng, config.min_size, config.max_size)
            self._draw_motion(i)

        logging.info(
            f"ParticleField initialized with {n} particles "
            f"at spawn ({config.start_x}, {config.start_y})."
        )
        logging.debug(
            f"Particle data arrays created. "
            f"Positions shape: {self.positions.shape}, "
            f"Gravities shape: {self.gravities.shape}"
        )

    def _draw_motion(self, index: int):
        cfg = self.config
        go_up = self.rng.random() < cfg.upward_chance
        if go_up:
            self.gravities[index] = random_range(self.rng, cfg.min_gravity, 0.0)
        else:
            self.gravities[index] = random_range(self.rng, 0.0, cfg.max_gravity)
        self.x_velocities[index] = random_range(self.rng, cfg.min_x_velocity, cfg.max_x_velocity)
        self.rotation_speeds[index] = random_range(self.rng, cfg.min_rotation, cfg.max_rotation)

    def reset(self, index: int):
        """Respawns particle `index` in place with new motion parameters."""
        cfg = self.config
        self.positions[index, 0] = cfg.start_x
        self.positions[index, 1] = cfg.start_y
        self.alphas[index] = 0.0
        self._draw_motion(index)
