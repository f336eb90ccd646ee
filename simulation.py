# simulation.py
"""
Handles the per-tick update of a coin particle field.

This module defines the CoinEffect class, which advances a ParticleField
by one tick: it computes the shared texture frame, integrates fade,
motion, rotation and gravity, respawns particles that fell below the
viewport, and writes the result into the drawables supplied by the host.
"""
import logging
import math
from typing import Callable, Optional, Sequence

import numpy as np
from numba import jit

from particle import FieldConfig, ParticleField

# --- Data Contracts ---
#
# class CoinEffect:
#   - __init__(self, config, height_query, sprites=None, texture_cache=None, rng=None):
#     - Inputs:
#       - config: FieldConfig of this effect.
#       - height_query: Callable[[], float] returning the viewport height.
#       - sprites: Optional sequence of drawables, one per particle. Each
#         exposes x, y, scale_x, scale_y, alpha, rotation, pivot_x, pivot_y,
#         texture, width and height.
#       - texture_cache: object with lookup(name) -> texture or None.
#       - rng: Optional np.random.Generator handed to the ParticleField.
#     - Side Effects: Seeds the field. Writes pivot, scale, position and
#       alpha into every sprite.
#
#   - step(self, global_time_ms: float) -> int:
#     - Outputs: the frame index shared by all particles in this tick.
#     - Side Effects: Mutates the field state, respawns particles whose y
#       exceeds height + reset_margin, writes x, y, alpha, rotation and
#       (when the cache has it) texture into every sprite.
#     - Invariants: Particle count remains constant. 0 <= alpha <= 1.
#
#   - anim_tick(self, normalized_time, local_time, global_time) -> None:
#     - Scheduler entry point. Only global_time drives the effect.


def frame_index(global_time_ms: float, duration: float, frame_count: int) -> int:
    """Index of the texture frame shown at `global_time_ms` within a cycle of `duration` ms."""
    phase = (global_time_ms % duration) / duration
    return min(int(math.floor(phase * frame_count)), frame_count - 1)


def frame_texture_name(prefix: str, index: int) -> str:
    """Texture cache key for a frame, e.g. ("CoinsGold", 4) -> "CoinsGold004"."""
    return f"{prefix}{index:03d}"


@jit(nopython=True)
def _integrate_numba(
    positions, alphas, rotations, gravities, x_velocities, rotation_speeds,
    fade_step, gravity_multiplier, rotation_damping, gravity_acceleration,
    reset_threshold
):
    """
    Numba-jitted closed-form update of every particle.

    Returns a boolean mask of the particles whose y crossed the reset
    threshold. Respawning is left to the caller since it consumes the
    field's random generator.
    """
    particle_count = positions.shape[0]
    needs_reset = np.zeros(particle_count, dtype=np.bool_)

    for i in range(particle_count):
        alpha = alphas[i] + fade_step
        if alpha > 1.0:
            alpha = 1.0
        alphas[i] = alpha

        positions[i, 0] += x_velocities[i]
        positions[i, 1] += gravities[i] * gravity_multiplier

        rotations[i] += rotation_speeds[i] / rotation_damping

        # Gravity keeps accelerating until the particle respawns
        gravities[i] += gravity_acceleration

        if positions[i, 1] > reset_threshold:
            needs_reset[i] = True

    return needs_reset


class CoinEffect:
    """
    A looping coin burst: one ParticleField plus the drawables it drives.
    """
    def __init__(
        self,
        config: FieldConfig,
        height_query: Callable[[], float],
        sprites: Optional[Sequence] = None,
        texture_cache=None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.config = config
        self.height_query = height_query
        self.field = ParticleField(config, rng=rng)
        self.sprites = list(sprites) if sprites is not None else []
        self.texture_cache = texture_cache
        self.reset_count = 0
        self.current_frame = 0

        if self.sprites and len(self.sprites) != self.field.particle_count:
            msg = (
                f"CoinEffect received {len(self.sprites)} sprites for "
                f"{self.field.particle_count} particles."
            )
            logging.critical(msg)
            raise ValueError(msg)
        if self.sprites and self.texture_cache is None:
            raise ValueError("CoinEffect needs a texture cache to drive sprites.")

        for i, sprite in enumerate(self.sprites):
            sprite.pivot_x = sprite.width / 2
            sprite.pivot_y = sprite.height / 2
            sprite.scale_x = sprite.scale_y = float(self.field.scales[i])
            sprite.x = float(self.field.positions[i, 0])
            sprite.y = float(self.field.positions[i, 1])
            sprite.alpha = 0.0

        logging.info(
            f"CoinEffect '{config.texture_prefix}' ready: {self.field.particle_count} particles, "
            f"{config.frame_count} frames over {config.duration} ms, "
            f"{len(self.sprites)} sprites bound."
        )

    @property
    def duration(self) -> float:
        return self.config.duration

    @property
    def start(self) -> float:
        return self.config.start

    def step(self, global_time_ms: float) -> int:
        """
        Advances every particle by one tick.

        Args:
            global_time_ms (float): Global clock time in milliseconds.

        Returns:
            int: The texture frame index shared by all particles this tick.
        """
        cfg = self.config
        field = self.field

        # 1. Shared frame index for the spin animation
        frame = frame_index(global_time_ms, cfg.duration, cfg.frame_count)
        self.current_frame = frame

        # 2. Integrate fade, motion, rotation and gravity (using Numba)
        needs_reset = _integrate_numba(
            field.positions, field.alphas, field.rotations,
            field.gravities, field.x_velocities, field.rotation_speeds,
            cfg.fade_step, float(cfg.gravity_multiplier),
            float(cfg.rotation_damping), float(cfg.gravity_acceleration),
            float(self.height_query() + cfg.reset_margin)
        )

        # 3. Respawn particles that left the bottom of the viewport
        for index in np.flatnonzero(needs_reset):
            field.reset(int(index))
        self.reset_count += int(np.count_nonzero(needs_reset))

        # 4. Push the new state into the drawables
        self.apply(frame_texture_name(cfg.texture_prefix, frame))
        return frame

    def apply(self, texture_name: str):
        """Writes the simulation state into the bound sprites."""
        field = self.field
        for i, sprite in enumerate(self.sprites):
            texture = self.texture_cache.lookup(texture_name)
            if texture is not None:
                sprite.texture = texture
            sprite.x = float(field.positions[i, 0])
            sprite.y = float(field.positions[i, 1])
            sprite.alpha = float(field.alphas[i])
            sprite.rotation = float(field.rotations[i])

    def anim_tick(self, normalized_time: float, local_time: float, global_time: float):
        """Called by the EffectScheduler while this effect's window is active."""
        self.step(global_time)
