# scheduler.py
"""
Drives registered effects along a looping timeline.

This module defines the EffectScheduler class. It owns no clock: the
caller passes the current time in milliseconds to start() and tick(),
and the scheduler dispatches a (normalized, local, global) time triple
to every effect whose [start, start + duration] window contains the
current position on the timeline.
"""
import logging
from typing import List

# --- Data Contracts ---
#
# class EffectScheduler:
#   - add_effect(self, effect) -> None:
#     - Inputs: any object exposing `start`, `duration` and
#       anim_tick(normalized_time, local_time, global_time).
#     - Side Effects: Extends total_duration to cover the effect's window.
#
#   - tick(self, now_ms: float) -> int:
#     - Outputs: number of effects dispatched this tick.
#     - Invariants: Does nothing before start() or after stop(), or when
#       no effect has been registered.


class EffectScheduler:
    """
    Composes effects on a looping timeline of length total_duration.
    """
    def __init__(self):
        self.effects: List = []
        self.total_duration = 0.0
        self.is_running = False
        self.t0 = 0.0

    def add_effect(self, effect):
        self.total_duration = max(self.total_duration, effect.start + effect.duration)
        self.effects.append(effect)
        logging.info(
            f"Effect {type(effect).__name__} registered at {effect.start} ms "
            f"for {effect.duration} ms. Timeline length: {self.total_duration} ms."
        )

    def start(self, now_ms: float):
        self.t0 = now_ms
        self.is_running = True
        logging.info("EffectScheduler started.")

    def stop(self):
        self.is_running = False
        logging.info("EffectScheduler stopped.")

    def tick(self, now_ms: float) -> int:
        """
        Dispatches the current tick to every effect whose window is active.

        Args:
            now_ms (float): Current clock time in milliseconds.

        Returns:
            int: The number of effects that received anim_tick.
        """
        if not self.is_running or self.total_duration <= 0:
            return 0

        local_time = (now_ms - self.t0) % self.total_duration
        dispatched = 0
        for effect in self.effects:
            if local_time > effect.start + effect.duration or local_time < effect.start:
                continue
            effect_local = local_time - effect.start
            effect_normalized = effect_local / effect.duration
            effect.anim_tick(effect_normalized, effect_local, now_ms)
            dispatched += 1
        return dispatched
