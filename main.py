# main.py
"""
Main entry point for the coin burst animation.

This script orchestrates the application lifecycle:
1. Loads configuration from `config.json` (or the path given as argument).
2. Initializes the logging system.
3. Sets up the window, the coin textures and one CoinEffect per config entry.
4. Runs the scheduler-driven tick/render loop.
5. Handles clean shutdown.
"""
import logging
import sys
import cProfile
import pstats
import io

import numpy as np
import pygame

from constants import ASSET_DIR, BACKGROUND_COLOR, DEFAULT_CONFIG_PATH, FPS, WINDOW_HEIGHT, WINDOW_WIDTH
from utils import setup_logging, load_config, effect_configs


def main():
    """
    The main function to run the animation.
    """
    config_path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CONFIG_PATH

    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Coin Burst Starting ---")

    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    from simulation import CoinEffect, frame_texture_name
    from scheduler import EffectScheduler
    from visualization import TextureCache, Visualizer

    # Configuration errors are fatal before any window is opened.
    field_configs = effect_configs(config)

    # --- Component Initialization ---
    visualizer = Visualizer(
        width=vis_params.get('width', WINDOW_WIDTH),
        height=vis_params.get('height', WINDOW_HEIGHT),
        fps=vis_params.get('fps', FPS),
        background_color=vis_params.get('background_color', BACKGROUND_COLOR),
    )
    textures = TextureCache(vis_params.get('asset_dir', ASSET_DIR))
    scheduler = EffectScheduler()

    effects = []
    sprites = []
    for field_config in field_configs:
        textures.load_frames(field_config.texture_prefix, field_config.frame_count)
        first_frame = textures.lookup(frame_texture_name(field_config.texture_prefix, 0))
        effect_sprites = [visualizer.create_sprite(first_frame) for _ in range(field_config.particle_count)]
        effect = CoinEffect(
            field_config,
            visualizer.viewport_height,
            sprites=effect_sprites,
            texture_cache=textures,
        )
        scheduler.add_effect(effect)
        effects.append(effect)
        sprites.extend(effect_sprites)

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    log_throttle = run_params.get('log_throttle_steps', 300)
    max_steps = run_params.get('max_steps', 0) # 0 runs until the window is closed

    running = True
    step_num = 0

    if profiler:
        profiler.enable()
    scheduler.start(pygame.time.get_ticks())
    while running:
        scheduler.tick(pygame.time.get_ticks())
        step_num += 1

        if not visualizer.draw(sprites):
            running = False

        if step_num % log_throttle == 0:
            logging.info(f"Animation step {step_num}")
            for effect in effects:
                mean_alpha = np.mean(effect.field.alphas) if effect.field.particle_count else 0.0
                logging.debug(
                    f"Step {step_num} | {effect.config.texture_prefix}: "
                    f"frame {effect.current_frame}, {effect.reset_count} respawns, "
                    f"mean alpha {mean_alpha:.3f}"
                )

        if max_steps and step_num >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping animation.")
            running = False
    scheduler.stop()
    if profiler:
        profiler.disable()

    visualizer.close()
    logging.info("Animation loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Coin Burst Shutting Down ---")


if __name__ == "__main__":
    main()
