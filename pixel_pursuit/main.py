#!/usr/bin/env python3
"""
Pixel Pursuit - Main Entry Point

Run from the entrance on the left to the exit on the right. Gold and
diamonds appear around the maze; chasers wander until you come close, then
hunt you down along the shortest path.

Usage:
    pixel-pursuit [--difficulty easy|hard] [--mazes FILE] [--seed N]

Controls:
    Arrow keys / WASD: Set glide direction
    Space: Stop
    Escape: Quit
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pygame

from pixel_pursuit.config import Settings, get_settings, DEFAULT_PRESET_FILE
from pixel_pursuit.gameplay.difficulty import Difficulty
from pixel_pursuit.gameplay.level import create_session
from pixel_pursuit.ui.input_handler import InputHandler
from pixel_pursuit.ui.renderer import Renderer

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pixel Pursuit maze chase")
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        help="Override the configured difficulty",
    )
    parser.add_argument(
        "--mazes",
        help="Preset maze file (default: the bundled presets)",
    )
    parser.add_argument(
        "--procedural",
        action="store_true",
        help="Ignore preset files and always carve a new maze",
    )
    parser.add_argument("--seed", type=int, help="Seed for maze and AI randomness")
    return parser.parse_args(argv)


def resolve_preset_file(args: argparse.Namespace, settings: Settings) -> Optional[Path]:
    """--procedural wins, then --mazes, then the setting, then the bundled presets."""
    if args.procedural:
        return None
    if args.mazes:
        return Path(args.mazes)
    return settings.preset_maze_file or DEFAULT_PRESET_FILE


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    settings = get_settings()
    args = parse_args(argv)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    difficulty = Difficulty(args.difficulty) if args.difficulty else settings.difficulty
    seed = args.seed if args.seed is not None else settings.seed
    preset_file = resolve_preset_file(args, settings)

    session = create_session(
        difficulty=difficulty,
        width=settings.maze_width,
        height=settings.maze_height,
        seed=seed,
        preset_file=preset_file,
    )

    renderer = Renderer(session, settings.cell_size)
    input_handler = InputHandler(session)

    pygame.init()
    screen = pygame.display.set_mode(renderer.screen_size)
    pygame.display.set_caption("Pixel Pursuit")
    renderer.init_font()
    clock = pygame.time.Clock()

    frame_ms = settings.frame_interval_ms
    dt = frame_ms / 1000.0
    pending_ms = 0
    should_quit = False

    logger.info(f"Starting {difficulty.display_name} run")

    while not should_quit:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                should_quit = True
            elif event.type == pygame.KEYDOWN:
                should_quit = input_handler.handle_key(event.key) or should_quit

        pending_ms += clock.tick(60)
        while pending_ms >= frame_ms and session.running:
            pending_ms -= frame_ms
            session.runner.step()
            session.update(dt)

            if session.runner.alive and session.is_runner_at_exit():
                session.end_session()

        renderer.render(screen)
        pygame.display.flip()

    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
