"""
Input Handler - Translates key presses to runner commands.
This is a THIN ADAPTER - no game logic here.
"""
import pygame

from pixel_pursuit.gameplay.grid import Direction
from pixel_pursuit.gameplay.session import Session


# Key mappings for glide direction
DIRECTION_KEYS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}


class InputHandler:
    """Handles keyboard input and steers the session's runner."""

    def __init__(self, session: Session):
        self.session = session

    def handle_key(self, key: int) -> bool:
        """
        Handle a single key press.
        Returns True if the game should quit.
        """
        if key == pygame.K_ESCAPE:
            return True

        if not self.session.running:
            return False

        direction = DIRECTION_KEYS.get(key)
        if direction is not None:
            self.session.runner.set_direction(*direction.delta())
        elif key == pygame.K_SPACE:
            self.session.runner.stop()

        return False
