"""
Renderer - Reads session state and draws it with pygame.
This is a THIN ADAPTER - no game logic here.
"""
import pygame

from pixel_pursuit.gameplay.session import Session, EndReason


HUD_HEIGHT = 32

# Colors
COLOR_BACKGROUND = (15, 15, 20)
COLOR_WALL = (60, 60, 80)
COLOR_FLOOR = (25, 25, 35)
COLOR_EXIT = (60, 160, 90)
COLOR_GOLD = (255, 200, 60)
COLOR_DIAMOND = (120, 220, 255)
COLOR_RUNNER = (100, 255, 100)
COLOR_RUNNER_DEAD = (120, 60, 60)
COLOR_CHASER = (255, 80, 80)
COLOR_HUD = (200, 200, 200)


class Renderer:
    """Draws the maze, loot, movers and a one-line HUD."""

    def __init__(self, session: Session, cell_size: int):
        self.session = session
        self.cell_size = cell_size
        self.font = None

    @property
    def screen_size(self):
        grid = self.session.grid
        return (grid.width * self.cell_size, grid.height * self.cell_size + HUD_HEIGHT)

    def init_font(self) -> None:
        pygame.font.init()
        self.font = pygame.font.Font(None, HUD_HEIGHT - 8)

    def render(self, surface: pygame.Surface) -> None:
        surface.fill(COLOR_BACKGROUND)
        self._draw_maze(surface)
        self._draw_movers(surface)
        self._draw_hud(surface)

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        size = self.cell_size
        return pygame.Rect(x * size, HUD_HEIGHT + y * size, size, size)

    def _draw_maze(self, surface: pygame.Surface) -> None:
        grid = self.session.grid
        radius = max(2, self.cell_size // 6)

        for cell in grid.iter_cells():
            rect = self._cell_rect(cell.x, cell.y)
            if (cell.x, cell.y) == grid.exit:
                color = COLOR_EXIT
            else:
                color = COLOR_FLOOR if cell.walkable else COLOR_WALL
            pygame.draw.rect(surface, color, rect)

            if cell.has_diamond:
                cx, cy = rect.center
                r = radius * 2
                points = [(cx, cy - r), (cx + r, cy), (cx, cy + r), (cx - r, cy)]
                pygame.draw.polygon(surface, COLOR_DIAMOND, points)
            elif cell.has_gold:
                pygame.draw.circle(surface, COLOR_GOLD, rect.center, radius)

    def _draw_movers(self, surface: pygame.Surface) -> None:
        inset = max(1, self.cell_size // 8)

        for chaser in self.session.chasers:
            if chaser.active:
                rect = self._cell_rect(chaser.x, chaser.y).inflate(-2 * inset, -2 * inset)
                pygame.draw.rect(surface, COLOR_CHASER, rect)

        runner = self.session.runner
        color = COLOR_RUNNER if runner.alive else COLOR_RUNNER_DEAD
        rect = self._cell_rect(runner.x, runner.y).inflate(-2 * inset, -2 * inset)
        pygame.draw.ellipse(surface, color, rect)

    def _draw_hud(self, surface: pygame.Surface) -> None:
        if self.font is None:
            return

        s = self.session
        text = (
            f"Time {s.elapsed_time:5.1f}s   Gold {s.run_gold} "
            f"(time {s.time_gold} + pickup {s.pickup_gold})   Diamonds {s.pickup_diamonds}"
        )
        if not s.running:
            text += "   CAUGHT!" if s.end_reason == EndReason.CAPTURED else "   ESCAPED!"

        label = self.font.render(text, True, COLOR_HUD)
        surface.blit(label, (8, (HUD_HEIGHT - label.get_height()) // 2))
