"""
Tests for maze generation and preset loading.
"""
import random
from collections import deque

import pytest

from pixel_pursuit.gameplay.maze import (
    MazeGenerator, apply_preset, grid_from_ascii, load_preset_lines
)
from pixel_pursuit.gameplay.grid import Grid
from pixel_pursuit.gameplay.constants import PROCEDURAL_TOKEN


def reachable(grid, start):
    """Flood fill over walkable cells, independent of the game's BFS."""
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if (nx, ny) in seen:
                continue
            if 0 <= nx < grid.width and 0 <= ny < grid.height and grid.cell(nx, ny).walkable:
                seen.add((nx, ny))
                queue.append((nx, ny))
    return seen


def border_openings(grid):
    return [
        (c.x, c.y) for c in grid.iter_cells()
        if grid.is_border(c.x, c.y) and c.walkable
    ]


# 7 rows; row 0 is all floor to check the border is forced back to wall
PRESET_7X7 = "|".join([
    ".......",
    "#.#...#",
    "#.#.#.#",
    "#.#.#.#",
    "#...#.#",
    "#.###",
    "#######",
])


class TestProceduralGeneration:
    """Tests for recursive-backtracker carving."""

    @pytest.mark.parametrize("seed", range(8))
    @pytest.mark.parametrize("width,height", [(5, 5), (9, 7), (36, 18), (21, 31), (6, 8)])
    def test_entrance_reaches_exit(self, seed, width, height):
        """Entrance and exit are walkable and connected."""
        grid = MazeGenerator(rng=random.Random(seed)).generate(width, height)

        assert grid.entrance_cell.walkable
        assert grid.exit_cell.walkable
        assert grid.exit in reachable(grid, grid.entrance)

    @pytest.mark.parametrize("seed", range(5))
    def test_border_is_wall_except_openings(self, seed):
        """Only the entrance and exit break the border."""
        grid = MazeGenerator(rng=random.Random(seed)).generate(36, 18)
        assert sorted(border_openings(grid)) == sorted([grid.entrance, grid.exit])

    def test_entrance_and_exit_on_middle_row(self):
        """Entrance is on the left border, exit on the right, same row."""
        grid = MazeGenerator(rng=random.Random(3)).generate(15, 11)
        assert grid.entrance == (0, 5)
        assert grid.exit == (14, 5)

    @pytest.mark.parametrize("seed", range(5))
    def test_middle_row_is_open(self, seed):
        """The corridor along the entrance row is always carved."""
        grid = MazeGenerator(rng=random.Random(seed)).generate(20, 10)
        assert all(grid.cell(x, grid.entrance_y).walkable for x in range(grid.width))

    @pytest.mark.parametrize("seed", range(5))
    def test_no_loot_after_generation(self, seed):
        """A fresh maze carries no gold or diamonds."""
        grid = MazeGenerator(rng=random.Random(seed)).generate(12, 9)
        assert not any(c.has_loot for c in grid.iter_cells())

    def test_carving_opens_interior(self):
        """Carving produces floor beyond the middle corridor."""
        grid = MazeGenerator(rng=random.Random(0)).generate(21, 15)
        off_corridor = [
            c for c in grid.iter_cells() if c.walkable and c.y != grid.entrance_y
        ]
        assert len(off_corridor) > 0

    @pytest.mark.parametrize("width,height", [(15, 11), (20, 10), (36, 18)])
    def test_exit_inner_neighbor_open(self, width, height):
        """The cell just inside the exit is always floor."""
        grid = MazeGenerator(rng=random.Random(width)).generate(width, height)
        assert grid.cell(grid.exit_x - 1, grid.exit_y).walkable

    def test_same_seed_same_maze(self):
        """Generation is deterministic for a given seed."""
        a = MazeGenerator(rng=random.Random(42)).generate(25, 15)
        b = MazeGenerator(rng=random.Random(42)).generate(25, 15)
        assert a.to_ascii() == b.to_ascii()

    def test_smallest_maze(self):
        """A 3x3 maze is just the corridor."""
        grid = MazeGenerator(rng=random.Random(0)).generate(3, 3)
        assert grid.to_ascii() == "###\n...\n###"

    @pytest.mark.parametrize("width,height", [(2, 5), (5, 2), (0, 0)])
    def test_too_small_fails(self, width, height):
        """Sizes under 3 are rejected."""
        with pytest.raises(ValueError):
            MazeGenerator().generate(width, height)

    def test_last_source_procedural(self):
        """Without presets the generator reports procedural output."""
        generator = MazeGenerator(rng=random.Random(0))
        generator.generate(9, 9)
        assert generator.last_source == "procedural"


def floor_cells(grid):
    return {(c.x, c.y) for c in grid.iter_cells() if c.walkable}


def passage_count(grid):
    """Number of adjacent floor pairs."""
    floor = floor_cells(grid)
    return sum(
        1 for x, y in floor for nx, ny in ((x + 1, y), (x, y + 1)) if (nx, ny) in floor
    )


def backtracked_grid(width, height, seed):
    generator = MazeGenerator(rng=random.Random(seed))
    grid = Grid(width, height, walkable=False)
    generator._backtrack(grid, 1, 1)
    return generator, grid


class TestCarvingPasses:
    """Tests for the individual carving passes."""

    @pytest.mark.parametrize("seed", range(5))
    def test_backtracker_makes_perfect_maze(self, seed):
        """Floor and passages form a tree spanning every lattice cell."""
        _, grid = backtracked_grid(11, 9, seed)
        floor = floor_cells(grid)

        # 5 x 4 lattice cells plus the 19 walls between them
        assert len(floor) == 2 * 20 - 1
        assert all((x, y) in floor for x in range(1, 10, 2) for y in range(1, 8, 2))
        assert reachable(grid, (1, 1)) == floor
        assert passage_count(grid) == len(floor) - 1

    @pytest.mark.parametrize("seed", range(3))
    def test_backtracker_keeps_border(self, seed):
        """Carving never touches the border."""
        _, grid = backtracked_grid(11, 9, seed)
        assert border_openings(grid) == []

    @pytest.mark.parametrize("seed", range(3))
    def test_loops_open_walls_next_to_floor(self, seed):
        """Loop injection only opens interior walls touching floor, and adds cycles."""
        generator, grid = backtracked_grid(41, 31, seed)
        before = floor_cells(grid)

        generator._inject_loops(grid)

        after = floor_cells(grid)
        opened = after - before
        assert before <= after
        assert opened
        for x, y in opened:
            assert not grid.is_border(x, y)
            assert any(True for _ in grid.walkable_neighbors(x, y))
        # A tree has exactly one passage fewer than cells
        assert passage_count(grid) > len(after) - 1

    def test_softening_favours_exit_side(self):
        """More walls open on the right third than on the left third."""
        left = right = 0
        for seed in range(30):
            generator, grid = backtracked_grid(31, 21, seed)
            before = floor_cells(grid)
            generator._soften_walls(grid)
            opened = floor_cells(grid) - before

            assert border_openings(grid) == []
            left += sum(1 for x, _ in opened if x <= 10)
            right += sum(1 for x, _ in opened if x >= 20)

        assert left > 0
        assert right > left * 1.3

    def test_softening_needs_floor_nearby(self):
        """A grid with no floor stays solid."""
        generator = MazeGenerator(rng=random.Random(0))
        grid = Grid(12, 8, walkable=False)
        generator._soften_walls(grid)
        assert floor_cells(grid) == set()


class TestPresets:
    """Tests for preset layouts and fallback."""

    def test_apply_preset(self):
        """Interior walls come from the preset; the border is forced."""
        grid = Grid(7, 7)
        assert apply_preset(grid, PRESET_7X7)

        # Border forced to wall even where the line says floor
        assert grid.cell(3, 0).is_wall
        assert grid.cell(6, 1).is_wall
        # Interior walls from the line
        assert grid.cell(2, 1).is_wall
        assert grid.cell(4, 2).is_wall
        # Interior floor from the line
        assert grid.cell(1, 1).walkable
        assert grid.cell(3, 4).walkable

    def test_preset_forces_middle_corridor(self):
        """The entrance row is open end to end whatever the preset says."""
        grid = Grid(7, 7)
        apply_preset(grid, PRESET_7X7)

        assert grid.entrance == (0, 3)
        assert grid.exit == (6, 3)
        assert all(grid.cell(x, 3).walkable for x in range(7))

    def test_preset_short_row_is_floor(self):
        """Missing characters in a short row are floor."""
        grid = Grid(7, 7)
        apply_preset(grid, PRESET_7X7)
        # Row 5 is "#.###": columns 1..4 given, column 5 missing
        assert grid.cell(2, 5).is_wall
        assert grid.cell(5, 5).walkable

    def test_preset_wrong_row_count(self):
        """A line with the wrong number of rows is refused."""
        grid = Grid(7, 5)
        assert not apply_preset(grid, PRESET_7X7)

    def test_generator_uses_preset(self):
        """With a single valid preset, the generator loads it."""
        generator = MazeGenerator(rng=random.Random(0), presets=[PRESET_7X7])
        grid = generator.generate(7, 7)

        assert generator.last_source == "preset"
        assert grid.cell(2, 1).is_wall
        assert grid.cell(1, 1).walkable

    def test_malformed_preset_falls_back(self):
        """A bad row count silently triggers procedural generation."""
        generator = MazeGenerator(rng=random.Random(0), presets=[PRESET_7X7])
        grid = generator.generate(9, 9)

        assert generator.last_source == "procedural"
        assert grid.exit in reachable(grid, grid.entrance)

    def test_procedural_token(self):
        """The procedural token means carve a new maze."""
        generator = MazeGenerator(rng=random.Random(0), presets=[PROCEDURAL_TOKEN])
        generator.generate(7, 7)
        assert generator.last_source == "procedural"

    def test_preset_file(self, tmp_path):
        """Presets are read from a file, skipping blank lines."""
        path = tmp_path / "mazes.txt"
        path.write_text(f"\n{PRESET_7X7}\n\n")

        assert load_preset_lines(path) == [PRESET_7X7]

        generator = MazeGenerator(rng=random.Random(0), preset_file=path)
        generator.generate(7, 7)
        assert generator.last_source == "preset"

    def test_missing_preset_file(self, tmp_path):
        """A missing file is not an error."""
        path = tmp_path / "nope.txt"
        assert load_preset_lines(path) == []

        generator = MazeGenerator(rng=random.Random(0), preset_file=path)
        grid = generator.generate(7, 7)
        assert generator.last_source == "procedural"
        assert grid.entrance_cell.walkable

    def test_no_preset_file(self):
        """None means no presets."""
        assert load_preset_lines(None) == []

    def test_bundled_presets_load(self):
        """The presets shipped with the game fit the default maze size."""
        from pixel_pursuit.config import DEFAULT_PRESET_FILE

        lines = load_preset_lines(DEFAULT_PRESET_FILE)
        assert PROCEDURAL_TOKEN in lines
        for line in lines:
            if line == PROCEDURAL_TOKEN:
                continue
            grid = Grid(36, 18)
            assert apply_preset(grid, line)
            assert grid.exit in reachable(grid, grid.entrance)


class TestGridFromAscii:
    """Tests for the ASCII helper."""

    def test_draws_layout_as_given(self):
        """Border cells keep whatever the drawing says."""
        grid = grid_from_ascii("""
            #.#
            ...
        """.replace(" ", ""))
        assert grid.width == 3 and grid.height == 2
        assert grid.cell(0, 0).is_wall
        assert grid.cell(1, 0).walkable
        assert grid.cell(0, 1).walkable
