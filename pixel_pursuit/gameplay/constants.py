"""
Game constants - all magic numbers in one place.
NO UI DEPENDENCIES.
"""

# =============================================================================
# MAZE
# =============================================================================
MAZE_WIDTH = 36    # cells
MAZE_HEIGHT = 18   # cells
MIN_MAZE_SIZE = 3  # smallest side the generator accepts

PROCEDURAL_TOKEN = "RANDOM"  # preset line meaning "generate procedurally"
ROW_DELIMITER = "|"          # separates rows inside one preset line
WALL_CHAR = "#"

LOOP_ATTEMPT_DIVISOR = 10     # loop injection samples width*height/10 cells
LOOP_OPEN_CHANCE = 0.6
SOFTEN_CHANCE_LEFT = 0.10     # wall softening at the left edge
SOFTEN_CHANCE_RIGHT = 0.28    # ... rising linearly to the right edge

# =============================================================================
# TIMING (all in seconds)
# =============================================================================
FRAME_INTERVAL_MS = 120           # runner glide clock driven by the UI
SURVIVAL_GOLD_INTERVAL = 10.0
SURVIVAL_GOLD_PER_TICK = 1
CHASER_MOVE_INTERVAL = 0.6
LOOT_SPAWN_INTERVAL = 1.5

# =============================================================================
# LOOT
# =============================================================================
DIAMOND_GOLD_VALUE = 10       # bonus gold for each diamond picked up
SPAWN_ATTEMPTS = 100          # rejection-sampling attempts per spawn
OUTER_MARGIN_X = 4            # columns counted as outer ring
OUTER_MARGIN_Y = 3            # rows counted as outer ring
OUTER_RING_BIAS = 0.60        # chance an inner candidate is rejected

# =============================================================================
# CHASERS
# =============================================================================
CHASER_SPAWN_OFFSET = 3       # columns in from the exit
CHASER_SPAWN_SPACING = 2      # rows between neighbouring chasers
