"""
Pixel Pursuit - a maze-chase game.

The simulation core lives in `pixel_pursuit.gameplay` and has no UI
dependencies. The pygame front end lives in `pixel_pursuit.ui`.
"""

__version__ = "0.1.0"
