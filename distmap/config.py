# config.py
import os

# Cost of a tile whose cost field is boolean True / False
IMPASSABLE_COST = 999999.0
PASSABLE_COST = 1.0

# Added to diagonal steps so equal-cost straight paths win over zig-zags.
# Must stay below the smallest real cost difference.
DIAGONAL_PENALTY = 0.001

# Coordinates are packed into 16 bits
MAX_GRID_DIM = 65535

INITIAL_QUEUE_CAPACITY = 48

# Tile attribute consulted for the movement cost
DEFAULT_COST_FIELD = "solid"
DEFAULT_MISSING_COST = 0.0

# Scale applied to a chase map to turn it into a flee map
FLEE_COEFFICIENT = -1.2

LOG_LEVEL = os.getenv("DISTMAP_LOG_LEVEL", "INFO")

API_HOST = os.getenv("DISTMAP_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("DISTMAP_API_PORT", "8081"))
