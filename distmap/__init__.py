"""Dijkstra distance maps over lazily-read 8-connected tile grids."""

from .errors import (
    CoordinateError,
    DimensionError,
    DimensionMismatchError,
    DimensionOverflowError,
    DistanceMapError,
    EmptyQueueError,
    TileValueError,
    UnboundGridReadError,
)
from .models import FloodStats, QueueNode
from .pqueue import PriorityQueue
from .sources import ArrayTileSource, TableTileSource, TileSource
from .grid import Grid
from .dijkstra_core import (
    flee_distance_map,
    multi_source_distance_map,
    neighbors_8,
    single_source_distance_map,
)
from .gradient import approach_moves, best_move, descend
from .binding import dijkstra_map, flee_map, multi_dijkstra_map

__all__ = [
    "CoordinateError",
    "DimensionError",
    "DimensionMismatchError",
    "DimensionOverflowError",
    "DistanceMapError",
    "EmptyQueueError",
    "TileValueError",
    "UnboundGridReadError",
    "FloodStats",
    "QueueNode",
    "PriorityQueue",
    "ArrayTileSource",
    "TableTileSource",
    "TileSource",
    "Grid",
    "flee_distance_map",
    "multi_source_distance_map",
    "neighbors_8",
    "single_source_distance_map",
    "approach_moves",
    "best_move",
    "descend",
    "dijkstra_map",
    "flee_map",
    "multi_dijkstra_map",
]
