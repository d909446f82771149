# binding.py: host-facing entry points taking a raw tile table
# region Imports
from typing import Any, Iterable, List, Optional, Sequence, Tuple
import time
import structlog
from distmap.config import DEFAULT_COST_FIELD, DEFAULT_MISSING_COST, FLEE_COEFFICIENT
from distmap.dijkstra_core import (
    flee_distance_map,
    multi_source_distance_map,
    single_source_distance_map,
)
from distmap.errors import DimensionError, TileValueError
from distmap.grid import Grid, check_dimensions
from distmap.sources import TableTileSource
# endregion

logger = structlog.get_logger()

Columns = List[List[Optional[float]]]

# region Table Helpers
def table_shape(tiles: Sequence[Sequence[Any]]) -> Tuple[int, int]:
    """(w, h) of a column-major tile table, taken from its first column."""
    if isinstance(tiles, (str, bytes)) or not isinstance(tiles, Sequence):
        raise TileValueError(f"tiles must be a table of columns, got {type(tiles).__name__}")
    if not tiles:
        raise DimensionError("tile table is empty")
    first = tiles[0]
    if isinstance(first, (str, bytes)) or not isinstance(first, Sequence):
        raise TileValueError(f"tiles[1] must be a column, got {type(first).__name__}")
    return check_dimensions(len(tiles), len(first))


def cost_grid_for(
    tiles: Sequence[Sequence[Any]],
    field: Optional[str] = DEFAULT_COST_FIELD,
    default: float = DEFAULT_MISSING_COST,
) -> Grid:
    if field is not None and not isinstance(field, str):
        raise TileValueError(f"field must be a string or None, got {field!r}")
    w, h = table_shape(tiles)
    return Grid.bound_to(TableTileSource(tiles), field, w, h, default)
# endregion

# region Entry Points
def dijkstra_map(
    tiles: Sequence[Sequence[Any]],
    x: int,
    y: int,
    maxcost: float,
    field: Optional[str] = DEFAULT_COST_FIELD,
    default: float = DEFAULT_MISSING_COST,
) -> Columns:
    """Distance from (x, y) to every tile, as columns; unreached tiles hold maxcost."""
    t0 = time.perf_counter()
    cost = cost_grid_for(tiles, field, default)
    dist = single_source_distance_map(cost, x, y, maxcost)
    out = dist.export()
    logger.info("dijkstra map done", elapsed_s=time.perf_counter() - t0,
                width=cost.w, height=cost.h, source_reads=cost.source_reads)
    return out


def multi_dijkstra_map(
    tiles: Sequence[Sequence[Any]],
    goals: Iterable[Tuple[int, int, float]],
    maxcost: float,
    field: Optional[str] = DEFAULT_COST_FIELD,
    default: float = DEFAULT_MISSING_COST,
) -> Columns:
    """Distance to the cheapest of several (x, y, start_value) goals."""
    t0 = time.perf_counter()
    cost = cost_grid_for(tiles, field, default)
    dist = Grid.filled(cost.w, cost.h, maxcost)
    for gx, gy, value in goals:
        dist.write(gx, gy, value)
    multi_source_distance_map(cost, dist, maxcost)
    out = dist.export()
    logger.info("multi dijkstra map done", elapsed_s=time.perf_counter() - t0,
                width=cost.w, height=cost.h, source_reads=cost.source_reads)
    return out


def flee_map(
    tiles: Sequence[Sequence[Any]],
    x: int,
    y: int,
    maxcost: float,
    coefficient: float = FLEE_COEFFICIENT,
    field: Optional[str] = DEFAULT_COST_FIELD,
    default: float = DEFAULT_MISSING_COST,
) -> Columns:
    """Flee field away from (x, y); one cost cache serves both floods."""
    t0 = time.perf_counter()
    cost = cost_grid_for(tiles, field, default)
    chase = single_source_distance_map(cost, x, y, maxcost)
    out = flee_distance_map(cost, chase, maxcost, coefficient).export()
    logger.info("flee map done", elapsed_s=time.perf_counter() - t0,
                width=cost.w, height=cost.h, source_reads=cost.source_reads)
    return out
# endregion
