# region Imports and Typing
from typing import Iterator, List, Tuple
import math, time
import structlog
from distmap.config import DIAGONAL_PENALTY, FLEE_COEFFICIENT
from distmap.errors import (
    CoordinateError,
    DimensionMismatchError,
    DistanceMapError,
    TileValueError,
)
from distmap.grid import Grid
from distmap.models import FloodStats, QueueNode
from distmap.pqueue import PriorityQueue
# endregion

logger = structlog.get_logger()

# region Neighbor Generation
OFFSETS_8: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if dx or dy
)


def neighbors_8(x: int, y: int, w: int, h: int) -> Iterator[Tuple[int, int, bool]]:
    """In-bounds 8-neighbours of (x, y) as (nx, ny, is_diagonal)."""
    for dx, dy in OFFSETS_8:
        nx, ny = x + dx, y + dy
        if 1 <= nx <= w and 1 <= ny <= h:
            yield nx, ny, bool(dx and dy)
# endregion

# region Input Checks
def _check_maxcost(maxcost: float) -> float:
    try:
        m = float(maxcost)
    except (TypeError, ValueError) as e:
        raise DistanceMapError(f"maxcost must be a number, got {maxcost!r}") from e
    if math.isnan(m):
        raise DistanceMapError("maxcost must not be NaN")
    return m


def _check_shapes(cost: Grid, dist: Grid) -> None:
    if cost.shape != dist.shape:
        raise DimensionMismatchError(
            f"cost grid is {cost.w}x{cost.h} but distance grid is {dist.w}x{dist.h}"
        )
# endregion

# region Relaxation Loop
def _flood(pq: PriorityQueue, cost: Grid, dist: Grid, stats: FloodStats) -> None:
    # Lazy deletion: a cell may sit in the queue many times; only the first
    # pop that beats the recorded distance is committed.
    W, H = cost.w, cost.h
    reads_before = cost.source_reads
    while pq:
        node = pq.pop()
        stats.pops += 1
        if node.f >= dist.read(node.x, node.y):
            stats.stale += 1
            continue
        dist.write(node.x, node.y, node.f)
        stats.committed += 1

        for nx, ny, diagonal in neighbors_8(node.x, node.y, W, H):
            step = cost.read(nx, ny)
            if step < 0:
                raise TileValueError(f"negative cost {step} at ({nx},{ny})")
            alt = node.f + step
            if diagonal:
                alt += DIAGONAL_PENALTY
            if alt < dist.read(nx, ny):
                pq.push(QueueNode(alt, nx, ny))
                stats.pushes += 1
    stats.source_reads = cost.source_reads - reads_before
# endregion

# region Single Source
def single_source_distance_map(cost: Grid, x0: int, y0: int, maxcost: float) -> Grid:
    """
    Weighted distance from (x0, y0) to every cell, capped at maxcost.

    Returns a new self-contained grid of cost's shape; unreached cells hold
    exactly maxcost.
    """
    maxcost = _check_maxcost(maxcost)
    if not cost.in_bounds(x0, y0):
        raise CoordinateError(f"source ({x0!r},{y0!r}) is not a cell of 1..{cost.w} x 1..{cost.h}")

    t0 = time.perf_counter()
    stats = FloodStats(seeds=1)
    dist = Grid.filled(cost.w, cost.h, maxcost)
    pq = PriorityQueue()
    pq.push(QueueNode(0.0, x0, y0))
    stats.pushes += 1

    _flood(pq, cost, dist, stats)
    stats.elapsed_s = time.perf_counter() - t0
    logger.debug("single source flood", width=cost.w, height=cost.h, **vars(stats))
    return dist
# endregion

# region Multiple Sources
def multi_source_distance_map(cost: Grid, dist: Grid, maxcost: float) -> Grid:
    """
    Flood from every seed already written into ``dist``.

    Seeds are resolved cells holding a finite value below maxcost; each
    starts at that value. On return every cell of ``dist`` holds
    min(maxcost, min over seeds of seed + path cost). ``dist`` is only
    modified once the flood has completed.
    """
    _check_shapes(cost, dist)
    maxcost = _check_maxcost(maxcost)

    t0 = time.perf_counter()
    seeds: List[QueueNode] = []
    for x in range(1, dist.w + 1):
        for y in range(1, dist.h + 1):
            if not dist.is_resolved(x, y):
                continue
            v = dist.read(x, y)
            if math.isfinite(v) and v < maxcost:
                seeds.append(QueueNode(v, x, y))

    stats = FloodStats(seeds=len(seeds))
    scratch = Grid.filled(dist.w, dist.h, maxcost)
    pq = PriorityQueue()
    for node in seeds:
        pq.push(node)
        stats.pushes += 1

    _flood(pq, cost, scratch, stats)
    dist.update_from(scratch)
    stats.elapsed_s = time.perf_counter() - t0
    logger.debug("multi source flood", width=cost.w, height=cost.h, **vars(stats))
    return dist
# endregion

# region Flee Map
def flee_distance_map(
    cost: Grid,
    dist: Grid,
    maxcost: float,
    coefficient: float = FLEE_COEFFICIENT,
) -> Grid:
    """
    Turn a chase map into a flee map.

    Every reached cell of ``dist`` (value below maxcost) is scaled by a
    negative coefficient and the result is re-flooded, so walking downhill
    leads away from the chase goals while still routing around walls.
    Returns a new grid; ``dist`` is not modified.
    """
    _check_shapes(cost, dist)
    maxcost = _check_maxcost(maxcost)
    if coefficient >= 0:
        raise DistanceMapError(f"flee coefficient must be negative, got {coefficient}")

    seeded = dist.copy()
    for x in range(1, dist.w + 1):
        for y in range(1, dist.h + 1):
            if not dist.is_resolved(x, y):
                continue
            v = dist.read(x, y)
            if math.isfinite(v) and v < maxcost:
                seeded.write(x, y, v * coefficient)
    return multi_source_distance_map(cost, seeded, maxcost)
# endregion
