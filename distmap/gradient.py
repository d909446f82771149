# region Imports
from typing import Callable, List, Optional, Tuple
import numpy as np
from distmap.dijkstra_core import neighbors_8
from distmap.grid import Grid
# endregion

# region Downhill Moves
def approach_moves(
    dist: Grid,
    x: int,
    y: int,
    can_move: Optional[Callable[[int, int], bool]] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[Tuple[float, int, int]]:
    """
    Candidate steps from (x, y) that do not climb the distance map.

    Returns (distance, nx, ny) sorted ascending. Equal-distance steps are
    kept so an actor can sidestep another one blocking the way; pass ``rng``
    to shuffle them so groups of actors do not form lines.
    """
    current = dist.read(x, y)
    choices: List[Tuple[float, int, int]] = []
    for nx, ny, _ in neighbors_8(x, y, dist.w, dist.h):
        if not dist.is_resolved(nx, ny):
            continue
        if can_move is not None and not can_move(nx, ny):
            continue
        d = dist.read(nx, ny)
        if d <= current:
            choices.append((d, nx, ny))

    if rng is not None:
        order = rng.permutation(len(choices))
        choices = [choices[i] for i in order]
    # stable: shuffled order survives among ties
    choices.sort(key=lambda c: c[0])
    return choices


def best_move(
    dist: Grid,
    x: int,
    y: int,
    can_move: Optional[Callable[[int, int], bool]] = None,
    rng: Optional[np.random.Generator] = None,
) -> Optional[Tuple[int, int]]:
    moves = approach_moves(dist, x, y, can_move=can_move, rng=rng)
    if not moves:
        return None
    _, nx, ny = moves[0]
    return nx, ny
# endregion

# region Path Following
def descend(
    dist: Grid,
    x: int,
    y: int,
    max_steps: Optional[int] = None,
) -> List[Tuple[int, int]]:
    """Follow strictly decreasing distances from (x, y) until a local minimum."""
    path = [(x, y)]
    limit = max_steps if max_steps is not None else dist.w * dist.h
    for _ in range(limit):
        here = dist.read(x, y)
        moves = [m for m in approach_moves(dist, x, y) if m[0] < here]
        if not moves:
            break
        _, x, y = moves[0]
        path.append((x, y))
    return path
# endregion
