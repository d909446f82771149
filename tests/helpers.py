"""Fakes and an oracle shared by the distance map tests."""

import heapq
from collections import Counter

from distmap.config import DIAGONAL_PENALTY


class CountingSource:
    """Tile source over ``costs[x-1][y-1]`` that records every lookup."""

    def __init__(self, costs):
        self.costs = costs
        self.calls = Counter()

    def tile_value(self, x, y, field):
        self.calls[(x, y)] += 1
        return self.costs[x - 1][y - 1]


def uniform_costs(w, h, value=1):
    return [[value] * h for _ in range(w)]


def reference_distances(costs, seeds, maxcost):
    """Plain heapq Dijkstra over ``costs[x-1][y-1]`` used as an oracle."""
    w, h = len(costs), len(costs[0])
    best = {}
    openh = [(f, x, y) for (x, y, f) in seeds]
    heapq.heapify(openh)
    while openh:
        f, x, y = heapq.heappop(openh)
        if (x, y) in best:
            continue
        best[(x, y)] = f
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if not (dx or dy):
                    continue
                nx, ny = x + dx, y + dy
                if 1 <= nx <= w and 1 <= ny <= h and (nx, ny) not in best:
                    alt = f + costs[nx - 1][ny - 1] + (DIAGONAL_PENALTY if dx and dy else 0.0)
                    heapq.heappush(openh, (alt, nx, ny))
    return [
        [min(maxcost, best.get((x, y), maxcost)) for y in range(1, h + 1)]
        for x in range(1, w + 1)
    ]


