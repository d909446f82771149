# models.py
from dataclasses import dataclass
from typing import NamedTuple


class QueueNode(NamedTuple):
    f: float   # accumulated cost, the only sort key
    x: int     # 1-indexed
    y: int


@dataclass
class FloodStats:
    seeds: int = 0
    pops: int = 0
    pushes: int = 0
    stale: int = 0         # popped entries that were not better than recorded
    committed: int = 0
    source_reads: int = 0
    elapsed_s: float = 0.0
