# region Imports
from __future__ import annotations
import numbers
from typing import Any, List, Optional, Sequence, Tuple
import numpy as np
from distmap.config import (
    DEFAULT_MISSING_COST,
    IMPASSABLE_COST,
    MAX_GRID_DIM,
    PASSABLE_COST,
)
from distmap.errors import (
    CoordinateError,
    DimensionError,
    DimensionMismatchError,
    DimensionOverflowError,
    TileValueError,
    UnboundGridReadError,
)
from distmap.sources import TileSource
# endregion

# region Validation Helpers
def check_dimensions(w: int, h: int) -> Tuple[int, int]:
    if isinstance(w, bool) or isinstance(h, bool):
        raise DimensionError(f"grid dimensions must be integers, got {w!r}x{h!r}")
    try:
        W, H = int(w), int(h)
    except (TypeError, ValueError) as e:
        raise DimensionError(f"grid dimensions must be integers, got {w!r}x{h!r}") from e
    if W != w or H != h:
        raise DimensionError(f"grid dimensions must be integers, got {w!r}x{h!r}")
    if W > MAX_GRID_DIM or H > MAX_GRID_DIM:
        raise DimensionOverflowError(
            f"maps larger than {MAX_GRID_DIM}*{MAX_GRID_DIM} are unsupported (got {W}x{H})"
        )
    if W < 1 or H < 1:
        raise DimensionError(f"grid must be at least 1x1, got {W}x{H}")
    return W, H


def resolve_tile_value(value: Any, default: float) -> float:
    """Map a raw tile field onto a movement cost."""
    if value is None:
        return float(default)
    # bool before Real: bool is an int subclass
    if isinstance(value, (bool, np.bool_)):
        return IMPASSABLE_COST if value else PASSABLE_COST
    if isinstance(value, numbers.Real):
        return float(value)
    raise TileValueError(f"tile cost must be a bool, a number or absent, got {value!r}")


def is_index(v: Any) -> bool:
    """True for integer coordinates; bools and floats (even 2.0) are not."""
    return isinstance(v, numbers.Integral) and not isinstance(v, (bool, np.bool_))
# endregion

# region Grid
class Grid:
    """
    w x h cell store addressed 1..w, 1..h (row/column 0 unused).

    Either self-contained (every cell written up front) or read-through:
    bound to a tile source, a field selector and a default for absent tiles.
    Read-through cells are fetched on first read and never fetched again.
    Cell state lives in a presence bitmap beside the value buffer.
    """

    def __init__(
        self,
        w: int,
        h: int,
        *,
        source: Optional[TileSource] = None,
        field: Optional[str] = None,
        default: float = DEFAULT_MISSING_COST,
    ):
        self.w, self.h = check_dimensions(w, h)
        self.source = source
        self.field = field
        self.default = float(default)
        self._values = np.zeros((self.w + 1, self.h + 1), dtype=np.float64)
        self._resolved = np.zeros((self.w + 1, self.h + 1), dtype=bool)
        self.source_reads = 0

    # region Constructors
    @classmethod
    def filled(cls, w: int, h: int, value: float) -> "Grid":
        g = cls(w, h)
        g._values[1:, 1:] = float(value)
        g._resolved[1:, 1:] = True
        return g

    @classmethod
    def bound_to(
        cls,
        source: TileSource,
        field: Optional[str],
        w: int,
        h: int,
        default: float = DEFAULT_MISSING_COST,
    ) -> "Grid":
        if source is None:
            raise ValueError("bound_to() needs a tile source")
        return cls(w, h, source=source, field=field, default=default)

    @classmethod
    def from_columns(cls, columns: Sequence[Sequence[Optional[float]]]) -> "Grid":
        """Self-contained grid from ``columns[x-1][y-1]``; None cells stay unresolved."""
        if not len(columns) or columns[0] is None:
            raise DimensionError("grid must be at least 1x1")
        w, h = len(columns), len(columns[0])
        g = cls(w, h)
        for x, column in enumerate(columns, start=1):
            if column is None or len(column) != h:
                raise DimensionMismatchError(f"column {x} does not have {h} cells")
            for y, v in enumerate(column, start=1):
                if v is None:
                    continue
                if isinstance(v, (bool, np.bool_)) or not isinstance(v, numbers.Real):
                    raise TileValueError(f"cell ({x},{y}) must be a number or None, got {v!r}")
                g._values[x, y] = float(v)
                g._resolved[x, y] = True
        return g
    # endregion

    @property
    def shape(self) -> Tuple[int, int]:
        return self.w, self.h

    @property
    def bound(self) -> bool:
        return self.source is not None

    def in_bounds(self, x: int, y: int) -> bool:
        if not (is_index(x) and is_index(y)):
            return False
        return 1 <= x <= self.w and 1 <= y <= self.h

    def _check(self, x: int, y: int) -> None:
        if not (is_index(x) and is_index(y)):
            raise CoordinateError(f"coordinates must be integers, got ({x!r},{y!r})")
        if not (1 <= x <= self.w and 1 <= y <= self.h):
            raise CoordinateError(f"({x},{y}) outside 1..{self.w} x 1..{self.h}")

    def is_resolved(self, x: int, y: int) -> bool:
        self._check(x, y)
        return bool(self._resolved[x, y])

    # region Read / Write
    def read(self, x: int, y: int) -> float:
        self._check(x, y)
        if self._resolved[x, y]:
            return float(self._values[x, y])
        if self.source is None:
            raise UnboundGridReadError(
                f"read of unset cell ({x},{y}) on a grid without a tile source"
            )

        raw = self.source.tile_value(x, y, self.field)
        self.source_reads += 1
        value = resolve_tile_value(raw, self.default)
        self._values[x, y] = value
        self._resolved[x, y] = True
        return value

    def write(self, x: int, y: int, value: float) -> None:
        self._check(x, y)
        self._values[x, y] = float(value)
        self._resolved[x, y] = True
    # endregion

    # region Copy / Export
    def copy(self) -> "Grid":
        g = Grid(self.w, self.h, source=self.source, field=self.field, default=self.default)
        g._values[...] = self._values
        g._resolved[...] = self._resolved
        return g

    def update_from(self, other: "Grid") -> None:
        if other.shape != self.shape:
            raise DimensionMismatchError(f"cannot copy {other.shape} grid into {self.shape}")
        self._values[...] = other._values
        self._resolved[...] = other._resolved

    def export(self) -> List[List[Optional[float]]]:
        """Columns ``out[x-1][y-1]``; unresolved cells are None."""
        values = self._values[1:, 1:].tolist()
        resolved = self._resolved[1:, 1:].tolist()
        return [
            [v if r else None for v, r in zip(vcol, rcol)]
            for vcol, rcol in zip(values, resolved)
        ]
    # endregion

    def __repr__(self) -> str:
        kind = "bound" if self.bound else "filled"
        return f"Grid({self.w}x{self.h}, {kind}, resolved={int(self._resolved.sum())})"
# endregion
