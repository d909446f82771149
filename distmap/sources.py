# region Imports
from __future__ import annotations
from typing import Any, Mapping, Optional, Protocol, Sequence
import numpy as np
# endregion


# region Protocol
class TileSource(Protocol):
    """
    Random-access, 1-indexed view over a 2D table of tile records.

    tile_value() returns a bool, a number, or None when the tile (or its
    field) is absent. Reads must be side-effect free.
    """

    def tile_value(self, x: int, y: int, field: Optional[str]) -> Any:
        ...
# endregion


# region Nested Table Source
class TableTileSource:
    """
    Column-major nested sequences: ``columns[x-1][y-1]`` is the tile record.

    With a field selector the record must be a mapping (or expose the field
    as an attribute); with ``field=None`` the record itself is the value.
    """

    def __init__(self, columns: Sequence[Sequence[Any]]):
        self.columns = columns

    @property
    def width(self) -> int:
        return len(self.columns)

    @property
    def height(self) -> int:
        return len(self.columns[0]) if len(self.columns) else 0

    def tile_value(self, x: int, y: int, field: Optional[str]) -> Any:
        if x < 1 or y < 1 or x > len(self.columns):
            return None
        column = self.columns[x - 1]
        if column is None or y > len(column):
            return None
        record = column[y - 1]
        if record is None or field is None:
            return record
        if isinstance(record, Mapping):
            return record.get(field)
        return getattr(record, field, None)
# endregion


# region Numpy Array Source
class ArrayTileSource:
    """
    Numpy array of shape (w, h) indexed ``array[x-1, y-1]``.

    Plain dtypes ignore the field selector; structured dtypes use it as the
    field name. NaN entries count as absent.
    """

    def __init__(self, array: np.ndarray):
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"tile array must be 2D, got shape {array.shape}")
        self.array = array

    @property
    def width(self) -> int:
        return int(self.array.shape[0])

    @property
    def height(self) -> int:
        return int(self.array.shape[1])

    def tile_value(self, x: int, y: int, field: Optional[str]) -> Any:
        W, H = self.array.shape
        if not (1 <= x <= W and 1 <= y <= H):
            return None
        v = self.array[x - 1, y - 1]
        if self.array.dtype.names:
            if field is None or field not in self.array.dtype.names:
                return None
            v = v[field]
        if isinstance(v, (np.floating, float)) and np.isnan(v):
            return None
        return v
# endregion
