"""Tests for the cost/distance grid and its read-through cache."""

import numpy as np
import pytest

from distmap.config import IMPASSABLE_COST, MAX_GRID_DIM, PASSABLE_COST
from distmap.errors import (
    CoordinateError,
    DimensionError,
    DimensionMismatchError,
    DimensionOverflowError,
    TileValueError,
    UnboundGridReadError,
)
from distmap.grid import Grid, resolve_tile_value
from distmap.sources import TableTileSource

from helpers import CountingSource


class TestFilledGrid:

    def test_every_cell_holds_value(self):
        g = Grid.filled(3, 2, 7.5)
        assert g.shape == (3, 2)
        assert not g.bound
        for x in range(1, 4):
            for y in range(1, 3):
                assert g.read(x, y) == 7.5

    def test_write_overwrites(self):
        g = Grid.filled(2, 2, 0)
        g.write(2, 1, 4.25)
        assert g.read(2, 1) == 4.25
        assert g.read(1, 1) == 0.0

    def test_unset_cell_without_source_raises(self):
        g = Grid(2, 2)
        with pytest.raises(UnboundGridReadError):
            g.read(1, 1)
        g.write(1, 1, 3)
        assert g.read(1, 1) == 3.0

    @pytest.mark.parametrize("x,y", [(0, 1), (1, 0), (4, 1), (1, 3)])
    def test_out_of_range_coordinates(self, x, y):
        g = Grid.filled(3, 2, 0)
        with pytest.raises(CoordinateError):
            g.read(x, y)
        with pytest.raises(CoordinateError):
            g.write(x, y, 1)

    @pytest.mark.parametrize("x,y", [(2.0, 1), (1, 1.5), (True, 1), (1, np.bool_(True)), ("1", 1)])
    def test_non_integer_coordinates(self, x, y):
        g = Grid.filled(3, 2, 0)
        assert not g.in_bounds(x, y)
        with pytest.raises(CoordinateError):
            g.read(x, y)
        with pytest.raises(CoordinateError):
            g.write(x, y, 1)

    def test_numpy_integer_coordinates(self):
        g = Grid.filled(3, 2, 0)
        g.write(np.int64(3), np.int32(2), 5)
        assert g.in_bounds(np.int64(3), np.int64(2))
        assert g.read(3, 2) == 5.0


class TestDimensions:

    def test_bound_is_inclusive(self):
        g = Grid.filled(MAX_GRID_DIM, 1, 0)
        assert g.w == MAX_GRID_DIM

    def test_overflow(self):
        with pytest.raises(DimensionOverflowError):
            Grid.filled(MAX_GRID_DIM + 1, 1, 0)
        with pytest.raises(DimensionOverflowError):
            Grid.bound_to(TableTileSource([]), "solid", 1, MAX_GRID_DIM + 1)

    def test_overflow_is_a_value_error(self):
        with pytest.raises(ValueError):
            Grid(1, MAX_GRID_DIM + 1)

    @pytest.mark.parametrize("w,h", [(0, 3), (3, 0), (-1, 2), (2.5, 2), ("4", 4)])
    def test_invalid(self, w, h):
        with pytest.raises(DimensionError):
            Grid(w, h)


class TestTileResolution:

    def test_booleans(self):
        assert resolve_tile_value(True, 0) == IMPASSABLE_COST
        assert resolve_tile_value(False, 0) == PASSABLE_COST
        assert resolve_tile_value(np.bool_(True), 0) == IMPASSABLE_COST

    def test_absent_uses_default(self):
        assert resolve_tile_value(None, 3.5) == 3.5

    def test_numbers_pass_through(self):
        assert resolve_tile_value(4, 0) == 4.0
        assert resolve_tile_value(0.25, 0) == 0.25
        assert resolve_tile_value(np.int16(9), 0) == 9.0

    def test_other_values_rejected(self):
        with pytest.raises(TileValueError):
            resolve_tile_value("wall", 0)
        with pytest.raises(TypeError):
            resolve_tile_value({"solid": True}, 0)


class TestReadThrough:

    def test_reads_resolve_through_field(self):
        tiles = [
            [{"solid": False}, {"solid": True}],
            [{"solid": 5}, {}],
        ]
        g = Grid.bound_to(TableTileSource(tiles), "solid", 2, 2, default=2.0)
        assert g.read(1, 1) == PASSABLE_COST
        assert g.read(1, 2) == IMPASSABLE_COST
        assert g.read(2, 1) == 5.0
        assert g.read(2, 2) == 2.0

    def test_each_cell_queried_once(self):
        src = CountingSource([[1, 2], [3, 4]])
        g = Grid.bound_to(src, None, 2, 2)
        for _ in range(3):
            assert g.read(2, 1) == 3.0
        assert src.calls[(2, 1)] == 1
        assert g.source_reads == 1

    def test_write_shadows_source(self):
        src = CountingSource([[1, 2], [3, 4]])
        g = Grid.bound_to(src, None, 2, 2)
        g.write(1, 1, 42)
        assert g.read(1, 1) == 42.0
        assert src.calls[(1, 1)] == 0

    def test_bad_value_is_not_cached(self):
        src = CountingSource([["lava"]])
        g = Grid.bound_to(src, None, 1, 1)
        with pytest.raises(TileValueError):
            g.read(1, 1)
        assert not g.is_resolved(1, 1)

    def test_bound_to_requires_source(self):
        with pytest.raises(ValueError):
            Grid.bound_to(None, "solid", 2, 2)


class TestExport:

    def test_unresolved_cells_are_none(self):
        g = Grid.bound_to(CountingSource([[1, 2, 3], [4, 5, 6]]), None, 2, 3)
        g.read(2, 3)
        g.write(1, 1, 0.5)
        assert g.export() == [[0.5, None, None], [None, None, 6.0]]

    def test_filled_export_shape(self):
        out = Grid.filled(3, 2, 1).export()
        assert len(out) == 3
        assert all(len(col) == 2 for col in out)
        assert all(isinstance(v, float) for col in out for v in col)

    def test_from_columns_round_trip(self):
        cols = [[1.0, None], [None, 2.5]]
        g = Grid.from_columns(cols)
        assert g.shape == (2, 2)
        assert not g.is_resolved(1, 2)
        assert g.export() == cols

    def test_from_columns_rejects_ragged(self):
        with pytest.raises(DimensionMismatchError):
            Grid.from_columns([[1.0, 2.0], [3.0]])

    def test_from_columns_rejects_non_numbers(self):
        with pytest.raises(TileValueError):
            Grid.from_columns([[True]])


class TestCopy:

    def test_copy_is_independent(self):
        g = Grid.filled(2, 2, 1)
        c = g.copy()
        c.write(1, 1, 9)
        assert g.read(1, 1) == 1.0

    def test_update_from_shape_checked(self):
        with pytest.raises(DimensionMismatchError):
            Grid.filled(2, 2, 0).update_from(Grid.filled(2, 3, 0))
