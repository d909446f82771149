# errors.py
# All core errors are synchronous and non-retryable. Each also derives from the
# closest builtin so hosts can catch either.


class DistanceMapError(Exception):
    """Base class for distance map errors."""


class EmptyQueueError(DistanceMapError, IndexError):
    """pop() called on an empty priority queue."""


class UnboundGridReadError(DistanceMapError, LookupError):
    """Read of an unresolved cell on a grid with no tile source."""


class CoordinateError(DistanceMapError, IndexError):
    """Coordinate outside [1, w] x [1, h]."""


class DimensionError(DistanceMapError, ValueError):
    """Invalid grid dimensions."""


class DimensionOverflowError(DimensionError):
    """Grid axis exceeds the supported coordinate bound."""


class DimensionMismatchError(DimensionError):
    """Cost grid and distance grid shapes differ."""


class TileValueError(DistanceMapError, TypeError):
    """Tile source returned something that is not a usable cost."""
