"""Domain package exports for value objects, parsing, and geometry."""

from .entities import Bounds, Dataset, GridLine, Record, Rect, Viewport
from .errors import EmptySelectionError, FetchError, GestureInProgressError, SchemaError
from .grid import build_grid
from .selection import records_in_rect
from .tabular import is_feasible_cell, parse, to_csv
from .viewport import Projection, fit

__all__ = [
    "Bounds",
    "Dataset",
    "EmptySelectionError",
    "FetchError",
    "GestureInProgressError",
    "GridLine",
    "Projection",
    "Record",
    "Rect",
    "SchemaError",
    "Viewport",
    "build_grid",
    "fit",
    "is_feasible_cell",
    "parse",
    "records_in_rect",
    "to_csv",
]
