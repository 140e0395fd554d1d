from __future__ import annotations

"""Domain value objects shared across the parser, geometry helpers, and view models."""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

Point = Tuple[float, float]


@dataclass(frozen=True)
class Record:
    """One plotted design point."""

    id: str
    """Identifier unique within a dataset; the row index when the column is absent."""

    x: float
    """Value of the ``latentx1`` column."""

    y: float
    """Value of the ``latentx2`` column."""

    design_var_1: str = ""
    design_var_2: str = ""
    feasible: bool = False

    def __post_init__(self) -> None:
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError("Record coordinates must be finite.")


Dataset = Tuple[Record, ...]


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box in world coordinates, ordered like ``[minX, minY, maxX, maxY]``."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)


@dataclass(frozen=True)
class Viewport:
    """Camera framing over the orthographic plane.

    ``zoom`` is a log2 scale factor: one world unit covers ``2 ** zoom`` pixels.
    ``bounds`` is only ever produced by a fit; manual pan/zoom carries it over.
    """

    target_x: float = 0.0
    target_y: float = 0.0
    zoom: float = 0.0
    bounds: Optional[Bounds] = None

    @property
    def scale(self) -> float:
        return 2.0 ** self.zoom


@dataclass(frozen=True)
class GridLine:
    """Grid segment in world space."""

    path: Tuple[Point, Point]
    is_major: bool = False


@dataclass(frozen=True)
class Rect:
    """Rectangle spanned by two corners, in either screen or world space."""

    x0: float
    y0: float
    x1: float
    y1: float

    def normalized(self) -> "Rect":
        return Rect(
            min(self.x0, self.x1),
            min(self.y0, self.y1),
            max(self.x0, self.x1),
            max(self.y0, self.y1),
        )

    @property
    def width(self) -> float:
        return abs(self.x1 - self.x0)

    @property
    def height(self) -> float:
        return abs(self.y1 - self.y0)

    def contains(self, x: float, y: float) -> bool:
        """Inclusive containment test against the normalized rectangle."""
        rect = self.normalized()
        return rect.x0 <= x <= rect.x1 and rect.y0 <= y <= rect.y1


__all__ = ["Bounds", "Dataset", "GridLine", "Point", "Record", "Rect", "Viewport"]
