"""Box-selection predicate over a dataset."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .entities import Record, Rect


def records_in_rect(records: Sequence[Record], rect: Rect) -> List[Record]:
    """Return records whose position lies inside ``rect`` (edges included), in dataset order."""
    if not records:
        return []
    box = rect.normalized()
    xs = np.fromiter((record.x for record in records), dtype=float, count=len(records))
    ys = np.fromiter((record.y for record in records), dtype=float, count=len(records))
    mask = (xs >= box.x0) & (xs <= box.x1) & (ys >= box.y0) & (ys <= box.y1)
    return [records[int(i)] for i in np.flatnonzero(mask)]


__all__ = ["records_in_rect"]
