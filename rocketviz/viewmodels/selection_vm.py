from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from ..domain import tabular
from ..domain.entities import Record, Rect
from ..domain.errors import EmptySelectionError, GestureInProgressError
from ..domain.selection import records_in_rect
from ..domain.viewport import Projection

IDLE = "idle"
DRAGGING = "dragging"
PREVIEW_LIMIT = 50


@dataclass
class SelectionVM:
    """Holds box-selection state: drag gesture and the keyed selection set. Pure UI-logic.

    Responsibilities
    - Track the modifier-held drag rectangle in screen coordinates
    - On drag end, unproject the rectangle and union contained records by id
    - Clear and export the selection (export only from idle)

    Entries survive a dataset reload; ids are not reconciled against the new data.
    """

    on_selection_changed: Optional[Callable[[Dict[str, Record]], None]] = None

    _selected: Dict[str, Record] = field(default_factory=dict)
    _state: str = IDLE
    _drag: Optional[Rect] = None

    # ---- Gesture API (called by View) ----
    @property
    def state(self) -> str:
        return self._state

    @property
    def drag_rect(self) -> Optional[Rect]:
        return self._drag

    def begin_drag(self, px: float, py: float, *, modifier: bool) -> bool:
        """Start a selection drag; ignored without the modifier or while already dragging."""
        if not modifier or self._state == DRAGGING:
            return False
        self._state = DRAGGING
        self._drag = Rect(px, py, px, py)
        return True

    def update_drag(self, px: float, py: float, *, modifier: bool = True) -> None:
        if self._state != DRAGGING or self._drag is None:
            return
        if not modifier:
            self.cancel_drag()
            return
        self._drag = Rect(self._drag.x0, self._drag.y0, px, py)

    def end_drag(self, projection: Projection, records: Sequence[Record]) -> int:
        """Finish the gesture and union every record inside the rectangle.

        Returns the number of ids newly added to the selection.
        """
        if self._state != DRAGGING or self._drag is None:
            return 0
        screen_rect = self._drag
        self._state = IDLE
        self._drag = None
        return self.select_world_rect(projection.unproject_rect(screen_rect), records)

    def cancel_drag(self) -> None:
        self._state = IDLE
        self._drag = None

    # ---- Selection set ----
    def select_world_rect(self, rect: Rect, records: Sequence[Record]) -> int:
        added = 0
        for record in records_in_rect(records, rect):
            if record.id not in self._selected:
                added += 1
            self._selected[record.id] = record
        self._notify()
        return added

    def clear(self) -> None:
        self._selected.clear()
        self._notify()

    @property
    def count(self) -> int:
        return len(self._selected)

    def get_selection(self) -> Dict[str, Record]:
        return dict(self._selected)

    def preview(self, limit: int = PREVIEW_LIMIT) -> List[Record]:
        return list(self._selected.values())[: max(0, limit)]

    def export_csv(self) -> str:
        """Serialize the selection with the export header.

        Raises:
            GestureInProgressError: While a drag is still running.
            EmptySelectionError: When nothing is selected.
        """
        if self._state != IDLE:
            raise GestureInProgressError("Selection gesture still in progress.")
        if not self._selected:
            raise EmptySelectionError("Nothing selected to export.")
        return tabular.to_csv(self._selected.values())

    # ---- Helpers ----
    def _notify(self) -> None:
        if self.on_selection_changed:
            self.on_selection_changed(dict(self._selected))
