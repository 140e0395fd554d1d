"""Delimited-text parsing and serialization for rocket design datasets.

``parse`` turns untyped CSV/TSV text into a tuple of :class:`Record` values and
``to_csv`` writes records back in a form ``parse`` accepts again.

Parsing rules:
    - The delimiter is chosen by presence in the whole text: tab, then
      semicolon, otherwise comma.
    - Empty lines are dropped; whitespace-only lines are kept and fall out as
      malformed rows.
    - Rows whose coordinates are missing or not finite are skipped silently,
      so row count and line count may differ.
"""

from __future__ import annotations

import csv
import io
import math
import re
from typing import Iterable, List, Optional

from .entities import Dataset, Record
from .errors import SchemaError

X_COLUMN = "latentx1"
Y_COLUMN = "latentx2"
ID_COLUMN = "id"
DV1_COLUMN = "design_var_1"
DV2_COLUMN = "design_var_2"
FEASIBLE_COLUMN = "feasible"

# Exported rows round-trip through ``parse`` only while no cell contains a tab,
# ";" or ",": ``parse`` picks the delimiter by presence and splits without
# honouring the quotes ``csv.writer`` adds.
EXPORT_HEADER = (ID_COLUMN, X_COLUMN, Y_COLUMN, DV1_COLUMN, DV2_COLUMN, FEASIBLE_COLUMN)

# Alternation binds loosest: "starts with true" OR "ends with 1".
_FEASIBLE_RE = re.compile(r"^true|1$", re.IGNORECASE)
_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
_FLOAT_PREFIX_RE = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def detect_delimiter(text: str) -> str:
    """Return the delimiter for ``text`` by presence: tab, semicolon, comma."""
    if "\t" in text:
        return "\t"
    if ";" in text:
        return ";"
    return ","


def split_lines(text: str) -> List[str]:
    """Split on any CR/LF combination and drop empty lines."""
    return [line for line in _LINE_SPLIT_RE.split(text) if line]


def is_feasible_cell(raw: Optional[str]) -> bool:
    """Apply the feasibility pattern to a raw cell.

    ``"true"``, ``"TRUE"``, ``"trueish"`` and ``"1"`` are feasible, as is any
    value ending in ``1``; ``"10"``, ``"yes"`` and ``""`` are not.
    """
    return bool(_FEASIBLE_RE.search(str(raw or "").strip()))


def parse_float(raw: Optional[str]) -> float:
    """Parse the leading numeric prefix of ``raw``; ``nan`` when there is none."""
    if raw is None:
        return math.nan
    match = _FLOAT_PREFIX_RE.match(raw.strip())
    if not match:
        return math.nan
    token = match.group(0)
    if token.lstrip("+-") == "Infinity":
        return -math.inf if token.startswith("-") else math.inf
    return float(token)


def _cell(cols: List[str], index: int) -> Optional[str]:
    if index < 0 or index >= len(cols):
        return None
    return cols[index]


def parse(text: str) -> Dataset:
    """Parse delimited ``text`` into an ordered dataset.

    Raises:
        SchemaError: If the header lacks ``latentx1`` or ``latentx2``.
    """
    delim = detect_delimiter(text)
    lines = split_lines(text)
    if not lines:
        return ()

    header = [name.strip().lower() for name in lines[0].split(delim)]
    missing = [name for name in (X_COLUMN, Y_COLUMN) if name not in header]
    if missing:
        raise SchemaError(
            f"CSV must include '{X_COLUMN}' and '{Y_COLUMN}' columns",
            missing=missing,
        )

    def index_of(name: str) -> int:
        return header.index(name) if name in header else -1

    ix = index_of(X_COLUMN)
    iy = index_of(Y_COLUMN)
    iid = index_of(ID_COLUMN)
    idv1 = index_of(DV1_COLUMN)
    idv2 = index_of(DV2_COLUMN)
    ifeas = index_of(FEASIBLE_COLUMN)

    records: List[Record] = []
    for row_index, line in enumerate(lines[1:]):
        cols = [field.strip() for field in line.split(delim)]
        x = parse_float(_cell(cols, ix))
        y = parse_float(_cell(cols, iy))
        if not (math.isfinite(x) and math.isfinite(y)):
            continue

        record_id = _cell(cols, iid)
        records.append(
            Record(
                id=record_id if record_id is not None else str(row_index),
                x=x,
                y=y,
                design_var_1=_cell(cols, idv1) or "",
                design_var_2=_cell(cols, idv2) or "",
                feasible=is_feasible_cell(_cell(cols, ifeas)),
            )
        )
    return tuple(records)


def to_csv(records: Iterable[Record]) -> str:
    """Serialize records with the export header, comma-delimited, ``\\n`` endings.

    Cells holding a comma are quoted by ``csv.writer``; ``parse`` does not
    unquote, so such values do not survive a re-import (see ``EXPORT_HEADER``).
    """
    stream = io.StringIO()
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for record in records:
        writer.writerow(
            [
                record.id,
                repr(float(record.x)),
                repr(float(record.y)),
                record.design_var_1,
                record.design_var_2,
                "true" if record.feasible else "false",
            ]
        )
    return stream.getvalue().rstrip("\n")


__all__ = [
    "EXPORT_HEADER",
    "detect_delimiter",
    "is_feasible_cell",
    "parse",
    "parse_float",
    "split_lines",
    "to_csv",
]
