from __future__ import annotations
from typing import Protocol


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class SourcePort(Protocol):
    """Retrieve the raw delimited text of the dataset."""

    def fetch_text(self) -> str: ...
    def describe(self) -> str: ...  # path or URL, used in messages


class SelectionPort(Protocol):
    """Read side of the selection set consumed by export."""

    @property
    def count(self) -> int: ...
    def export_csv(self) -> str: ...
