"""Domain-level error types for use-case and adapter mapping.

Adapters and pure domain helpers raise these; use cases translate them into
``UseCaseError`` instances so views never see transport details.
"""
from __future__ import annotations

from typing import Optional, Sequence


class SchemaError(ValueError):
    """Header row lacks one of the required coordinate columns."""

    def __init__(self, message: str, *, missing: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.missing = tuple(missing)


class FetchError(RuntimeError):
    """Source text could not be retrieved (transport failure or non-2xx status)."""

    def __init__(
        self,
        message: str,
        *,
        path: str,
        status: Optional[int] = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.status = status
        self.context = context


class EmptySelectionError(RuntimeError):
    """Export requested while the selection set is empty."""


class GestureInProgressError(RuntimeError):
    """Selection set read while a drag gesture is still running."""


__all__ = [
    "EmptySelectionError",
    "FetchError",
    "GestureInProgressError",
    "SchemaError",
]
