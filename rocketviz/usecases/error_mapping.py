"""Translate domain and adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from rocketviz.domain.errors import (
    EmptySelectionError,
    FetchError,
    GestureInProgressError,
    SchemaError,
)
from rocketviz.domain.ports import UseCaseError


def map_load_error(exc: Exception, *, default_message: Optional[str] = None) -> UseCaseError:
    """Map a failed load attempt to a stable UseCaseError code.

    Args:
        exc (Exception): Error raised by the source adapter or the parser.
        default_message (Optional[str]): Message for unexpected errors.

    Returns:
        UseCaseError: ``SCHEMA_INVALID``, ``FETCH_FAILED`` or ``LOAD_FAILED``.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, SchemaError):
        return UseCaseError("SCHEMA_INVALID", str(exc))
    if isinstance(exc, FetchError):
        message = str(exc)
        if exc.status:
            message = f"{message} (HTTP {exc.status})"
        return UseCaseError("FETCH_FAILED", message)
    message = default_message or str(exc) or "Failed to load CSV"
    return UseCaseError("LOAD_FAILED", message)


def map_export_error(exc: Exception) -> UseCaseError:
    """Map a rejected export to a stable UseCaseError code."""
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, EmptySelectionError):
        return UseCaseError("EMPTY_SELECTION", "Nothing selected to export.")
    if isinstance(exc, GestureInProgressError):
        return UseCaseError("SELECTION_BUSY", "Finish the selection gesture before exporting.")
    return UseCaseError("EXPORT_FAILED", str(exc) or "Export failed.")


__all__ = ["map_export_error", "map_load_error"]
