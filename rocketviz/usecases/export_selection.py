from __future__ import annotations

import logging
from dataclasses import dataclass

from ..domain.ports import SelectionPort
from .error_mapping import map_export_error

LOGGER = logging.getLogger(__name__)

CSV_MEDIA_TYPE = "text/csv"


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    content: bytes
    media_type: str = CSV_MEDIA_TYPE


def export_filename(dataset_name: str) -> str:
    stem = (dataset_name or "").strip() or "dataset"
    return f"{stem}_selection.csv"


@dataclass
class ExportSelection:
    selection: SelectionPort
    dataset_name: str = "rocket"

    def __call__(self) -> ExportArtifact:
        """Serialize the current selection into a downloadable CSV artifact."""
        try:
            text = self.selection.export_csv()
        except Exception as exc:
            raise map_export_error(exc) from exc
        artifact = ExportArtifact(
            filename=export_filename(self.dataset_name),
            content=text.encode("utf-8"),
        )
        LOGGER.info("Exported %d selected items to %s", self.selection.count, artifact.filename)
        return artifact
