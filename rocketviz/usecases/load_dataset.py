from __future__ import annotations

import logging
from dataclasses import dataclass

from ..domain import tabular
from ..domain.entities import Dataset
from ..domain.ports import SourcePort
from .error_mapping import map_load_error

LOGGER = logging.getLogger(__name__)


@dataclass
class LoadDataset:
    source: SourcePort

    def __call__(self) -> Dataset:
        """Fetch and parse the source; the caller keeps its old dataset on failure."""
        try:
            text = self.source.fetch_text()
            dataset = tabular.parse(text)
        except Exception as exc:
            err = map_load_error(exc)
            LOGGER.warning("Load from %s failed (%s): %s", self.source.describe(), err.code, err.message)
            raise err from exc
        LOGGER.info("Loaded %d records from %s", len(dataset), self.source.describe())
        return dataset
