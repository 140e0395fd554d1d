from __future__ import annotations

import os

from rocketviz.domain.errors import FetchError

from .source_http import not_found_message


class FileSourceAdapter:
    """Local filesystem source, used offline and by the smoke test."""

    def __init__(self, path: str) -> None:
        self.path = path

    def describe(self) -> str:
        return self.path

    def fetch_text(self) -> str:
        if not os.path.isfile(self.path):
            raise FetchError(not_found_message(self.path), path=self.path, context="read")
        try:
            with open(self.path, "r", encoding="utf-8-sig") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise FetchError(str(exc), path=self.path, context="read") from exc
