"""HTTP source adapter for the dataset text.

This module wraps ``requests.Session`` so the load use case can fetch the
dataset from a fixed path on the serving host.

Dependencies:
    - ``requests`` for network I/O.
    - ``rocketviz.domain.errors.FetchError`` for typed transport failures.

Call context:
    - Constructed by ``rocketviz/web_ui/runtime.py`` from ``SettingsVM``.
    - Used through ``SourcePort`` by ``rocketviz/usecases/load_dataset.py``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import requests
from requests import exceptions as req_exc

from rocketviz.domain.errors import FetchError

DEFAULT_SOURCE_PATH = "/data/combined.csv"


@dataclass
class HttpConfig:
    """Transport settings for the source fetch.

    Attributes:
        base_url: Scheme and host serving the dataset, e.g. ``http://127.0.0.1:8080``.
        path: Fixed path of the dataset below ``base_url``.
        request_timeout_s: Timeout in seconds for the GET request.
    """
    base_url: str = "http://127.0.0.1:8080"
    path: str = DEFAULT_SOURCE_PATH
    request_timeout_s: int = 10


def not_found_message(path: str) -> str:
    return f"CSV not found at {path}. Please ensure the file exists."


class HttpSourceAdapter:
    """Fetch dataset text with a single GET; failures are never retried."""

    def __init__(self, cfg: HttpConfig) -> None:
        """Create the adapter.

        Args:
            cfg: Base URL, path, and timeout for the fetch.

        Side Effects:
            Creates a persistent ``requests.Session`` object.
        """
        self.cfg = cfg
        self.session = requests.Session()

    @property
    def url(self) -> str:
        return f"{self.cfg.base_url.rstrip('/')}/{self.cfg.path.lstrip('/')}"

    def describe(self) -> str:
        return self.cfg.path

    def _headers(self) -> Dict[str, str]:
        return {"Accept": "text/csv, text/plain, */*", "Cache-Control": "no-cache"}

    def fetch_text(self) -> str:
        """Return the response body of ``GET <base_url><path>``.

        Raises:
            FetchError: On transport failure or a non-2xx status. The message
                names the expected path.
        """
        context = f"GET {self.url}"
        try:
            resp = self.session.get(
                self.url,
                headers=self._headers(),
                timeout=self.cfg.request_timeout_s,
            )
        except req_exc.RequestException as exc:
            raise FetchError(
                not_found_message(self.cfg.path), path=self.cfg.path, context=context
            ) from exc
        if not 200 <= resp.status_code < 300:
            raise FetchError(
                not_found_message(self.cfg.path),
                path=self.cfg.path,
                status=resp.status_code,
                context=context,
            )
        return resp.text


__all__ = ["DEFAULT_SOURCE_PATH", "HttpConfig", "HttpSourceAdapter", "not_found_message"]
