from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union

import pytest
from requests import exceptions as req_exc

from rocketviz.adapters.source_http import HttpConfig, HttpSourceAdapter
from rocketviz.domain.errors import FetchError


class _ResponseStub:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code


class _SessionStub:
    def __init__(self, responses: Sequence[Union[_ResponseStub, Exception]]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def get(
        self,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[int] = None,
    ) -> _ResponseStub:
        self.calls.append({"url": url, "headers": dict(headers or {}), "timeout": timeout})
        if not self._responses:
            raise RuntimeError("No stub response configured")
        resp = self._responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp


def _adapter(*responses: Union[_ResponseStub, Exception]) -> tuple:
    adapter = HttpSourceAdapter(HttpConfig(base_url="http://viz.local/", request_timeout_s=3))
    stub = _SessionStub(responses)
    adapter.session = stub  # type: ignore[assignment]
    return adapter, stub


def test_fetch_text_gets_fixed_path_without_cache() -> None:
    adapter, stub = _adapter(_ResponseStub("id,latentx1,latentx2\n"))

    text = adapter.fetch_text()

    assert text == "id,latentx1,latentx2\n"
    assert stub.calls[0]["url"] == "http://viz.local/data/combined.csv"
    assert stub.calls[0]["headers"]["Cache-Control"] == "no-cache"
    assert stub.calls[0]["timeout"] == 3
    assert adapter.describe() == "/data/combined.csv"


@pytest.mark.parametrize("status", [404, 500, 302])
def test_fetch_text_rejects_non_success_status(status: int) -> None:
    adapter, stub = _adapter(_ResponseStub("nope", status_code=status))

    with pytest.raises(FetchError) as excinfo:
        adapter.fetch_text()

    assert excinfo.value.status == status
    assert excinfo.value.path == "/data/combined.csv"
    assert str(excinfo.value) == "CSV not found at /data/combined.csv. Please ensure the file exists."
    assert len(stub.calls) == 1


def test_fetch_text_wraps_transport_errors_without_retry() -> None:
    adapter, stub = _adapter(req_exc.ConnectionError("refused"), _ResponseStub("late"))

    with pytest.raises(FetchError) as excinfo:
        adapter.fetch_text()

    assert excinfo.value.status is None
    assert "/data/combined.csv" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, req_exc.ConnectionError)
    assert len(stub.calls) == 1


def test_url_joins_base_and_path() -> None:
    adapter = HttpSourceAdapter(HttpConfig(base_url="http://host:1", path="files/d.csv"))

    assert adapter.url == "http://host:1/files/d.csv"
