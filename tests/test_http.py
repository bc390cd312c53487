import io

import pytest
import requests

from chartbroker.core.adapters.http import HttpFetcher
from chartbroker.core.errors import FetchError


class _Response:
    def __init__(self, status_code: int = 200, content: bytes = b""):
        self.status_code = status_code
        self.content = content
        self.closed = False

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self.content), chunk_size):
            yield self.content[i : i + chunk_size]

    def close(self) -> None:
        self.closed = True


class _Session:
    def __init__(self, response: _Response | None = None, exc: Exception | None = None):
        self.response = response
        self.exc = exc
        self.calls: list[tuple[str, object, bool]] = []

    def get(self, url: str, timeout=None, stream: bool = False):
        self.calls.append((url, timeout, stream))
        if self.exc is not None:
            raise self.exc
        return self.response


def test_fetch_returns_body_and_passes_timeout():
    session = _Session(_Response(200, b"hello"))

    assert HttpFetcher(session, timeout=3.0).fetch("http://r/x") == b"hello"
    assert session.calls == [("http://r/x", 3.0, False)]


def test_fetch_defaults_to_no_timeout():
    session = _Session(_Response(204, b""))

    HttpFetcher(session).fetch("http://r/x")

    assert session.calls[0][1] is None


@pytest.mark.parametrize("status", [301, 404, 500])
def test_fetch_non_2xx_raises_fetch_error(status: int):
    response = _Response(status, b"nope")

    with pytest.raises(FetchError) as excinfo:
        HttpFetcher(_Session(response)).fetch("http://r/x")

    assert excinfo.value.status_code == status
    assert excinfo.value.url == "http://r/x"
    assert response.closed is True


def test_fetch_transport_error_raises_fetch_error():
    session = _Session(exc=requests.ConnectionError("refused"))

    with pytest.raises(FetchError, match="refused") as excinfo:
        HttpFetcher(session).fetch("http://r/x")

    assert excinfo.value.status_code is None


def test_fetch_object_decodes_json():
    session = _Session(_Response(200, b'[{"id": "s1"}]'))

    assert HttpFetcher(session).fetch_object("http://r/services") == [{"id": "s1"}]


def test_fetch_object_rejects_invalid_json():
    with pytest.raises(FetchError, match="invalid JSON"):
        HttpFetcher(_Session(_Response(200, b"<html>"))).fetch_object("http://r/services")


def test_fetch_to_file_streams_body():
    body = b"x" * 200_000
    response = _Response(200, body)
    session = _Session(response)
    buf = io.BytesIO()

    HttpFetcher(session).fetch_to_file("https://s/chart", buf)

    assert buf.getvalue() == body
    assert session.calls[0][2] is True
    assert response.closed is True
