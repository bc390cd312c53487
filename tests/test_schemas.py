import pytest

from chartbroker.core.brokerapi import Schema, Types
from chartbroker.core.errors import FetchError, InvalidLocatorError
from chartbroker.core.schemas import fetch_schema, fetch_schemas, schema_url


class _Fetcher:
    def __init__(self, bodies: dict[str, bytes] | None = None):
        self.bodies = bodies or {}
        self.urls: list[str] = []

    def fetch(self, url: str) -> bytes:
        self.urls.append(url)
        if url not in self.bodies:
            raise FetchError(f"GET {url} returned HTTP 404", url=url, status_code=404)
        return self.bodies[url]


def test_schema_url_rewrites_storage_locator():
    assert schema_url("gs://bucket/chart") == "https://storage.googleapis.com/bucket/chart.schema"


def test_schema_url_only_rewrites_leading_scheme():
    assert (
        schema_url("gs://bucket/gs://odd")
        == "https://storage.googleapis.com/bucket/gs://odd.schema"
    )


@pytest.mark.parametrize(
    "locator",
    ["https://example.com/chart", "s3://bucket/chart", "bucket/chart", "", "GS://bucket/chart"],
)
def test_fetch_schema_rejects_other_schemes_without_io(locator: str):
    fetcher = _Fetcher()

    with pytest.raises(InvalidLocatorError):
        fetch_schema(locator, fetcher)

    assert fetcher.urls == []


def test_fetch_schema_returns_body_as_inputs():
    url = "https://storage.googleapis.com/bucket/chart.schema"
    fetcher = _Fetcher({url: b'{"type": "object"}'})

    assert fetch_schema("gs://bucket/chart", fetcher) == Schema(inputs='{"type": "object"}')


def test_fetch_schema_propagates_fetch_error():
    with pytest.raises(FetchError):
        fetch_schema("gs://bucket/missing", _Fetcher())


def test_fetch_schemas_skips_binding_for_non_bindable_types():
    fetcher = _Fetcher({"https://storage.googleapis.com/b/db.schema": b"i"})

    schemas = fetch_schemas(Types(instance="gs://b/db"), fetcher)

    assert schemas.instance.inputs == "i"
    assert schemas.binding is None
    assert fetcher.urls == ["https://storage.googleapis.com/b/db.schema"]


def test_fetch_schemas_fetches_binding_schema():
    fetcher = _Fetcher(
        {
            "https://storage.googleapis.com/b/db.schema": b"i",
            "https://storage.googleapis.com/b/proxy.schema": b"b",
        }
    )

    schemas = fetch_schemas(Types(instance="gs://b/db", binding="gs://b/proxy"), fetcher)

    assert schemas.binding == Schema(inputs="b")


def test_fetch_schema_rejects_non_utf8_body():
    fetcher = _Fetcher({"https://storage.googleapis.com/charts/bad.schema": b"\xff\xfe{}"})

    with pytest.raises(FetchError, match="not valid UTF-8"):
        fetch_schema("gs://charts/bad", fetcher)
