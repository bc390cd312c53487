"""Schema lookup for chart locators.

Charts live in object storage under `gs://` locators. Each chart has a
sidecar `<chart>.schema` object, served over the public storage HTTPS
endpoint, that holds its input schema.
"""

from __future__ import annotations

import logging
from typing import Protocol

from chartbroker.core.brokerapi import Schema, Schemas, Types
from chartbroker.core.errors import FetchError, InvalidLocatorError

logger = logging.getLogger(__name__)

STORAGE_SCHEME = "gs://"
STORAGE_HTTPS_BASE = "https://storage.googleapis.com/"
SCHEMA_SUFFIX = ".schema"


class SchemaFetcher(Protocol):
    """Interface for fetching raw bytes over HTTP."""

    def fetch(self, url: str) -> bytes:
        """Return the body of a successful GET on url."""
        ...


def schema_url(locator: str) -> str:
    """
    Return the HTTPS URL of the schema sidecar for a chart locator.

    Raises:
        InvalidLocatorError: If the locator does not start with `gs://`.
    """
    if not locator.startswith(STORAGE_SCHEME):
        raise InvalidLocatorError(
            f"invalid url format {locator!r}; {STORAGE_SCHEME}... is required"
        )
    return locator.replace(STORAGE_SCHEME, STORAGE_HTTPS_BASE, 1) + SCHEMA_SUFFIX


def fetch_schema(locator: str, fetcher: SchemaFetcher) -> Schema:
    """Fetch the schema for one chart locator."""
    url = schema_url(locator)
    logger.debug("Fetching schema for %s from %s", locator, url)
    body = fetcher.fetch(url)
    try:
        return Schema(inputs=body.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise FetchError(f"Schema at {url} is not valid UTF-8: {exc}", url=url) from exc


def fetch_schemas(types: Types, fetcher: SchemaFetcher) -> Schemas:
    """Fetch the instance schema and, for bindable plans, the binding schema."""
    instance = fetch_schema(types.instance, fetcher)
    # May not be bindable, and thus won't have a binding type.
    binding = fetch_schema(types.binding, fetcher) if types.binding else None
    return Schemas(instance=instance, binding=binding)
