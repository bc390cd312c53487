from __future__ import annotations

import logging
from typing import Any, Protocol

from chartbroker.core.brokerapi import Service
from chartbroker.core.errors import FetchError, NotFoundError

logger = logging.getLogger(__name__)

CATALOG_FMT = "http://{host}:{port}/services"
SERVICE_BY_ID_FMT = "http://{host}:{port}/services/{service_id}"


class ObjectFetcher(Protocol):
    def fetch_object(self, url: str) -> Any:
        """Return the decoded JSON document at url."""
        ...


def _parse_service(data: Any, url: str) -> Service:
    if not isinstance(data, dict):
        raise FetchError(f"Registry response from {url} is not a service object", url=url)
    try:
        return Service.from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise FetchError(f"Malformed service in registry response from {url}: {exc}", url=url) from exc


class RegistryClient:
    """Adapter around the service registry HTTP API (catalog and service lookup)."""

    def __init__(self, host: str, port: int, fetcher: ObjectFetcher) -> None:
        self.host = host
        self.port = port
        self.fetcher = fetcher

    @property
    def catalog_url(self) -> str:
        return CATALOG_FMT.format(host=self.host, port=self.port)

    def service_url(self, service_id: str) -> str:
        return SERVICE_BY_ID_FMT.format(host=self.host, port=self.port, service_id=service_id)

    def list_services(self) -> list[Service]:
        """Return every service in the registry, in registry order."""
        url = self.catalog_url
        logger.debug("Fetching catalog from %s", url)
        data = self.fetcher.fetch_object(url)
        if not isinstance(data, list):
            raise FetchError(f"Registry catalog at {url} is not a list", url=url)
        return [_parse_service(item, url) for item in data]

    def get_service(self, service_id: str) -> Service:
        """Return one service by id."""
        url = self.service_url(service_id)
        logger.debug("Fetching service %s from %s", service_id, url)
        try:
            data = self.fetcher.fetch_object(url)
        except FetchError as exc:
            if exc.status_code == 404:
                raise NotFoundError(f"Service {service_id} not found in registry") from exc
            raise
        return _parse_service(data, url)
