"""Catalog resolution.

The broker catalog is the registry's service list with every plan enriched
with the input schemas of its instance and binding charts. Resolution is
all-or-nothing: a single plan that cannot be resolved fails the catalog.
"""

from __future__ import annotations

import logging
from typing import Protocol

from chartbroker.core.brokerapi import Catalog, Service
from chartbroker.core.errors import BrokerError
from chartbroker.core.schemas import SchemaFetcher, fetch_schemas
from chartbroker.core.types import resolve_types

logger = logging.getLogger(__name__)


class ServiceRegistry(Protocol):
    """Interface for service lookups used by the core domain."""

    def list_services(self) -> list[Service]:
        """Return every service in the registry, in registry order."""
        ...

    def get_service(self, service_id: str) -> Service:
        """Return one service by id."""
        ...


def get_catalog(registry: ServiceRegistry, fetcher: SchemaFetcher) -> Catalog:
    """
    Fetch the registry catalog and attach schemas to every plan.

    Args:
        registry: Registry adapter used to list services.
        fetcher: HTTP fetcher used for schema sidecars.

    Returns:
        A Catalog whose services and plans keep registry order and whose
        plans all carry resolved Schemas.

    Raises:
        FetchError: If the registry or any schema cannot be fetched.
        NotFoundError: If any plan lacks a usable instance type.
        InvalidLocatorError: If any plan type is not a `gs://` locator.
    """
    try:
        services = registry.list_services()
    except BrokerError as exc:
        logger.error("Failed to fetch catalog from service registry: %s", exc)
        raise

    for service in services:
        for plan in service.plans:
            try:
                types = resolve_types(plan)
                plan.schemas = fetch_schemas(types, fetcher)
            except BrokerError as exc:
                logger.error(
                    "Failed to fetch schemas for service %s plan %s: %s",
                    service.id,
                    plan.id,
                    exc,
                )
                raise

    return Catalog(services=services)
