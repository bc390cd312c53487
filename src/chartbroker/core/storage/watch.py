"""Contract of the watch-based cluster object client.

Objects travel as unstructured dicts in their Kubernetes JSON shape
(`apiVersion`, `kind`, `metadata`, `spec`, `status`).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

GROUP_NAME = "catalog.k8s.io"
API_VERSION = "v1alpha1"
FULL_API_VERSION = f"{GROUP_NAME}/{API_VERSION}"

SERVICE_BINDING_KIND = "ServiceBinding"

UnstructuredObject = dict[str, Any]


class ResourceType(str, Enum):
    """Storage collections managed through the watcher."""

    SERVICE_BINDING = "servicebindings"


class ResourceClient(Protocol):
    """Client for one resource collection in one namespace."""

    def create(self, obj: UnstructuredObject) -> UnstructuredObject: ...

    def update(self, obj: UnstructuredObject) -> UnstructuredObject: ...

    def list(self) -> list[UnstructuredObject]: ...

    def get(self, name: str) -> UnstructuredObject: ...

    def delete(self, name: str) -> None: ...


class Watcher(Protocol):
    def get_resource_client(self, resource_type: ResourceType, namespace: str) -> ResourceClient:
        """Return the client for resource_type objects in namespace."""
        ...
