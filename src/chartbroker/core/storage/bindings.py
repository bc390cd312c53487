"""Binding storage on top of the watch-based cluster object client."""

from __future__ import annotations

import logging

from chartbroker.core.errors import ConversionError, StoreError, UnsupportedOperationError
from chartbroker.core.servicecatalog import Binding
from chartbroker.core.storage.unstructured import (
    binding_to_unstructured,
    set_name,
    unstructured_to_binding,
)
from chartbroker.core.storage.watch import (
    FULL_API_VERSION,
    SERVICE_BINDING_KIND,
    ResourceClient,
    ResourceType,
    UnstructuredObject,
    Watcher,
)

logger = logging.getLogger(__name__)


class BindingStore:
    """
    Create, update and list bindings stored as unstructured objects.

    create and update return the binding that was passed in rather than
    the object read back from the store, so server-side defaults are not
    reflected in the result.
    """

    def __init__(self, watcher: Watcher, namespace: str) -> None:
        self.watcher = watcher
        self.namespace = namespace

    def _client(self) -> ResourceClient:
        return self.watcher.get_resource_client(ResourceType.SERVICE_BINDING, self.namespace)

    def _to_stored(self, binding: Binding) -> UnstructuredObject:
        binding.kind = SERVICE_BINDING_KIND
        binding.api_version = FULL_API_VERSION
        try:
            obj = binding_to_unstructured(binding)
        except ConversionError as exc:
            logger.error("Failed to convert binding %s: %s", binding.name, exc)
            raise
        set_name(obj, binding.name)
        return obj

    def create(self, binding: Binding) -> Binding:
        obj = self._to_stored(binding)
        logger.info("Creating binding %s in namespace %s", binding.name, self.namespace)
        logger.debug("Binding object: %s", obj)
        try:
            self._client().create(obj)
        except StoreError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to create binding %s: %s", binding.name, exc)
            raise StoreError(f"Failed to create binding {binding.name}: {exc}") from exc
        return binding

    def update(self, binding: Binding) -> Binding:
        obj = self._to_stored(binding)
        logger.info("Updating binding %s in namespace %s", binding.name, self.namespace)
        logger.debug("Binding object: %s", obj)
        try:
            self._client().update(obj)
        except StoreError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to update binding %s: %s", binding.name, exc)
            raise StoreError(f"Failed to update binding {binding.name}: {exc}") from exc
        return binding

    def list(self) -> list[Binding]:
        """Return all bindings in the namespace. One bad object fails the whole list."""
        try:
            items = self._client().list()
        except StoreError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to list bindings in %s: %s", self.namespace, exc)
            raise StoreError(f"Failed to list bindings in {self.namespace}: {exc}") from exc

        out: list[Binding] = []
        for item in items:
            try:
                out.append(unstructured_to_binding(item))
            except ConversionError as exc:
                logger.error("Failed to convert object: %s", exc)
                raise
        return out

    def get(self, name: str) -> Binding:
        raise UnsupportedOperationError("Not implemented yet")

    def delete(self, name: str) -> None:
        raise UnsupportedOperationError("Not implemented yet")
