"""Broker controller that deploys plans as charts.

The controller turns Open Service Broker calls into calls on a Reifier, the
collaborator that actually materializes charts in the cluster. It owns no
state of its own: plan types come from the registry on every call and
resource names are derived deterministically from broker ids.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Protocol, TypeVar

from chartbroker.core.brokerapi import (
    BindingRequest,
    Catalog,
    CreateServiceBindingResponse,
    CreateServiceInstanceResponse,
    ServiceInstanceRequest,
    Types,
)
from chartbroker.core.catalog import ServiceRegistry, get_catalog
from chartbroker.core.errors import DelegateError, NotFoundError, UnsupportedOperationError
from chartbroker.core.naming import ResourceKind, resource_name
from chartbroker.core.staging import staged_chart
from chartbroker.core.types import resolve_types

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Reifier(Protocol):
    """Interface for the collaborator that provisions charts in the cluster."""

    def create_service_instance(
        self, name: str, chart_path: Path, req: ServiceInstanceRequest
    ) -> CreateServiceInstanceResponse:
        """Deploy the staged chart as a service instance called name."""
        ...

    def remove_service_instance(self, name: str) -> None:
        """Remove the deployment called name."""
        ...

    def create_service_binding(
        self, name: str, req: BindingRequest
    ) -> CreateServiceBindingResponse:
        """Create a binding against the service instance called name."""
        ...

    def remove_service_binding(self, name: str) -> None:
        """Remove the binding held by the service instance called name."""
        ...


class Controller(Protocol):
    """Broker-facing operations."""

    def catalog(self) -> Catalog: ...

    def create_service_instance(
        self, instance_id: str, req: ServiceInstanceRequest
    ) -> CreateServiceInstanceResponse: ...

    def get_service_instance(self, instance_id: str) -> str: ...

    def remove_service_instance(self, instance_id: str) -> None: ...

    def bind(
        self, instance_id: str, binding_id: str, req: BindingRequest
    ) -> CreateServiceBindingResponse: ...

    def unbind(self, instance_id: str, binding_id: str) -> None: ...


def _call_reifier(action: str, fn: Callable[..., T], *args: Any) -> T:
    """Invoke a reifier operation, surfacing any failure as DelegateError."""
    try:
        return fn(*args)
    except DelegateError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise DelegateError(f"Failed to {action}: {exc}") from exc


class ChartBrokerController:
    """Controller implementation backed by a registry, an HTTP fetcher and a reifier."""

    def __init__(self, registry: ServiceRegistry, fetcher: Any, reifier: Reifier) -> None:
        """
        Create a controller.

        Args:
            registry: Service registry adapter.
            fetcher: HTTP fetcher providing `fetch` (schemas) and
                     `fetch_to_file` (charts).
            reifier: Collaborator that provisions charts.
        """
        self.registry = registry
        self.fetcher = fetcher
        self.reifier = reifier

    def catalog(self) -> Catalog:
        """Return the catalog with schemas attached to every plan."""
        return get_catalog(self.registry, self.fetcher)

    def _get_types(self, service_id: str, plan_id: str) -> Types:
        """Resolve the chart types for a service plan, fresh from the registry."""
        service = self.registry.get_service(service_id)
        plan = service.find_plan(plan_id)
        if plan is None:
            raise NotFoundError(f"Did not find plan: {plan_id}")
        return resolve_types(plan)

    def create_service_instance(
        self, instance_id: str, req: ServiceInstanceRequest
    ) -> CreateServiceInstanceResponse:
        """
        Provision a service instance.

        The plan's instance chart is downloaded into a temporary file that
        only lives for the duration of the reifier call.
        """
        try:
            types = self._get_types(req.service_id, req.plan_id)
        except Exception as exc:
            logger.error("Can't find a type for %s:%s : %s", req.service_id, req.plan_id, exc)
            raise

        instance_name = resource_name(instance_id, ResourceKind.SERVICE_INSTANCE)

        try:
            with staged_chart(self.fetcher, types.instance) as chart_path:
                ret = _call_reifier(
                    f"create service instance {instance_name}",
                    self.reifier.create_service_instance,
                    instance_name,
                    chart_path,
                    req,
                )
        except Exception as exc:
            logger.error("Failed to create service instance %s (%s): %s", instance_id, types.instance, exc)
            raise

        logger.info("Created service instance %s: %s", instance_name, ret)
        return ret

    def get_service_instance(self, instance_id: str) -> str:
        raise UnsupportedOperationError("Unimplemented")

    def remove_service_instance(self, instance_id: str) -> None:
        instance_name = resource_name(instance_id, ResourceKind.SERVICE_INSTANCE)
        try:
            _call_reifier(
                f"remove service instance {instance_name}",
                self.reifier.remove_service_instance,
                instance_name,
            )
        except DelegateError as exc:
            logger.error("Failed to remove %s : %s", instance_id, exc)
            raise
        logger.info("Removed service instance %s", instance_name)

    def bind(
        self, instance_id: str, binding_id: str, req: BindingRequest
    ) -> CreateServiceBindingResponse:
        """Bind to an instance; the reifier owns the binding's identity."""
        instance_name = resource_name(instance_id, ResourceKind.SERVICE_INSTANCE)
        try:
            ret = _call_reifier(
                f"create service binding on {instance_name}",
                self.reifier.create_service_binding,
                instance_name,
                req,
            )
        except DelegateError as exc:
            logger.error("Failed to create service binding %s for %s : %s", binding_id, instance_id, exc)
            raise
        logger.info("Created binding %s on %s", binding_id, instance_name)
        return ret

    def unbind(self, instance_id: str, binding_id: str) -> None:
        """
        Remove a binding.

        Success is decided by the binding removal alone. The binding's
        proxy deployment is removed best-effort afterwards.
        """
        instance_name = resource_name(instance_id, ResourceKind.SERVICE_INSTANCE)
        binding_name = resource_name(binding_id, ResourceKind.SERVICE_BINDING)
        try:
            _call_reifier(
                f"remove service binding on {instance_name}",
                self.reifier.remove_service_binding,
                instance_name,
            )
        except DelegateError as exc:
            logger.error("Failed to remove binding %s for %s : %s", binding_id, instance_id, exc)
            raise

        try:
            _call_reifier(
                f"remove proxy {binding_name}",
                self.reifier.remove_service_instance,
                binding_name,
            )
        except DelegateError as exc:
            logger.error("Cannot remove proxy %s for binding %s: %s", binding_name, binding_id, exc)
