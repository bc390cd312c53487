"""Open Service Broker data model.

These dataclasses mirror the JSON documents exchanged with the service
registry and the broker API boundary. They are intentionally free of
transport concerns: parsing helpers accept already-decoded JSON values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

# Plan metadata keys naming the chart used for instances and bindings.
INSTANCE_TYPE = "instanceType"
BINDING_TYPE = "bindingType"


@dataclass(frozen=True)
class Schema:
    """Raw validation schema text for one artifact type."""

    inputs: str

    def to_dict(self) -> dict[str, Any]:
        return {"inputs": self.inputs}


@dataclass(frozen=True)
class Schemas:
    """Schemas attached to a plan: instance always, binding when bindable."""

    instance: Schema
    binding: Schema | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"instance": self.instance.to_dict()}
        if self.binding is not None:
            out["binding"] = self.binding.to_dict()
        return out


@dataclass(frozen=True)
class Types:
    """
    Artifact locators resolved from plan metadata.

    Attributes:
        instance: Locator of the chart deployed for a service instance.
        binding: Locator of the chart used for bindings, or an empty
                 string when the plan is not bindable.
    """

    instance: str
    binding: str = ""

    @property
    def bindable(self) -> bool:
        return bool(self.binding)


@dataclass
class ServicePlan:
    """A plan offered by a service. `schemas` is filled in by the catalog resolver."""

    id: str
    name: str = ""
    description: str = ""
    free: bool = True
    metadata: Mapping[str, Any] | None = None
    schemas: Schemas | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ServicePlan:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            free=bool(data.get("free", True)),
            metadata=data.get("metadata"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "free": self.free,
        }
        if self.metadata is not None:
            out["metadata"] = dict(self.metadata) if isinstance(self.metadata, Mapping) else self.metadata
        if self.schemas is not None:
            out["schemas"] = self.schemas.to_dict()
        return out


@dataclass
class Service:
    """A service advertised by the registry, with its plans in registry order."""

    id: str
    name: str
    description: str = ""
    bindable: bool = False
    plans: list[ServicePlan] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Service:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            bindable=bool(data.get("bindable", False)),
            plans=[ServicePlan.from_dict(p) for p in data.get("plans") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "bindable": self.bindable,
            "plans": [p.to_dict() for p in self.plans],
        }

    def find_plan(self, plan_id: str) -> ServicePlan | None:
        """Return the plan with the given id, or None."""
        for plan in self.plans:
            if plan.id == plan_id:
                return plan
        return None


@dataclass
class Catalog:
    """The broker catalog returned to the API boundary."""

    services: list[Service] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"services": [s.to_dict() for s in self.services]}


@dataclass
class ServiceInstanceRequest:
    """Provision request. Only service_id and plan_id are read by the core."""

    service_id: str
    plan_id: str
    organization_guid: str = ""
    space_guid: str = ""
    parameters: Mapping[str, Any] | None = None
    accepts_incomplete: bool = False


@dataclass
class CreateServiceInstanceResponse:
    dashboard_url: str = ""
    operation: str = ""


@dataclass
class BindingRequest:
    """Bind request, forwarded untouched to the delegate."""

    service_id: str = ""
    plan_id: str = ""
    app_guid: str = ""
    bind_resource: Mapping[str, Any] | None = None
    parameters: Mapping[str, Any] | None = None


@dataclass
class CreateServiceBindingResponse:
    credentials: Mapping[str, Any] = field(default_factory=dict)
