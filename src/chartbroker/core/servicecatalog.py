"""Service catalog resource model for bindings.

A Binding as stored in the cluster: Kubernetes type and object metadata
plus the binding spec and status. Field names are snake_case here and
camelCase in the stored JSON form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ObjectReference:
    """Reference to a namespaced object, such as the bound instance."""

    name: str = ""
    namespace: str = ""


@dataclass
class BindingCondition:
    """One observed condition of a binding."""

    type: str
    status: str
    reason: str = ""
    message: str = ""


@dataclass
class BindingSpec:
    """
    Desired state of a binding.

    Attributes:
        instance_ref: Instance the binding is for.
        parameters: Opaque bind parameters forwarded to the broker.
        secret_name: Name of the secret that receives the credentials.
        os_binding_id: Binding id as known to the broker.
    """

    instance_ref: ObjectReference = field(default_factory=ObjectReference)
    parameters: dict[str, Any] | None = None
    secret_name: str = ""
    os_binding_id: str = ""


@dataclass
class BindingStatus:
    conditions: list[BindingCondition] = field(default_factory=list)


@dataclass
class Binding:
    """A service binding resource."""

    name: str
    namespace: str = ""
    uid: str = ""
    resource_version: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    kind: str = ""
    api_version: str = ""
    spec: BindingSpec = field(default_factory=BindingSpec)
    status: BindingStatus = field(default_factory=BindingStatus)
