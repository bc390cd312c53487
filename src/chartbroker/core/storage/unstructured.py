"""Translation between Binding and its unstructured stored form."""

from __future__ import annotations

import json
from typing import Any, Mapping

from chartbroker.core.errors import ConversionError
from chartbroker.core.servicecatalog import (
    Binding,
    BindingCondition,
    BindingSpec,
    BindingStatus,
    ObjectReference,
)
from chartbroker.core.storage.watch import UnstructuredObject


def set_name(obj: UnstructuredObject, name: str) -> None:
    """Set metadata.name on an unstructured object."""
    obj.setdefault("metadata", {})["name"] = name


def _drop_empty(d: dict[str, Any]) -> dict[str, Any]:
    """Drop empty values the way omitempty JSON fields do."""
    return {k: v for k, v in d.items() if v not in ("", None, {}, [])}


def _build_doc(binding: Binding) -> dict[str, Any]:
    spec = binding.spec
    spec_doc = _drop_empty(
        {
            "instanceRef": _drop_empty(
                {"name": spec.instance_ref.name, "namespace": spec.instance_ref.namespace}
            ),
            "secretName": spec.secret_name,
            "osbGuid": spec.os_binding_id,
        }
    )
    # An empty parameters map is kept so that it reads back as {} rather than None.
    if spec.parameters is not None:
        spec_doc["parameters"] = dict(spec.parameters)
    return {
        "apiVersion": binding.api_version,
        "kind": binding.kind,
        "metadata": _drop_empty(
            {
                "name": binding.name,
                "namespace": binding.namespace,
                "uid": binding.uid,
                "resourceVersion": binding.resource_version,
                "labels": dict(binding.labels),
            }
        ),
        "spec": spec_doc,
        "status": _drop_empty(
            {
                "conditions": [
                    _drop_empty(
                        {
                            "type": c.type,
                            "status": c.status,
                            "reason": c.reason,
                            "message": c.message,
                        }
                    )
                    for c in binding.status.conditions
                ]
            }
        ),
    }


def binding_to_unstructured(binding: Binding) -> UnstructuredObject:
    """
    Convert a Binding into a JSON-safe dict.

    Raises:
        ConversionError: If the binding is malformed or holds values that
                         cannot be represented as JSON (for example in
                         parameters).
    """
    name = getattr(binding, "name", None)
    try:
        return json.loads(json.dumps(_build_doc(binding)))
    except (AttributeError, TypeError, ValueError) as exc:
        raise ConversionError(f"Binding {name!r} is not serializable: {exc}") from exc


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConversionError(f"{what} must be an object, got {type(value).__name__}")
    return value


def _str(value: Any) -> str:
    """Read an optional string field. JSON null reads as empty."""
    return "" if value is None else str(value)


def unstructured_to_binding(obj: Any) -> Binding:
    """
    Convert an unstructured object back into a Binding.

    Raises:
        ConversionError: If the object does not have the shape of a binding.
    """
    root = _mapping(obj, "object")
    metadata = _mapping(root.get("metadata"), "metadata")
    spec = _mapping(root.get("spec"), "spec")
    status = _mapping(root.get("status"), "status")
    instance_ref = _mapping(spec.get("instanceRef"), "spec.instanceRef")

    name = metadata.get("name")
    if not isinstance(name, str) or not name:
        raise ConversionError("metadata.name is missing")

    try:
        conditions = [
            BindingCondition(
                type=str(c["type"]),
                status=str(c["status"]),
                reason=_str(c.get("reason")),
                message=_str(c.get("message")),
            )
            for c in status.get("conditions") or []
        ]
        parameters = spec.get("parameters")
        return Binding(
            name=name,
            namespace=_str(metadata.get("namespace")),
            uid=_str(metadata.get("uid")),
            resource_version=_str(metadata.get("resourceVersion")),
            labels={str(k): str(v) for k, v in _mapping(metadata.get("labels"), "labels").items()},
            kind=_str(root.get("kind")),
            api_version=_str(root.get("apiVersion")),
            spec=BindingSpec(
                instance_ref=ObjectReference(
                    name=_str(instance_ref.get("name")),
                    namespace=_str(instance_ref.get("namespace")),
                ),
                parameters=dict(_mapping(parameters, "spec.parameters")) if parameters is not None else None,
                secret_name=_str(spec.get("secretName")),
                os_binding_id=_str(spec.get("osbGuid")),
            ),
            status=BindingStatus(conditions=conditions),
        )
    except (KeyError, TypeError, AttributeError) as exc:
        raise ConversionError(f"Failed to convert object {name!r}: {exc}") from exc
