"""Resolution of plan metadata into artifact types."""

from __future__ import annotations

from typing import Any, Mapping

from chartbroker.core.brokerapi import BINDING_TYPE, INSTANCE_TYPE, ServicePlan, Types
from chartbroker.core.errors import NotFoundError


def metadata_str(metadata: Mapping[str, Any] | None, key: str) -> str | None:
    """Return metadata[key] if present and a string, else None."""
    if not isinstance(metadata, Mapping):
        return None
    value = metadata.get(key)
    if not isinstance(value, str):
        return None
    return value


def resolve_types(plan: ServicePlan) -> Types:
    """
    Extract the instance and binding chart locators from a plan.

    A plan without a binding type is not bindable and resolves to
    Types with an empty binding.

    Raises:
        NotFoundError: If the plan has no metadata or no string-valued
                       instance type.
    """
    instance = metadata_str(plan.metadata, INSTANCE_TYPE)
    if instance is None:
        raise NotFoundError(f"Did not find usable types for plan {plan.id}")
    binding = metadata_str(plan.metadata, BINDING_TYPE)
    return Types(instance=instance, binding=binding or "")
