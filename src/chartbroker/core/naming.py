"""Deterministic cluster resource names.

Broker ids are UUID-like strings; cluster resource names must be short and
DNS-safe. Names are derived by dropping hyphens and applying a per-kind
prefix, so the same id always yields the same name.
"""

from __future__ import annotations

from enum import Enum


class ResourceKind(str, Enum):
    """Kinds of cluster resources this broker names."""

    SERVICE_INSTANCE = "instance"
    SERVICE_BINDING = "binding"


_NAME_TEMPLATES: dict[ResourceKind, str] = {
    ResourceKind.SERVICE_INSTANCE: "cf-i-%s",
    ResourceKind.SERVICE_BINDING: "cf-b-%s",
}


def resource_name(resource_id: str, kind: ResourceKind) -> str:
    """
    Convert a broker id into a resource name.

    Ids that only differ in hyphen placement map to the same name.
    An unknown kind yields an empty string; callers validate kind first.
    """
    template = _NAME_TEMPLATES.get(kind)
    if template is None:
        return ""
    return template % resource_id.replace("-", "")
