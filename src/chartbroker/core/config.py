"""Broker settings.

Settings are resolved from explicit values first (for example CLI options),
then from CHARTBROKER_* environment variables, then from defaults. Small
normalization rules are applied so that the registry host can be given as
a bare host name or as a URL.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from chartbroker.core.errors import ConfigError

HOST_ENV = "CHARTBROKER_REGISTRY_HOST"
PORT_ENV = "CHARTBROKER_REGISTRY_PORT"
TIMEOUT_ENV = "CHARTBROKER_HTTP_TIMEOUT"
LOG_LEVEL_ENV = "CHARTBROKER_LOG_LEVEL"

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8080


@dataclass(frozen=True)
class BrokerSettings:
    """
    Resolved broker settings.

    Attributes:
        registry_host: Host name of the service registry.
        registry_port: TCP port of the service registry.
        http_timeout: Optional timeout in seconds for HTTP fetches. None
                      leaves timeouts to the transport.
    """

    registry_host: str = DEFAULT_HOST
    registry_port: int = DEFAULT_PORT
    http_timeout: float | None = None


def _sanitize_host(host: str) -> str:
    """
    Normalize a registry host.

    - Removes a scheme prefix (e.g. 'http://')
    - Removes paths, query strings and trailing slashes
    """
    host = host.strip()
    if "://" in host:
        host = host.split("://", 1)[1]
    host = host.split("?", 1)[0]
    return host.split("/", 1)[0]


def _parse_port(raw: str | int) -> int:
    try:
        port = int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid registry port: {raw!r}") from exc
    if not 0 < port < 65536:
        raise ConfigError(f"Registry port out of range: {port}")
    return port


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid HTTP timeout: {raw!r}") from exc
    if timeout <= 0:
        raise ConfigError(f"HTTP timeout must be > 0, got {timeout}")
    return timeout


def load_settings(
    host: str | None = None,
    port: int | None = None,
) -> BrokerSettings:
    """
    Build BrokerSettings from explicit values and the environment.

    Raises:
        ConfigError: If the port or timeout cannot be parsed, or the host
                     is empty after normalization.
    """
    raw_host = host or os.getenv(HOST_ENV) or DEFAULT_HOST
    clean_host = _sanitize_host(raw_host)
    if not clean_host:
        raise ConfigError(f"Invalid registry host: {raw_host!r}")

    raw_port = port if port is not None else os.getenv(PORT_ENV, DEFAULT_PORT)

    return BrokerSettings(
        registry_host=clean_host,
        registry_port=_parse_port(raw_port),
        http_timeout=_parse_timeout(os.getenv(TIMEOUT_ENV)),
    )
