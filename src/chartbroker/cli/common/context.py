"""Application context management for the CLI."""

from dataclasses import dataclass

from chartbroker.cli.common.exits import exit_from_exc
from chartbroker.core.adapters.http import HttpFetcher
from chartbroker.core.adapters.registry import RegistryClient
from chartbroker.core.config import BrokerSettings, load_settings
from chartbroker.core.errors import ConfigError


@dataclass
class BrokerAppContext:
    """Application context holding settings, the HTTP fetcher and the registry client."""

    settings: BrokerSettings
    fetcher: HttpFetcher
    registry: RegistryClient


def build_context(host: str | None, port: int | None) -> BrokerAppContext:
    """Build and return the application context.

    Args:
        host: Optional registry host overriding the environment.
        port: Optional registry port overriding the environment.

    Returns:
        BrokerAppContext: Application context with configured adapters.
    """
    try:
        settings = load_settings(host=host, port=port)
    except ConfigError as exc:
        exit_from_exc(exc)
    fetcher = HttpFetcher(timeout=settings.http_timeout)
    registry = RegistryClient(settings.registry_host, settings.registry_port, fetcher)
    return BrokerAppContext(settings=settings, fetcher=fetcher, registry=registry)
