"""Error taxonomy for the broker core.

Every failure raised by the core derives from BrokerError so that frontends
(the broker transport, the CLI, tests) can catch the whole family at once
while still telling the individual causes apart.
"""

from __future__ import annotations


class BrokerError(RuntimeError):
    """Base class for all broker core failures."""


class ConfigError(BrokerError):
    """Raised when broker settings cannot be resolved."""


class NotFoundError(BrokerError):
    """Raised when a service, plan or plan type cannot be found."""


class InvalidLocatorError(BrokerError):
    """Raised when an artifact locator does not use a supported scheme."""


class FetchError(BrokerError):
    """Raised when a registry, schema or chart fetch fails."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ConversionError(BrokerError):
    """Raised when a binding cannot be translated to or from its stored form."""


class StoreError(BrokerError):
    """Raised when the cluster object store rejects a call."""


class DelegateError(BrokerError):
    """Raised when the provisioning delegate fails."""


class UnsupportedOperationError(BrokerError, NotImplementedError):
    """Raised by operations that are declared but permanently unsupported."""
