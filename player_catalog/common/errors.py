"""Exception hierarchy shared by the query and synchronization layers."""

from __future__ import annotations


class PlayerCatalogError(Exception):
    """Base error for the player catalog."""


class StorageNotInitializedError(PlayerCatalogError):
    """Raised when the database pool is used before initialize()."""


class ProviderError(PlayerCatalogError):
    """Base error for failures of the external player provider."""


class ProviderUnavailableError(ProviderError):
    """Raised when the provider cannot be reached or answers with an HTTP error."""

    def __init__(self, message: str, *, url: str | None = None, status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class ProviderDataError(ProviderError):
    """Raised when the provider answers without the data a sync run depends on."""
