"""Listing of supported cloud providers with their display names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from cloudinfo.core import CloudInfoError, CloudProvider

PROVIDER_NAMES = {
    "amazon": "Amazon Web Services",
    "google": "Google Cloud",
    "alibaba": "Alibaba Cloud",
    "oracle": "Oracle",
    "azure": "Microsoft Azure",
}


class ProviderStore(Protocol):
    """Retrieves providers."""

    def get_providers(self) -> list[CloudProvider]: ...


@dataclass(frozen=True)
class Provider:
    """A single cloud provider."""

    code: str
    name: str


class ProviderService:
    """Returns the list of supported providers and relevant information."""

    def __init__(self, store: ProviderStore) -> None:
        self.store = store

    def list_providers(self) -> list[Provider]:
        """Return the providers, named by their display names where known."""
        try:
            cloud_providers = self.store.get_providers()
        except Exception as err:
            raise CloudInfoError(f"failed to list providers: {err}") from err

        return [
            Provider(p.provider, PROVIDER_NAMES.get(p.provider, p.provider))
            for p in cloud_providers
        ]


class InMemoryProviderStore:
    """Keeps providers in memory; meant for tests and demos."""

    def __init__(self, providers: Optional[list[CloudProvider]] = None) -> None:
        self.providers = list(providers) if providers is not None else []

    def get_providers(self) -> list[CloudProvider]:
        return self.providers