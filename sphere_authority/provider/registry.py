# sphere_authority/provider/registry.py

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from sphere_authority.config.defaults import default, logger
from sphere_authority.provider.base import AuthorityProvider

ProviderFactory = Callable[[Optional[Dict[str, str]]], AuthorityProvider]


class AuthorityProviderRegistry:
    """Maps a provider type string (``"NATIVE"``, …) to the factory that builds it."""

    def __init__(self):
        self._factories: Dict[str, ProviderFactory] = {}

    @staticmethod
    def _key(provider_type: str) -> str:
        return (provider_type or "").strip().upper()

    def register(self, provider_type: str, factory: ProviderFactory) -> None:
        """
        Register *factory* under *provider_type*.

        Raises:
            ValueError: If the type is empty or already registered.
        """
        key = self._key(provider_type)
        if not key:
            raise ValueError("Provider type must not be empty")
        if key in self._factories:
            raise ValueError(f"Authority provider '{key}' is already registered")
        self._factories[key] = factory
        logger.debug(f"[authority] Registered provider: {key}")

    def unregister(self, provider_type: str) -> None:
        self._factories.pop(self._key(provider_type), None)

    def has(self, provider_type: str) -> bool:
        return self._key(provider_type) in self._factories

    def types(self) -> List[str]:
        return sorted(self._factories)

    def create(self, provider_type: Optional[str] = None, props: Optional[Dict[str, str]] = None) -> AuthorityProvider:
        """
        Build the provider registered under *provider_type*
        (``default.AUTHORITY_PROVIDER_TYPE`` when omitted).

        Raises:
            ValueError: If no provider is registered under that type.
        """
        key = self._key(provider_type or default.AUTHORITY_PROVIDER_TYPE)
        factory = self._factories.get(key)
        if factory is None:
            raise ValueError(
                f"Unknown authority provider type: {key} (available: {', '.join(self.types()) or 'none'})"
            )
        return factory(props)


def _default_registry() -> AuthorityProviderRegistry:
    from sphere_authority.natived.provider import NativeAuthorityProvider
    from sphere_authority.provider.permitted import (
        AllPrivilegesPermittedProvider,
        SchemaPrivilegesPermittedProvider,
    )

    registry = AuthorityProviderRegistry()
    for provider_class in (
        NativeAuthorityProvider,
        AllPrivilegesPermittedProvider,
        SchemaPrivilegesPermittedProvider,
    ):
        registry.register(provider_class.TYPE, provider_class)
    return registry


# Singleton instance
ProviderRegistry = _default_registry()
