# sphere_authority/provider/__init__.py
#
# Authority provider contract and the configuration-only providers.
# The type -> factory registry lives in sphere_authority.provider.registry.

from sphere_authority.provider.base import AuthorityProvider  # noqa: F401
from sphere_authority.provider.permitted import (  # noqa: F401
    AllPrivilegesPermittedProvider,
    SchemaPrivilegesPermittedProvider,
)

__all__ = [
    "AuthorityProvider",
    "AllPrivilegesPermittedProvider",
    "SchemaPrivilegesPermittedProvider",
]
