# sphere_authority/__init__.py

from sphere_authority.model import Grantee, PrivilegeType, ShardingSpherePrivileges, ShardingSphereUser  # noqa: F401
from sphere_authority.natived import NativeAuthorityProvider  # noqa: F401
from sphere_authority.provider.registry import AuthorityProviderRegistry, ProviderRegistry  # noqa: F401
from sphere_authority.refresher import AuthorityRefresher  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "Grantee",
    "PrivilegeType",
    "ShardingSpherePrivileges",
    "ShardingSphereUser",
    "NativeAuthorityProvider",
    "AuthorityProviderRegistry",
    "ProviderRegistry",
    "AuthorityRefresher",
]
