# sphere_authority/model/__init__.py
#
# Privilege model: privilege types, grantees/users and the per-grantee
# privilege aggregate.

from sphere_authority.model.privilege_type import (  # noqa: F401
    ADMINISTRATIVE_PRIVILEGES,
    DATA_PRIVILEGES,
    PrivilegeType,
)
from sphere_authority.model.privileges import ShardingSpherePrivileges  # noqa: F401
from sphere_authority.model.user import Grantee, ShardingSphereUser  # noqa: F401

__all__ = [
    "ADMINISTRATIVE_PRIVILEGES",
    "DATA_PRIVILEGES",
    "PrivilegeType",
    "ShardingSpherePrivileges",
    "Grantee",
    "ShardingSphereUser",
]
