# sphere_authority/natived/__init__.py
#
# NATIVE authority provider: loads privileges from the backing databases'
# grant tables (catalog decode, instance planning, aggregation, cache).

from sphere_authority.natived.aggregator import PrivilegeAggregator  # noqa: F401
from sphere_authority.natived.cache import PrivilegeCache  # noqa: F401
from sphere_authority.natived.provider import NativeAuthorityProvider  # noqa: F401

__all__ = [
    "PrivilegeAggregator",
    "PrivilegeCache",
    "NativeAuthorityProvider",
]
