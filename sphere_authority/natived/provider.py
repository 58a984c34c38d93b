# sphere_authority/natived/provider.py

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional

from sphere_authority.config.defaults import logger
from sphere_authority.metadata.meta_data import ShardingSphereMetaData
from sphere_authority.model.privileges import ShardingSpherePrivileges
from sphere_authority.model.user import Grantee, ShardingSphereUser
from sphere_authority.natived.cache import PrivilegeCache
from sphere_authority.provider.base import AuthorityProvider


class NativeAuthorityProvider(AuthorityProvider):
    """Privileges as recorded in the backing databases' own grant tables."""

    TYPE = "NATIVE"

    def __init__(self, props: Optional[Dict[str, str]] = None, cache: Optional[PrivilegeCache] = None):
        super().__init__(props)
        self.cache = cache or PrivilegeCache()

    def initialize(
        self,
        meta_data_map: Mapping[str, ShardingSphereMetaData],
        users: Iterable[ShardingSphereUser],
    ) -> None:
        logger.info(f"[native] Initializing from {len(meta_data_map)} logical database(s)")
        self.cache.initialize(meta_data_map, users)

    def refresh(
        self,
        meta_data_map: Mapping[str, ShardingSphereMetaData],
        users: Iterable[ShardingSphereUser],
    ) -> None:
        self.cache.refresh(meta_data_map, users)

    def find_privileges(self, grantee: Grantee) -> Optional[ShardingSpherePrivileges]:
        return self.cache.find_privileges(grantee)
