# sphere_authority/natived/cache.py

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from sphere_authority.config.defaults import logger
from sphere_authority.metadata.meta_data import ShardingSphereMetaData
from sphere_authority.model.privileges import ShardingSpherePrivileges
from sphere_authority.model.user import Grantee, ShardingSphereUser
from sphere_authority.natived.aggregator import PrivilegeAggregator

_EMPTY: Mapping[Grantee, ShardingSpherePrivileges] = MappingProxyType({})


class PrivilegeCache:
    """
    Owns the authoritative grantee -> privileges mapping.

    A load builds a complete new dict off to the side and publishes it with
    a single attribute assignment; the published dict is never touched
    again.  Readers therefore see either the old or the new generation and
    need no lock.  Loads themselves are serialized.
    """

    def __init__(self, aggregator: Optional[PrivilegeAggregator] = None):
        self._aggregator = aggregator or PrivilegeAggregator()
        self._privileges: Mapping[Grantee, ShardingSpherePrivileges] = _EMPTY
        self._load_lock = threading.Lock()
        self._generation = 0

    def initialize(
        self,
        meta_data_map: Mapping[str, ShardingSphereMetaData],
        users: Iterable[ShardingSphereUser],
    ) -> None:
        self.refresh(meta_data_map, users)

    def refresh(
        self,
        meta_data_map: Mapping[str, ShardingSphereMetaData],
        users: Iterable[ShardingSphereUser],
    ) -> None:
        """
        Rebuild the mapping and swap it in.

        On failure the exception propagates and the current mapping stays
        in place.
        """
        users = list(users)
        with self._load_lock:
            candidate = self._aggregator.load(meta_data_map, users)
            self._privileges = MappingProxyType(candidate)
            self._generation += 1
            logger.info(
                f"[native] Privilege cache generation {self._generation}: {len(candidate)} grantee(s)"
            )

    def find_privileges(self, grantee: Grantee) -> Optional[ShardingSpherePrivileges]:
        return self._privileges.get(grantee)

    def snapshot(self) -> Mapping[Grantee, ShardingSpherePrivileges]:
        return self._privileges

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_initialized(self) -> bool:
        return self._generation > 0
