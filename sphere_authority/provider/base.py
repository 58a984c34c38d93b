# sphere_authority/provider/base.py

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Mapping, Optional

from sphere_authority.metadata.meta_data import ShardingSphereMetaData
from sphere_authority.model.privileges import ShardingSpherePrivileges
from sphere_authority.model.user import Grantee, ShardingSphereUser


class AuthorityProvider(ABC):
    """
    Answers "which privileges does this grantee hold?".

    ``initialize`` must run before the first lookup; ``refresh`` replaces
    everything the provider knows in one step.  ``find_privileges`` only
    reads what the last successful load produced.
    """

    TYPE: str = ""

    def __init__(self, props: Optional[Dict[str, str]] = None):
        self.props: Dict[str, str] = dict(props or {})

    @property
    def type(self) -> str:
        return self.TYPE

    @abstractmethod
    def initialize(
        self,
        meta_data_map: Mapping[str, ShardingSphereMetaData],
        users: Iterable[ShardingSphereUser],
    ) -> None:
        ...

    @abstractmethod
    def refresh(
        self,
        meta_data_map: Mapping[str, ShardingSphereMetaData],
        users: Iterable[ShardingSphereUser],
    ) -> None:
        ...

    @abstractmethod
    def find_privileges(self, grantee: Grantee) -> Optional[ShardingSpherePrivileges]:
        ...
