# sphere_authority/provider/permitted.py

from __future__ import annotations

from abc import abstractmethod
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Set

from sphere_authority.config.defaults import logger
from sphere_authority.metadata.meta_data import ShardingSphereMetaData
from sphere_authority.model.privilege_type import DATA_PRIVILEGES
from sphere_authority.model.privileges import ShardingSpherePrivileges
from sphere_authority.model.user import Grantee, ShardingSphereUser
from sphere_authority.provider.base import AuthorityProvider

USER_SCHEMA_MAPPINGS_KEY = "user-schema-mappings"


class _ConfiguredUsersProvider(AuthorityProvider):
    """Privileges derived from configuration alone; no database is queried."""

    def __init__(self, props: Optional[Dict[str, str]] = None):
        super().__init__(props)
        self._privileges: Mapping[Grantee, ShardingSpherePrivileges] = MappingProxyType({})

    @abstractmethod
    def _build(self, grantee: Grantee) -> ShardingSpherePrivileges:
        ...

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
        result = {}
        for user in users:
            result[user.grantee] = self._build(user.grantee).freeze()
        self._privileges = MappingProxyType(result)

    def find_privileges(self, grantee: Grantee) -> Optional[ShardingSpherePrivileges]:
        return self._privileges.get(grantee)


class AllPrivilegesPermittedProvider(_ConfiguredUsersProvider):
    """Every configured user may do anything."""

    TYPE = "ALL_PRIVILEGES_PERMITTED"

    def _build(self, grantee: Grantee) -> ShardingSpherePrivileges:
        privileges = ShardingSpherePrivileges()
        privileges.set_super_privilege()
        return privileges


def parse_user_schema_mappings(text: str) -> Dict[Grantee, Set[str]]:
    """
    Parse ``root@localhost=sharding_db, user1@=test_db, user1@=test_db2``
    into ``{Grantee: {schema, …}}``.
    """
    result: Dict[Grantee, Set[str]] = {}
    for entry in (text or "").split(","):
        entry = entry.strip()
        if not entry:
            continue
        identity, sep, schema = entry.partition("=")
        if not sep or not identity.strip() or not schema.strip():
            raise ValueError(f"Invalid {USER_SCHEMA_MAPPINGS_KEY} entry: {entry!r}")
        result.setdefault(Grantee.parse(identity), set()).add(schema.strip())
    return result


class SchemaPrivilegesPermittedProvider(_ConfiguredUsersProvider):
    """Each configured user may do anything inside the schemas mapped to it."""

    TYPE = "SCHEMA_PRIVILEGES_PERMITTED"

    def __init__(self, props: Optional[Dict[str, str]] = None):
        super().__init__(props)
        self.user_schemas = parse_user_schema_mappings(self.props.get(USER_SCHEMA_MAPPINGS_KEY, ""))
        if not self.user_schemas:
            logger.warning(f"[authority] {self.TYPE} configured without {USER_SCHEMA_MAPPINGS_KEY}")

    def _build(self, grantee: Grantee) -> ShardingSpherePrivileges:
        privileges = ShardingSpherePrivileges()
        for schema in self.user_schemas.get(grantee, ()):
            privileges.add_schema_privileges(schema, DATA_PRIVILEGES)
        return privileges
