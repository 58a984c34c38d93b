# sphere_authority/model/privileges.py

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Mapping, Set, Tuple

from sphere_authority.model.privilege_type import PrivilegeType

TableKey = Tuple[str, str]


class ShardingSpherePrivileges:
    """
    Privileges held by one grantee, at three scopes.

    * global  – instance-wide, implies the same privilege everywhere.
    * schema  – ``{schema: {PrivilegeType, …}}``
    * table   – ``{(schema, table): {PrivilegeType, …}}``

    Instances are built up with the ``add_*`` / ``merge`` methods and then
    frozen; once frozen every mutator raises ``TypeError``.
    """

    def __init__(self):
        self._global: Set[PrivilegeType] = set()
        self._schema: Dict[str, Set[PrivilegeType]] = {}
        self._table: Dict[TableKey, Set[PrivilegeType]] = {}
        self._frozen = False

    # ── build ───────────────────────────────────────────────────────── #

    def _check_mutable(self) -> None:
        if self._frozen:
            raise TypeError("Privileges are frozen and cannot be modified")

    def add_global_privileges(self, privileges: Iterable[PrivilegeType]) -> None:
        self._check_mutable()
        self._global.update(privileges)

    def add_schema_privileges(self, schema: str, privileges: Iterable[PrivilegeType]) -> None:
        self._check_mutable()
        privileges = set(privileges)
        if privileges:
            self._schema.setdefault(schema, set()).update(privileges)

    def add_table_privileges(self, schema: str, table: str, privileges: Iterable[PrivilegeType]) -> None:
        self._check_mutable()
        privileges = set(privileges)
        if privileges:
            self._table.setdefault((schema, table), set()).update(privileges)

    def set_super_privilege(self) -> None:
        """Grant every privilege type at global scope."""
        self.add_global_privileges(PrivilegeType)

    def merge(self, other: "ShardingSpherePrivileges") -> None:
        """Union *other* into this aggregate; nothing already granted is removed."""
        self.add_global_privileges(other._global)
        for schema, privileges in other._schema.items():
            self.add_schema_privileges(schema, privileges)
        for (schema, table), privileges in other._table.items():
            self.add_table_privileges(schema, table, privileges)

    def freeze(self) -> "ShardingSpherePrivileges":
        if not self._frozen:
            self._global = frozenset(self._global)
            self._schema = {k: frozenset(v) for k, v in self._schema.items()}
            self._table = {k: frozenset(v) for k, v in self._table.items()}
            self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ── query ───────────────────────────────────────────────────────── #

    @property
    def global_privileges(self) -> FrozenSet[PrivilegeType]:
        return frozenset(self._global)

    @property
    def schema_privileges(self) -> Mapping[str, FrozenSet[PrivilegeType]]:
        return {k: frozenset(v) for k, v in self._schema.items()}

    @property
    def table_privileges(self) -> Mapping[TableKey, FrozenSet[PrivilegeType]]:
        return {k: frozenset(v) for k, v in self._table.items()}

    def is_empty(self) -> bool:
        return not (self._global or self._schema or self._table)

    def has_privileges(self, required: Iterable[PrivilegeType]) -> bool:
        """True iff every *required* type is granted globally."""
        return set(required) <= self._global

    def has_schema_privileges(self, schema: str, required: Iterable[PrivilegeType]) -> bool:
        """True iff every *required* type is granted globally or on *schema*."""
        missing = set(required) - self._global
        return missing <= self._schema.get(schema, frozenset())

    def has_table_privileges(self, schema: str, table: str, required: Iterable[PrivilegeType]) -> bool:
        """True iff every *required* type is granted globally, on *schema*, or on the table."""
        missing = set(required) - self._global - self._schema.get(schema, frozenset())
        return missing <= self._table.get((schema, table), frozenset())

    # ── value semantics ─────────────────────────────────────────────── #

    def __eq__(self, other) -> bool:
        if not isinstance(other, ShardingSpherePrivileges):
            return NotImplemented
        return (
            set(self._global) == set(other._global)
            and self.schema_privileges == other.schema_privileges
            and self.table_privileges == other.table_privileges
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"ShardingSpherePrivileges(global={sorted(p.name for p in self._global)}, "
            f"schemas={sorted(self._schema)}, tables={sorted(self._table)})"
        )
