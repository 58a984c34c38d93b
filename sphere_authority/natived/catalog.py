# sphere_authority/natived/catalog.py
"""
Privilege catalogs of the backing databases and how to decode them.

A catalog is three queries, one per privilege scope:

* global  – one row per grantee, one ``*_priv`` flag column per privilege
* schema  – one row per (grantee, schema), flag columns again
* table   – one row per (grantee, schema, table), privileges as a list

Each decode function turns a result frame into ``PrivilegeRecord`` rows
using a fixed (column name, PrivilegeType) table.  Column names are
matched case-insensitively.  A missing column or a value that cannot be
interpreted raises ``PrivilegeDecodeError``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from sphere_authority.exceptions import PrivilegeDecodeError
from sphere_authority.model.privilege_type import PrivilegeType
from sphere_authority.model.privileges import ShardingSpherePrivileges
from sphere_authority.model.user import Grantee

USER_COLUMN = "User"
HOST_COLUMN = "Host"
SCHEMA_COLUMN = "Db"
TABLE_COLUMN = "Table_name"
TABLE_PRIVILEGE_COLUMN = "Table_priv"

GLOBAL_PRIVILEGE_COLUMNS: Tuple[Tuple[str, PrivilegeType], ...] = (
    ("Super_priv", PrivilegeType.SUPER),
    ("Reload_priv", PrivilegeType.RELOAD),
    ("Shutdown_priv", PrivilegeType.SHUTDOWN),
    ("Process_priv", PrivilegeType.PROCESS),
    ("File_priv", PrivilegeType.FILE),
    ("Show_db_priv", PrivilegeType.SHOW_DATABASES),
    ("Repl_slave_priv", PrivilegeType.REPLICATION_SLAVE),
    ("Repl_client_priv", PrivilegeType.REPLICATION_CLIENT),
    ("Create_user_priv", PrivilegeType.CREATE_USER),
    ("Create_tablespace_priv", PrivilegeType.CREATE_TABLESPACE),
    ("Select_priv", PrivilegeType.SELECT),
    ("Insert_priv", PrivilegeType.INSERT),
    ("Update_priv", PrivilegeType.UPDATE),
    ("Delete_priv", PrivilegeType.DELETE),
    ("Create_priv", PrivilegeType.CREATE),
    ("Alter_priv", PrivilegeType.ALTER),
    ("Drop_priv", PrivilegeType.DROP),
    ("Grant_priv", PrivilegeType.GRANT),
    ("Index_priv", PrivilegeType.INDEX),
    ("References_priv", PrivilegeType.REFERENCES),
    ("Create_tmp_table_priv", PrivilegeType.CREATE_TEMPORARY_TABLES),
    ("Lock_tables_priv", PrivilegeType.LOCK_TABLES),
    ("Execute_priv", PrivilegeType.EXECUTE),
    ("Create_view_priv", PrivilegeType.CREATE_VIEW),
    ("Show_view_priv", PrivilegeType.SHOW_VIEW),
    ("Create_routine_priv", PrivilegeType.CREATE_ROUTINE),
    ("Alter_routine_priv", PrivilegeType.ALTER_ROUTINE),
    ("Event_priv", PrivilegeType.EVENT),
    ("Trigger_priv", PrivilegeType.TRIGGER),
)

SCHEMA_PRIVILEGE_COLUMNS: Tuple[Tuple[str, PrivilegeType], ...] = (
    ("Select_priv", PrivilegeType.SELECT),
    ("Insert_priv", PrivilegeType.INSERT),
    ("Update_priv", PrivilegeType.UPDATE),
    ("Delete_priv", PrivilegeType.DELETE),
    ("Create_priv", PrivilegeType.CREATE),
    ("Alter_priv", PrivilegeType.ALTER),
    ("Drop_priv", PrivilegeType.DROP),
    ("Grant_priv", PrivilegeType.GRANT),
    ("Index_priv", PrivilegeType.INDEX),
    ("References_priv", PrivilegeType.REFERENCES),
    ("Create_tmp_table_priv", PrivilegeType.CREATE_TEMPORARY_TABLES),
    ("Lock_tables_priv", PrivilegeType.LOCK_TABLES),
    ("Execute_priv", PrivilegeType.EXECUTE),
    ("Create_view_priv", PrivilegeType.CREATE_VIEW),
    ("Show_view_priv", PrivilegeType.SHOW_VIEW),
    ("Create_routine_priv", PrivilegeType.CREATE_ROUTINE),
    ("Alter_routine_priv", PrivilegeType.ALTER_ROUTINE),
    ("Event_priv", PrivilegeType.EVENT),
    ("Trigger_priv", PrivilegeType.TRIGGER),
)

# Members of the mysql.tables_priv.Table_priv SET, lower-cased.
TABLE_PRIVILEGE_NAMES: Dict[str, PrivilegeType] = {
    "select": PrivilegeType.SELECT,
    "insert": PrivilegeType.INSERT,
    "update": PrivilegeType.UPDATE,
    "delete": PrivilegeType.DELETE,
    "create": PrivilegeType.CREATE,
    "drop": PrivilegeType.DROP,
    "grant": PrivilegeType.GRANT,
    "references": PrivilegeType.REFERENCES,
    "index": PrivilegeType.INDEX,
    "alter": PrivilegeType.ALTER,
    "create view": PrivilegeType.CREATE_VIEW,
    "show view": PrivilegeType.SHOW_VIEW,
    "trigger": PrivilegeType.TRIGGER,
}

# MariaDB-only Table_priv members with no PrivilegeType counterpart.
MARIADB_IGNORED_TABLE_PRIVILEGES: FrozenSet[str] = frozenset({
    "delete versioning rows",
})

_TRUE_FLAGS = ("y", "yes", "true", "t", "1")
_FALSE_FLAGS = ("n", "no", "false", "f", "0")


@dataclass(frozen=True)
class PrivilegeRecord:
    """
    Privileges one catalog row grants to one grantee.

    ``schema``/``table`` select the scope: both ``None`` is global,
    ``table`` ``None`` is schema scope, otherwise table scope.
    """
    grantee: Grantee
    privileges: FrozenSet[PrivilegeType]
    schema: Optional[str] = None
    table: Optional[str] = None

    @property
    def scope(self) -> str:
        if self.schema is None:
            return "global"
        if self.table is None:
            return "schema"
        return "table"

    def apply_to(self, target: ShardingSpherePrivileges) -> None:
        if self.schema is None:
            target.add_global_privileges(self.privileges)
        elif self.table is None:
            target.add_schema_privileges(self.schema, self.privileges)
        else:
            target.add_table_privileges(self.schema, self.table, self.privileges)


# =========================================================
# Value helpers
# =========================================================

def _resolve_columns(frame: pd.DataFrame, required: Sequence[str]) -> Dict[str, Any]:
    """Map each required column name to the frame's actual (case-insensitive) column label."""
    by_lower = {str(col).lower(): col for col in frame.columns}
    resolved: Dict[str, Any] = {}
    missing: List[str] = []
    for name in required:
        actual = by_lower.get(name.lower())
        if actual is None:
            missing.append(name)
        else:
            resolved[name] = actual
    if missing:
        raise PrivilegeDecodeError(f"Missing catalog column(s): {', '.join(missing)}")
    return resolved


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def to_flag(value: Any, column: str) -> bool:
    """Interpret a privilege flag cell (``Y``/``N``, bool, 0/1)."""
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, bytes):
        value = value.decode("utf-8")
    if isinstance(value, (int, np.integer)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE_FLAGS:
            return True
        if v in _FALSE_FLAGS:
            return False
    raise PrivilegeDecodeError(f"Cannot interpret {value!r} in column {column} as a privilege flag")


def to_text(value: Any, column: str) -> str:
    if isinstance(value, bytes):
        value = value.decode("utf-8")
    if _is_missing(value) or not isinstance(value, str):
        raise PrivilegeDecodeError(f"Expected text in column {column}, got {value!r}")
    return value


def parse_privilege_list(value: Any, ignored: FrozenSet[str] = frozenset()) -> FrozenSet[PrivilegeType]:
    """
    Interpret a table privilege list: either a comma-delimited string
    (``"Select,Insert"``) or a sequence of names (``["Select"]``).
    Names in *ignored* (lower-cased) are skipped, anything else unknown
    raises.
    """
    if isinstance(value, bytes):
        value = value.decode("utf-8")
    if _is_missing(value):
        return frozenset()
    if isinstance(value, str):
        names = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset, np.ndarray)):
        names = [n.decode("utf-8") if isinstance(n, bytes) else n for n in value]
    else:
        raise PrivilegeDecodeError(f"Cannot interpret {value!r} as a table privilege list")

    result = set()
    for name in names:
        if not isinstance(name, str):
            raise PrivilegeDecodeError(f"Unknown table privilege {name!r}")
        key = name.strip().lower()
        if not key or key in ignored:
            continue
        privilege = TABLE_PRIVILEGE_NAMES.get(key)
        if privilege is None:
            raise PrivilegeDecodeError(f"Unknown table privilege {name!r}")
        result.add(privilege)
    return frozenset(result)


def _grantee(row: Dict[str, Any], columns: Dict[str, Any]) -> Grantee:
    username = to_text(row[columns[USER_COLUMN]], USER_COLUMN)
    hostname = to_text(row[columns[HOST_COLUMN]], HOST_COLUMN)
    try:
        return Grantee(username, hostname)
    except ValueError as e:
        raise PrivilegeDecodeError(f"Invalid grantee {username!r}@{hostname!r}: {e}") from e


def _flags(row: Dict[str, Any], columns: Dict[str, Any], table: Sequence[Tuple[str, PrivilegeType]]) -> FrozenSet[PrivilegeType]:
    return frozenset(
        privilege for name, privilege in table if to_flag(row[columns[name]], name)
    )


# =========================================================
# Decoders
# =========================================================

def decode_global_privileges(frame: pd.DataFrame) -> List[PrivilegeRecord]:
    columns = _resolve_columns(frame, [USER_COLUMN, HOST_COLUMN] + [c for c, _ in GLOBAL_PRIVILEGE_COLUMNS])
    return [
        PrivilegeRecord(_grantee(row, columns), _flags(row, columns, GLOBAL_PRIVILEGE_COLUMNS))
        for row in frame.to_dict(orient="records")
    ]


def decode_schema_privileges(frame: pd.DataFrame) -> List[PrivilegeRecord]:
    columns = _resolve_columns(
        frame, [USER_COLUMN, HOST_COLUMN, SCHEMA_COLUMN] + [c for c, _ in SCHEMA_PRIVILEGE_COLUMNS]
    )
    return [
        PrivilegeRecord(
            _grantee(row, columns),
            _flags(row, columns, SCHEMA_PRIVILEGE_COLUMNS),
            schema=to_text(row[columns[SCHEMA_COLUMN]], SCHEMA_COLUMN),
        )
        for row in frame.to_dict(orient="records")
    ]


def decode_table_privileges(
    frame: pd.DataFrame, ignored: FrozenSet[str] = frozenset()
) -> List[PrivilegeRecord]:
    columns = _resolve_columns(
        frame, [USER_COLUMN, HOST_COLUMN, SCHEMA_COLUMN, TABLE_COLUMN, TABLE_PRIVILEGE_COLUMN]
    )
    return [
        PrivilegeRecord(
            _grantee(row, columns),
            parse_privilege_list(row[columns[TABLE_PRIVILEGE_COLUMN]], ignored),
            schema=to_text(row[columns[SCHEMA_COLUMN]], SCHEMA_COLUMN),
            table=to_text(row[columns[TABLE_COLUMN]], TABLE_COLUMN),
        )
        for row in frame.to_dict(orient="records")
    ]


def decode_mariadb_table_privileges(frame: pd.DataFrame) -> List[PrivilegeRecord]:
    return decode_table_privileges(frame, MARIADB_IGNORED_TABLE_PRIVILEGES)


# =========================================================
# Catalog definitions
# =========================================================

@dataclass(frozen=True)
class CatalogQuery:
    name: str
    template: str
    decode: Callable[[pd.DataFrame], List[PrivilegeRecord]]

    def render(self, predicate: str) -> str:
        return self.template.format(predicate=predicate)


@dataclass(frozen=True)
class PrivilegeCatalog:
    dialect: str
    queries: Tuple[CatalogQuery, ...]


def _grant_table_catalog(
    dialect: str, decode_table: Callable[[pd.DataFrame], List[PrivilegeRecord]]
) -> PrivilegeCatalog:
    return PrivilegeCatalog(
        dialect=dialect,
        queries=(
            CatalogQuery(
                "global",
                "SELECT * FROM mysql.user WHERE (user, host) IN ({predicate})",
                decode_global_privileges,
            ),
            CatalogQuery(
                "schema",
                "SELECT * FROM mysql.db WHERE (user, host) IN ({predicate})",
                decode_schema_privileges,
            ),
            # User and Host are selected too so each row can be attributed.
            CatalogQuery(
                "table",
                "SELECT User, Host, Db, Table_name, Table_priv FROM mysql.tables_priv WHERE (user, host) IN ({predicate})",
                decode_table,
            ),
        ),
    )


MYSQL_CATALOG = _grant_table_catalog("mysql", decode_table_privileges)
MARIADB_CATALOG = _grant_table_catalog("mariadb", decode_mariadb_table_privileges)

CATALOGS: Dict[str, PrivilegeCatalog] = {
    "mysql": MYSQL_CATALOG,
    "mariadb": MARIADB_CATALOG,
}


def find_catalog(database_type: str) -> Optional[PrivilegeCatalog]:
    return CATALOGS.get((database_type or "").lower())
