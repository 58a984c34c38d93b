# sphere_authority/natived/tests/test_catalog.py

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from sphere_authority.exceptions import PrivilegeDecodeError
from sphere_authority.model.privilege_type import PrivilegeType
from sphere_authority.model.privileges import ShardingSpherePrivileges
from sphere_authority.model.user import Grantee
from sphere_authority.natived.catalog import (
    MARIADB_CATALOG,
    MYSQL_CATALOG,
    PrivilegeRecord,
    decode_global_privileges,
    decode_mariadb_table_privileges,
    decode_schema_privileges,
    decode_table_privileges,
    find_catalog,
    parse_privilege_list,
    to_flag,
)
from sphere_authority.natived.tests.catalog_fixtures import (
    ROOT_GRANTED,
    global_frame,
    global_row,
    schema_frame,
    schema_row,
    table_frame,
    table_row,
)

ROOT = Grantee("root", "localhost")
MYSQL_SYS = Grantee("mysql.sys", "localhost")


# ═══════════════════════════════════════════════════════════
#  Value helpers
# ═══════════════════════════════════════════════════════════


class TestToFlag:

    @pytest.mark.parametrize("value", ["Y", "y", " Y ", "true", "1", True, 1, np.bool_(True), np.int64(1), b"Y"])
    def test_true(self, value):
        assert to_flag(value, "Select_priv") is True

    @pytest.mark.parametrize("value", ["N", "n", "false", "0", False, 0, np.bool_(False), b"N"])
    def test_false(self, value):
        assert to_flag(value, "Select_priv") is False

    @pytest.mark.parametrize("value", [None, float("nan"), "maybe", 2, ""])
    def test_uninterpretable(self, value):
        with pytest.raises(PrivilegeDecodeError, match="Select_priv"):
            to_flag(value, "Select_priv")


class TestParsePrivilegeList:

    def test_delimited_string(self):
        assert parse_privilege_list("Select,Insert,Create View") == {
            PrivilegeType.SELECT, PrivilegeType.INSERT, PrivilegeType.CREATE_VIEW,
        }

    def test_sequence(self):
        assert parse_privilege_list(["Select"]) == {PrivilegeType.SELECT}
        assert parse_privilege_list(("Show view", "Trigger")) == {PrivilegeType.SHOW_VIEW, PrivilegeType.TRIGGER}
        assert parse_privilege_list(np.array(["Drop", "Grant"])) == {PrivilegeType.DROP, PrivilegeType.GRANT}

    def test_empty(self):
        assert parse_privilege_list("") == frozenset()
        assert parse_privilege_list(None) == frozenset()
        assert parse_privilege_list([]) == frozenset()

    def test_unknown_name(self):
        with pytest.raises(PrivilegeDecodeError, match="Frobnicate"):
            parse_privilege_list("Select,Frobnicate")

    def test_unsupported_value(self):
        with pytest.raises(PrivilegeDecodeError):
            parse_privilege_list(42)


# ═══════════════════════════════════════════════════════════
#  Decoders
# ═══════════════════════════════════════════════════════════


class TestDecodeGlobal:

    def test_flags_become_global_privileges(self):
        frame = global_frame(global_row("root", "localhost", *ROOT_GRANTED), global_row("mysql.sys", "localhost"))
        records = decode_global_privileges(frame)

        assert [r.grantee for r in records] == [ROOT, MYSQL_SYS]
        assert records[0].scope == "global"
        assert records[0].privileges == {
            PrivilegeType.SUPER, PrivilegeType.SELECT, PrivilegeType.INSERT, PrivilegeType.UPDATE,
            PrivilegeType.CREATE, PrivilegeType.ALTER, PrivilegeType.RELOAD, PrivilegeType.SHUTDOWN,
        }
        assert records[1].privileges == frozenset()

    def test_column_lookup_is_case_insensitive(self):
        frame = global_frame(global_row("root", "localhost", "Drop_priv"))
        frame.columns = [c.lower() for c in frame.columns]
        records = decode_global_privileges(frame)
        assert records[0].grantee == ROOT
        assert records[0].privileges == {PrivilegeType.DROP}

    def test_boolean_columns(self):
        frame = global_frame(global_row("root", "localhost", "Super_priv"))
        for column in frame.columns[2:]:
            frame[column] = frame[column] == "Y"
        assert decode_global_privileges(frame)[0].privileges == {PrivilegeType.SUPER}

    def test_missing_flag_column(self):
        frame = global_frame(global_row("root")).drop(columns=["Trigger_priv"])
        with pytest.raises(PrivilegeDecodeError, match="Trigger_priv"):
            decode_global_privileges(frame)

    def test_missing_user_column(self):
        frame = global_frame(global_row("root")).drop(columns=["User"])
        with pytest.raises(PrivilegeDecodeError, match="User"):
            decode_global_privileges(frame)

    def test_bad_flag_value(self):
        row = global_row("root")
        row["Super_priv"] = "X"
        with pytest.raises(PrivilegeDecodeError, match="Super_priv"):
            decode_global_privileges(global_frame(row))

    def test_anonymous_user_is_a_decode_failure(self):
        with pytest.raises(PrivilegeDecodeError):
            decode_global_privileges(global_frame(global_row("", "localhost")))

    def test_no_rows(self):
        assert decode_global_privileges(global_frame()) == []


class TestDecodeSchema:

    def test_schema_scoped(self):
        records = decode_schema_privileges(schema_frame(schema_row("mysql.sys", "localhost", "sys", "Trigger_priv")))
        assert records == [PrivilegeRecord(MYSQL_SYS, frozenset({PrivilegeType.TRIGGER}), schema="sys")]
        assert records[0].scope == "schema"

    def test_missing_db_column(self):
        frame = schema_frame(schema_row("root", "localhost", "sys")).drop(columns=["Db"])
        with pytest.raises(PrivilegeDecodeError, match="Db"):
            decode_schema_privileges(frame)

    def test_schema_name_must_be_text(self):
        row = schema_row("root", "localhost", "sys")
        row["Db"] = None
        with pytest.raises(PrivilegeDecodeError, match="Db"):
            decode_schema_privileges(schema_frame(row))


class TestDecodeTable:

    def test_table_scoped(self):
        records = decode_table_privileges(table_frame(table_row("mysql.sys", "localhost", "sys", "sys_config", "Select")))
        assert records == [
            PrivilegeRecord(MYSQL_SYS, frozenset({PrivilegeType.SELECT}), schema="sys", table="sys_config"),
        ]
        assert records[0].scope == "table"

    def test_array_value(self):
        frame = table_frame(table_row("root", "localhost", "sales", "orders", ["Select", "Insert"]))
        assert decode_table_privileges(frame)[0].privileges == {PrivilegeType.SELECT, PrivilegeType.INSERT}

    def test_unknown_privilege_name(self):
        frame = table_frame(table_row("root", "localhost", "sales", "orders", "Select,Super"))
        with pytest.raises(PrivilegeDecodeError, match="Super"):
            decode_table_privileges(frame)

    def test_missing_table_priv_column(self):
        frame = pd.DataFrame([{"User": "root", "Host": "localhost", "Db": "s", "Table_name": "t"}])
        with pytest.raises(PrivilegeDecodeError, match="Table_priv"):
            decode_table_privileges(frame)

    def test_mysql_rejects_versioning_rows(self):
        frame = table_frame(table_row("app", "%", "sales", "orders", "Select,Delete versioning rows"))
        with pytest.raises(PrivilegeDecodeError, match="Delete versioning rows"):
            decode_table_privileges(frame)

    def test_mariadb_skips_versioning_rows(self):
        frame = table_frame(table_row("app", "%", "sales", "orders", "Select,Delete versioning rows"))
        records = decode_mariadb_table_privileges(frame)
        assert records == [
            PrivilegeRecord(Grantee("app", "%"), frozenset({PrivilegeType.SELECT}), schema="sales", table="orders"),
        ]

    def test_mariadb_still_rejects_unknown_names(self):
        frame = table_frame(table_row("app", "%", "sales", "orders", "Select,Frobnicate"))
        with pytest.raises(PrivilegeDecodeError, match="Frobnicate"):
            decode_mariadb_table_privileges(frame)


class TestPrivilegeRecord:

    def test_apply_to_each_scope(self):
        target = ShardingSpherePrivileges()
        PrivilegeRecord(ROOT, frozenset({PrivilegeType.SUPER})).apply_to(target)
        PrivilegeRecord(ROOT, frozenset({PrivilegeType.INSERT}), schema="s").apply_to(target)
        PrivilegeRecord(ROOT, frozenset({PrivilegeType.DELETE}), schema="s", table="t").apply_to(target)
        assert target.global_privileges == {PrivilegeType.SUPER}
        assert target.schema_privileges == {"s": {PrivilegeType.INSERT}}
        assert target.table_privileges == {("s", "t"): {PrivilegeType.DELETE}}


# ═══════════════════════════════════════════════════════════
#  Catalog definitions
# ═══════════════════════════════════════════════════════════


class TestMySQLCatalog:

    def test_query_shapes(self):
        predicate = "('root', 'localhost')"
        rendered = [q.render(predicate) for q in MYSQL_CATALOG.queries]
        assert rendered == [
            "SELECT * FROM mysql.user WHERE (user, host) IN (('root', 'localhost'))",
            "SELECT * FROM mysql.db WHERE (user, host) IN (('root', 'localhost'))",
            "SELECT User, Host, Db, Table_name, Table_priv FROM mysql.tables_priv "
            "WHERE (user, host) IN (('root', 'localhost'))",
        ]
        assert [q.name for q in MYSQL_CATALOG.queries] == ["global", "schema", "table"]

    def test_mariadb_shares_query_text(self):
        predicate = "('root', 'localhost')"
        assert [q.render(predicate) for q in MARIADB_CATALOG.queries] == [
            q.render(predicate) for q in MYSQL_CATALOG.queries
        ]
        assert MARIADB_CATALOG.queries[2].decode is decode_mariadb_table_privileges

    def test_find_catalog(self):
        assert find_catalog("mysql") is MYSQL_CATALOG
        assert find_catalog("MariaDB") is MARIADB_CATALOG
        assert find_catalog("postgresql") is None
        assert find_catalog("") is None
