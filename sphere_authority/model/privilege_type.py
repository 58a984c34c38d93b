# sphere_authority/model/privilege_type.py

from enum import Enum, auto
from typing import FrozenSet


class PrivilegeType(Enum):
    # Global / administrative
    SUPER = auto()
    RELOAD = auto()
    SHUTDOWN = auto()
    PROCESS = auto()
    FILE = auto()
    SHOW_DATABASES = auto()
    REPLICATION_SLAVE = auto()
    REPLICATION_CLIENT = auto()
    CREATE_USER = auto()
    CREATE_TABLESPACE = auto()
    GRANT = auto()

    # Data / DDL, valid at global, schema and table scope
    SELECT = auto()
    INSERT = auto()
    UPDATE = auto()
    DELETE = auto()
    CREATE = auto()
    ALTER = auto()
    DROP = auto()
    INDEX = auto()
    REFERENCES = auto()
    CREATE_TEMPORARY_TABLES = auto()
    LOCK_TABLES = auto()
    EXECUTE = auto()
    CREATE_VIEW = auto()
    SHOW_VIEW = auto()
    CREATE_ROUTINE = auto()
    ALTER_ROUTINE = auto()
    EVENT = auto()
    TRIGGER = auto()


ADMINISTRATIVE_PRIVILEGES: FrozenSet[PrivilegeType] = frozenset({
    PrivilegeType.SUPER,
    PrivilegeType.RELOAD,
    PrivilegeType.SHUTDOWN,
    PrivilegeType.PROCESS,
    PrivilegeType.FILE,
    PrivilegeType.SHOW_DATABASES,
    PrivilegeType.REPLICATION_SLAVE,
    PrivilegeType.REPLICATION_CLIENT,
    PrivilegeType.CREATE_USER,
    PrivilegeType.CREATE_TABLESPACE,
    PrivilegeType.GRANT,
})

DATA_PRIVILEGES: FrozenSet[PrivilegeType] = frozenset(set(PrivilegeType) - ADMINISTRATIVE_PRIVILEGES)
