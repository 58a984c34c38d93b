# sphere_authority/metadata/data_source.py

from __future__ import annotations

from typing import Any, Callable, Optional, Tuple
from urllib.parse import urlparse

import pandas as pd

from sphere_authority.config.defaults import logger

DEFAULT_PORTS = {
    "mysql": 3306,
    "mariadb": 3306,
    "postgresql": 5432,
    "opengauss": 5432,
}

_SCHEME_ALIASES = {
    "postgres": "postgresql",
}


def parse_url(url: str) -> Tuple[str, str, Optional[int]]:
    """
    Split a data source URL into ``(database_type, host, port)``.

    Accepts SQLAlchemy style (``mysql+pymysql://u:p@host:3306/db``) and
    JDBC style (``jdbc:mysql://host:3306/db``) URLs.
    """
    raw = url.strip()
    if raw.lower().startswith("jdbc:"):
        raw = raw[len("jdbc:"):]
    u = urlparse(raw)
    scheme = (u.scheme or "").lower().split("+", 1)[0]
    database_type = _SCHEME_ALIASES.get(scheme, scheme)
    host = (u.hostname or "").lower()
    return database_type, host, u.port or DEFAULT_PORTS.get(database_type)


class DataSource:
    """
    A physical database instance reachable through a DB-API 2.0 connection
    factory.  Each query opens a connection, runs, and closes it; pooling is
    left to whatever the factory hands out.
    """

    def __init__(self, url: str, connect: Callable[[], Any], name: Optional[str] = None):
        self.url = url
        self.name = name or url
        self._connect = connect
        self.database_type, self.host, self.port = parse_url(url)

    @property
    def instance_key(self) -> Tuple[str, Optional[int]]:
        """Identifies the physical instance behind this data source."""
        return self.host, self.port

    def execute_query(self, sql: str) -> pd.DataFrame:
        """Run *sql* and return the rows as a DataFrame with the cursor's column names."""
        logger.debug(f"[data-source] {self.name}: {sql}")
        connection = self._connect()
        try:
            cursor = connection.cursor()
            try:
                cursor.execute(sql)
                columns = [d[0] for d in (cursor.description or [])]
                rows = cursor.fetchall()
            finally:
                cursor.close()
        finally:
            connection.close()
        return pd.DataFrame.from_records(list(rows), columns=columns)

    def __repr__(self) -> str:
        return f"DataSource(name={self.name!r}, type={self.database_type!r}, instance={self.host}:{self.port})"
