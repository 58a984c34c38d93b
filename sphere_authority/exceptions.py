# sphere_authority/exceptions.py
"""
Error taxonomy for privilege loading.

Anything raised while building a privilege mapping derives from
``PrivilegeLoadError`` and aborts the whole load pass; the cache keeps
whatever mapping it had before.
"""

from typing import Optional


class AuthorityError(Exception):
    """Base class for sphere_authority failures."""


class PrivilegeLoadError(AuthorityError):
    """A load pass could not produce a complete privilege mapping."""


class CatalogQueryError(PrivilegeLoadError):
    """A data source failed to run a catalog query."""

    def __init__(self, url: str, sql: str, reason: Optional[str] = None):
        self.url = url
        self.sql = sql
        message = f"Catalog query failed on {url}: {sql}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class PrivilegeDecodeError(PrivilegeLoadError):
    """A catalog row does not have the expected shape or values."""


class UnsupportedDatabaseError(PrivilegeLoadError):
    """No privilege catalog is known for a data source's database type."""

    def __init__(self, database_type: str, url: str):
        self.database_type = database_type
        self.url = url
        super().__init__(f"Unsupported database type '{database_type}' for privilege loading: {url}")
