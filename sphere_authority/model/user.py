# sphere_authority/model/user.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from sphere_authority.config.defaults import default

WILDCARD_HOST = "%"


@dataclass(frozen=True)
class Grantee:
    """
    Identity a privilege set is looked up by: ``username`` plus originating
    ``hostname``.  An empty hostname stands for any host (``%``).  Host
    names compare without regard to case, as the grant tables do, so they
    are stored lower-cased.
    """
    username: str
    hostname: str = WILDCARD_HOST

    def __post_init__(self):
        if not self.username:
            raise ValueError("Grantee username must not be empty")
        object.__setattr__(self, "hostname", (self.hostname or WILDCARD_HOST).lower())

    @classmethod
    def parse(cls, text: str) -> "Grantee":
        """Parse ``user@host``; a missing host means ``%``."""
        username, _, hostname = text.strip().partition("@")
        return cls(username.strip(), hostname.strip())

    def __str__(self) -> str:
        return f"{self.username}@{self.hostname}"


@dataclass(frozen=True)
class ShardingSphereUser:
    grantee: Grantee
    password: str = field(default="", repr=False)

    @classmethod
    def of(cls, username: str, password: str = "", hostname: str = WILDCARD_HOST) -> "ShardingSphereUser":
        return cls(Grantee(username, hostname), password)

    @classmethod
    def from_config(cls, text: str) -> "ShardingSphereUser":
        """
        Build a user from its configuration form ``user@host:password``.

        * ``root@localhost:secret`` -> root, localhost, secret
        * ``root@:secret`` / ``root:secret`` -> root, ``%``, secret
        * ``root@localhost`` -> root, localhost, empty password
        """
        text = text.strip()
        if not text:
            raise ValueError("Empty user configuration")
        identity, _, password = text.partition(":")
        return cls(Grantee.parse(identity), password)


def configured_users(entries: Optional[Iterable[str]] = None) -> List[ShardingSphereUser]:
    """Users from ``user@host:password`` entries, ``default.USERS`` when omitted."""
    if entries is None:
        entries = default.USERS
    return [ShardingSphereUser.from_config(entry) for entry in entries if entry.strip()]
