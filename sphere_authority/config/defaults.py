# sphere_authority/config/defaults.py

import logging
import os
from typing import List

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = ("1", "true", "yes", "y", "on")


def _env_bool(name: str, fallback: str = "false") -> bool:
    return os.getenv(name, fallback).strip().lower() in _TRUTHY


def _env_int(name: str, fallback: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return fallback
    try:
        return int(raw)
    except ValueError:
        logging.getLogger("sphere_authority").warning(
            f"[defaults] Invalid integer for {name}: {raw!r}, using {fallback}"
        )
        return fallback


class Default:
    """
    Process-wide settings, read once from the environment.

    Every attribute may be overridden at runtime
    (``default.REFRESH_INTERVAL_SEC = 5``).
    """

    def __init__(self):
        self.AUTHORITY_PROVIDER_TYPE: str = os.getenv("SPHERE_AUTHORITY_PROVIDER", "NATIVE").strip().upper()
        self.REFRESH_INTERVAL_SEC: int = _env_int("SPHERE_AUTHORITY_REFRESH_INTERVAL_SEC", 300)
        self.USERS: List[str] = [
            part.strip()
            for part in os.getenv("SPHERE_AUTHORITY_USERS", "").split(",")
            if part.strip()
        ]
        self.LOG_LEVEL: str = os.getenv("SPHERE_AUTHORITY_LOG_LEVEL", "INFO").strip().upper()
        self.IS_SHOW_TIMING: bool = _env_bool("SPHERE_AUTHORITY_SHOW_TIMING")


default = Default()

logger = logging.getLogger("sphere_authority")
if not logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(_handler)
logger.setLevel(getattr(logging, default.LOG_LEVEL, logging.INFO))
