# sphere_authority/refresher.py

from __future__ import annotations

import threading
from typing import Callable, Iterable, Mapping, Optional

from sphere_authority.config.defaults import default, logger
from sphere_authority.metadata.meta_data import ShardingSphereMetaData
from sphere_authority.model.user import ShardingSphereUser, configured_users
from sphere_authority.provider.base import AuthorityProvider

MetaDataSupplier = Callable[[], Mapping[str, ShardingSphereMetaData]]
UsersSupplier = Callable[[], Iterable[ShardingSphereUser]]


class AuthorityRefresher:
    """
    Calls ``provider.refresh`` every *interval* seconds on a background thread.

    Without a *users_supplier* the users come from ``default.USERS``.
    The suppliers are asked for the current metadata and users before each
    pass, so configuration changes are picked up on the next tick.  A
    failed pass is logged and the provider keeps its previous privileges.
    """

    def __init__(
        self,
        provider: AuthorityProvider,
        meta_data_supplier: MetaDataSupplier,
        users_supplier: Optional[UsersSupplier] = None,
        interval: Optional[float] = None,
    ):
        self.provider = provider
        self.meta_data_supplier = meta_data_supplier
        self.users_supplier = users_supplier or configured_users
        self.interval = float(interval if interval is not None else default.REFRESH_INTERVAL_SEC)
        if self.interval <= 0:
            raise ValueError(f"Refresh interval must be positive, got {self.interval}")

        self.stop_event = threading.Event()
        self.last_error: Optional[BaseException] = None
        self.passes = 0
        self.failures = 0
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        # Guards passes, failures and last_error.
        self._stats_lock = threading.Lock()

    def refresh_now(self) -> bool:
        """Run one refresh pass in the calling thread; False if it failed."""
        try:
            self.provider.refresh(self.meta_data_supplier(), self.users_supplier())
        except Exception as e:
            with self._stats_lock:
                self.failures += 1
                self.last_error = e
            logger.exception(f"[refresher] Privilege refresh failed, keeping previous privileges: {e}")
            return False
        with self._stats_lock:
            self.passes += 1
            self.last_error = None
        return True

    def _run(self) -> None:
        while not self.stop_event.wait(self.interval):
            self.refresh_now()

    def start(self) -> None:
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self.stop_event.clear()
            self._thread = threading.Thread(
                target=self._run,
                name=f"AuthorityRefresher-{self.provider.type}",
                daemon=True,
            )
            self._thread.start()
            logger.info(f"[refresher] Started, refreshing every {self.interval:g}s")

    def stop(self, timeout: Optional[float] = None) -> None:
        with self._lock:
            self.stop_event.set()
            if self._thread is not None:
                self._thread.join(timeout)
                self._thread = None
                logger.info("[refresher] Stopped")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.stop()
