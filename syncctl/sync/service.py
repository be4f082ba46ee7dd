# Syncctl Sync Service
# Boundary to the engine that actually synchronizes user data

import logging
from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from syncctl.sync.status import SyncStatus
from syncctl.utils.event import Emitter, Event

logger = logging.getLogger(__name__)


class SyncServiceError(Exception):
    """Raised by sync services when an operation fails."""

    def __init__(self, message: str, status: SyncStatus | None = None):
        self.message = message
        self.status = status
        super().__init__(message)


@runtime_checkable
class UserDataSyncService(Protocol):
    """What the control layer needs from a sync engine."""

    @property
    def status(self) -> SyncStatus: ...

    @property
    def on_did_change_status(self) -> Event[SyncStatus]: ...

    async def sync(self) -> None: ...

    async def stop_sync(self) -> None: ...

    async def continue_sync(self) -> None: ...

    async def handle_conflicts(self) -> None: ...


class BaseUserDataSyncService(ABC):
    """
    Status bookkeeping for sync service implementations.

    Subclasses implement the four operations and report progress via
    ``_set_status``, which notifies listeners only on an actual change.
    """

    def __init__(self, status: SyncStatus = SyncStatus.UNINITIALIZED):
        self._status = status
        self._on_did_change_status: Emitter[SyncStatus] = Emitter()

    @property
    def status(self) -> SyncStatus:
        return self._status

    @property
    def on_did_change_status(self) -> Event[SyncStatus]:
        return self._on_did_change_status.event

    def _set_status(self, status: SyncStatus) -> None:
        if status == self._status:
            return
        logger.debug("Sync status: %s -> %s", self._status.value, status.value)
        self._status = status
        self._on_did_change_status.fire(status)

    @abstractmethod
    async def sync(self) -> None: ...

    @abstractmethod
    async def stop_sync(self) -> None: ...

    @abstractmethod
    async def continue_sync(self) -> None: ...

    @abstractmethod
    async def handle_conflicts(self) -> None: ...

    def dispose(self) -> None:
        self._on_did_change_status.dispose()
