# Syncctl Test Helpers
# Fake sync service and timer control shared by the tests

import asyncio
from typing import Optional

from syncctl.sync.service import BaseUserDataSyncService
from syncctl.sync.status import SyncStatus


class FakeSyncService(BaseUserDataSyncService):
    """Sync service recording calls, with switchable failures."""

    def __init__(self, status: SyncStatus = SyncStatus.IDLE):
        super().__init__(status)
        self.calls: list[str] = []
        self.sync_error: Optional[Exception] = None
        self.continue_error: Optional[Exception] = None
        self.sync_gate: Optional[asyncio.Event] = None

    def set_status(self, status: SyncStatus) -> None:
        self._set_status(status)

    def emit_status(self, status: SyncStatus) -> None:
        """Fire a status notification even if the status did not change."""
        self._status = status
        self._on_did_change_status.fire(status)

    async def sync(self) -> None:
        self.calls.append("sync")
        if self.sync_error is not None:
            raise self.sync_error
        self._set_status(SyncStatus.SYNCING)
        if self.sync_gate is not None:
            await self.sync_gate.wait()
        self._set_status(SyncStatus.IDLE)

    async def stop_sync(self) -> None:
        self.calls.append("stop_sync")
        self._set_status(SyncStatus.IDLE)

    async def continue_sync(self) -> None:
        self.calls.append("continue_sync")
        if self.continue_error is not None:
            raise self.continue_error
        self._set_status(SyncStatus.IDLE)

    async def handle_conflicts(self) -> None:
        self.calls.append("handle_conflicts")


def create_service(configuration_service) -> FakeSyncService:
    """Factory in the form 'syncctl run --service' expects."""
    return FakeSyncService(SyncStatus.IDLE)


def create_not_a_service(configuration_service) -> object:
    return object()


class ManualTimer:
    """Replacement for asyncio.sleep that only returns when ticked."""

    def __init__(self) -> None:
        self.waits: list[float] = []
        self._releases: Optional[asyncio.Queue] = None

    def _queue(self) -> asyncio.Queue:
        if self._releases is None:
            self._releases = asyncio.Queue()
        return self._releases

    async def sleep(self, seconds: float) -> None:
        self.waits.append(seconds)
        await self._queue().get()

    def tick(self) -> None:
        self._queue().put_nowait(None)


async def settle(rounds: int = 10) -> None:
    """Let pending tasks run until they block."""
    for _ in range(rounds):
        await asyncio.sleep(0)
