# Syncctl Sync Service Tests
# Tests for the sync service base class

import pytest

from helpers import FakeSyncService
from syncctl.sync.service import BaseUserDataSyncService, UserDataSyncService
from syncctl.sync.status import SyncStatus


class TestBaseUserDataSyncService:
    """Tests for BaseUserDataSyncService."""

    def test_incomplete_subclass_rejected(self):
        """Test that a subclass missing an operation cannot be instantiated."""

        class SyncOnly(BaseUserDataSyncService):
            async def sync(self) -> None:
                self._set_status(SyncStatus.IDLE)

        with pytest.raises(TypeError, match="handle_conflicts"):
            SyncOnly()

    def test_base_not_instantiable(self):
        """Test that the base class itself cannot be instantiated."""
        with pytest.raises(TypeError):
            BaseUserDataSyncService()

    def test_complete_subclass_is_service(self):
        """Test that a full implementation satisfies the service protocol."""
        service = FakeSyncService(SyncStatus.UNINITIALIZED)
        assert isinstance(service, UserDataSyncService)
        assert service.status == SyncStatus.UNINITIALIZED

    def test_status_change_fires_once(self):
        """Test that listeners hear only actual status changes."""
        service = FakeSyncService(SyncStatus.IDLE)
        seen = []
        service.on_did_change_status(seen.append)

        service.set_status(SyncStatus.IDLE)
        service.set_status(SyncStatus.SYNCING)
        service.set_status(SyncStatus.SYNCING)

        assert seen == [SyncStatus.SYNCING]
