# Syncctl Sync Status
# Status values reported by the sync service and shared constants

from enum import Enum

from syncctl.workbench.context import RawContextKey


class SyncStatus(str, Enum):
    """Status of the user data sync service."""

    UNINITIALIZED = "uninitialized"
    IDLE = "idle"
    SYNCING = "syncing"
    HAS_CONFLICTS = "hasConflicts"


# Scheme of documents previewing a pending conflict resolution
USER_DATA_PREVIEW_SCHEME = "syncctl-preview"

# Mirror of the service status, written only by the status contribution
CONTEXT_SYNC_STATE: RawContextKey[SyncStatus] = RawContextKey("syncStatus", SyncStatus.UNINITIALIZED)
