# Syncctl Sync Module
# Status handling, commands and scheduling around the user data sync service

from syncctl.sync.commands import (
    COMMAND_PRECONDITIONS,
    COMMAND_TITLES,
    CONTINUE_SYNC_COMMAND_ID,
    RESOLVE_CONFLICTS_COMMAND_ID,
    START_SYNC_COMMAND_ID,
    STOP_SYNC_COMMAND_ID,
    SyncCommands,
    evaluate_command_availability,
)
from syncctl.sync.continuation import ConflictContinuationFlow, ContinuationResult
from syncctl.sync.contribution import SyncStatusContribution
from syncctl.sync.loader import SyncServiceLoadError, load_sync_service
from syncctl.sync.scheduler import AUTO_SYNC_INTERVAL, AutoSyncScheduler
from syncctl.sync.service import BaseUserDataSyncService, SyncServiceError, UserDataSyncService
from syncctl.sync.status import CONTEXT_SYNC_STATE, USER_DATA_PREVIEW_SCHEME, SyncStatus

__all__ = [
    # Status
    "SyncStatus",
    "CONTEXT_SYNC_STATE",
    "USER_DATA_PREVIEW_SCHEME",
    # Service
    "UserDataSyncService",
    "BaseUserDataSyncService",
    "SyncServiceError",
    "SyncServiceLoadError",
    "load_sync_service",
    # Scheduler
    "AUTO_SYNC_INTERVAL",
    "AutoSyncScheduler",
    # Status UI
    "SyncStatusContribution",
    # Commands
    "SyncCommands",
    "COMMAND_PRECONDITIONS",
    "COMMAND_TITLES",
    "START_SYNC_COMMAND_ID",
    "STOP_SYNC_COMMAND_ID",
    "RESOLVE_CONFLICTS_COMMAND_ID",
    "CONTINUE_SYNC_COMMAND_ID",
    "evaluate_command_availability",
    # Continuation
    "ConflictContinuationFlow",
    "ContinuationResult",
]
