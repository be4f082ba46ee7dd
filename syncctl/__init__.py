"""syncctl - User Configuration Sync Control.

Control and status layer for background user configuration sync: reflects
the sync service status as badges and prompts, offers start/stop/resolve/
continue commands, and runs auto sync every five minutes when enabled.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "SyncWorkbench",
    "SyncStatus",
    "UserDataSyncService",
    "BaseUserDataSyncService",
    "AutoSyncScheduler",
    "SyncStatusContribution",
    "SyncCommands",
    "ConflictContinuationFlow",
    "ConfigurationService",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name == "SyncWorkbench":
        from syncctl.app import SyncWorkbench

        return SyncWorkbench
    if name == "ConfigurationService":
        from syncctl.config.service import ConfigurationService

        return ConfigurationService
    if name in (
        "SyncStatus",
        "UserDataSyncService",
        "BaseUserDataSyncService",
        "AutoSyncScheduler",
        "SyncStatusContribution",
        "SyncCommands",
        "ConflictContinuationFlow",
    ):
        from syncctl import sync

        return getattr(sync, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
