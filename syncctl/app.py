# Syncctl Workbench
# Composes services and sync contributions and tears them down together

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Optional

from syncctl.config.service import ConfigurationService
from syncctl.sync.commands import SyncCommands
from syncctl.sync.continuation import ConflictContinuationFlow
from syncctl.sync.contribution import SyncStatusContribution
from syncctl.sync.scheduler import AUTO_SYNC_INTERVAL, AutoSyncScheduler
from syncctl.sync.service import UserDataSyncService
from syncctl.workbench.activity import ActivityService
from syncctl.workbench.commands import CommandsRegistry, MenuRegistry
from syncctl.workbench.context import ContextKeyService
from syncctl.workbench.contributions import LifecyclePhase, WorkbenchContributionsRegistry
from syncctl.workbench.editor import EditorService, TextFileService
from syncctl.workbench.notification import NotificationService

logger = logging.getLogger(__name__)


@dataclass
class WorkbenchServices:
    """Services shared by all contributions."""

    configuration_service: ConfigurationService
    sync_service: UserDataSyncService
    context_key_service: ContextKeyService
    activity_service: ActivityService
    notification_service: NotificationService
    commands_registry: CommandsRegistry
    menu_registry: MenuRegistry
    editor_service: EditorService
    text_file_service: TextFileService


class SyncWorkbench:
    """
    Runs the sync status contribution, the sync commands and the auto-sync scheduler.

    Status and commands start in the STARTING phase, the scheduler in the
    EVENTUALLY phase. Use as an async context manager, or call ``start``
    from inside a running event loop and ``dispose`` when done.
    """

    def __init__(
        self,
        sync_service: UserDataSyncService,
        configuration_service: ConfigurationService,
        *,
        auto_sync_interval: float = AUTO_SYNC_INTERVAL,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        context_key_service = ContextKeyService(configuration_service)
        editor_service = EditorService(context_key_service)
        self.services = WorkbenchServices(
            configuration_service=configuration_service,
            sync_service=sync_service,
            context_key_service=context_key_service,
            activity_service=ActivityService(),
            notification_service=NotificationService(),
            commands_registry=CommandsRegistry(),
            menu_registry=MenuRegistry(),
            editor_service=editor_service,
            text_file_service=TextFileService(editor_service),
        )
        self._auto_sync_interval = auto_sync_interval
        self._sleep = sleep

        self.status: Optional[SyncStatusContribution] = None
        self.commands: Optional[SyncCommands] = None
        self.scheduler: Optional[AutoSyncScheduler] = None

        self.contributions: WorkbenchContributionsRegistry[WorkbenchServices] = WorkbenchContributionsRegistry()
        self.contributions.register_workbench_contribution(self._create_status_contribution, LifecyclePhase.STARTING)
        self.contributions.register_workbench_contribution(self._create_commands, LifecyclePhase.STARTING)
        self.contributions.register_workbench_contribution(self._create_scheduler, LifecyclePhase.EVENTUALLY)
        self._disposed = False

    def start(self, phase: LifecyclePhase = LifecyclePhase.EVENTUALLY) -> None:
        self.contributions.start(self.services, phase)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self.contributions.dispose()
        self.services.editor_service.dispose()
        self.services.notification_service.dispose()
        self.services.activity_service.dispose()
        self.services.context_key_service.dispose()
        logger.debug("Workbench disposed")

    async def __aenter__(self) -> "SyncWorkbench":
        self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.dispose()
        # Let cancelled scheduler tasks unwind
        await asyncio.sleep(0)

    def _create_status_contribution(self, services: WorkbenchServices) -> SyncStatusContribution:
        self.status = SyncStatusContribution(
            services.sync_service,
            services.context_key_service,
            services.activity_service,
            services.notification_service,
        )
        return self.status

    def _create_commands(self, services: WorkbenchServices) -> SyncCommands:
        continuation = ConflictContinuationFlow(
            services.sync_service,
            services.editor_service,
            services.text_file_service,
            services.notification_service,
        )
        self.commands = SyncCommands(
            services.sync_service,
            services.configuration_service,
            services.context_key_service,
            services.commands_registry,
            services.menu_registry,
            continuation,
        )
        return self.commands

    def _create_scheduler(self, services: WorkbenchServices) -> AutoSyncScheduler:
        self.scheduler = AutoSyncScheduler(
            services.configuration_service,
            services.sync_service,
            interval=self._auto_sync_interval,
            sleep=self._sleep,
        )
        return self.scheduler
