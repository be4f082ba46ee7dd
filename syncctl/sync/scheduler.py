# Syncctl Auto Sync Scheduler
# Periodic sync attempts gated by the auto-sync setting

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

from syncctl.config.registry import AUTO_SYNC_SETTING
from syncctl.config.service import ConfigurationChangeEvent, ConfigurationService
from syncctl.sync.service import UserDataSyncService
from syncctl.sync.status import SyncStatus
from syncctl.utils.lifecycle import Disposable, to_disposable

logger = logging.getLogger(__name__)

# Every five minutes
AUTO_SYNC_INTERVAL = 5 * 60


class AutoSyncScheduler(Disposable):
    """
    Attempts a sync, waits the interval, and repeats until disposed.

    An attempt only calls ``sync()`` when the service is idle and auto sync is
    enabled, checked at the moment of the attempt. Switching the setting on
    triggers an extra attempt right away without touching the loop's timer.
    Failed attempts are logged and the loop carries on.

    Must be created while an event loop is running.
    """

    def __init__(
        self,
        configuration_service: ConfigurationService,
        sync_service: UserDataSyncService,
        *,
        interval: float = AUTO_SYNC_INTERVAL,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        super().__init__()
        self._loop = asyncio.get_running_loop()
        self._configuration_service = configuration_service
        self._sync_service = sync_service
        self._interval = interval
        self._sleep = sleep
        self._tasks: set[asyncio.Task] = set()
        self._register(to_disposable(self._cancel_tasks))

        self._loop_task = self._spawn(self._loop_auto_sync(), "auto-sync-loop")
        self._register(configuration_service.on_did_change_configuration(self._on_configuration_change))

    @property
    def is_running(self) -> bool:
        return not self._loop_task.done()

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    async def auto_sync(self) -> bool:
        """
        Run one sync attempt.

        Returns:
            True if ``sync()`` was called, False if the attempt was skipped.
        """
        if self._sync_service.status != SyncStatus.IDLE:
            return False
        if not self._configuration_service.get_value(AUTO_SYNC_SETTING):
            return False

        logger.info("Auto sync: starting")
        await self._sync_service.sync()
        return True

    async def _try_auto_sync(self) -> None:
        try:
            await self.auto_sync()
        except Exception as e:
            logger.warning("Auto sync failed: %s", e, exc_info=logger.isEnabledFor(logging.DEBUG))

    async def _loop_auto_sync(self) -> None:
        while True:
            await self._try_auto_sync()
            await self._sleep(self._interval)

    def _on_configuration_change(self, event: ConfigurationChangeEvent) -> None:
        if event.affects_configuration(AUTO_SYNC_SETTING) and self._configuration_service.get_value(AUTO_SYNC_SETTING):
            logger.debug("Auto sync enabled, attempting sync now")
            self._spawn(self._try_auto_sync(), "auto-sync-on-enable")

    def _spawn(self, coro: Coroutine[Any, Any, None], name: str) -> asyncio.Task:
        task = self._loop.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _cancel_tasks(self) -> None:
        for task in list(self._tasks):
            task.cancel()
