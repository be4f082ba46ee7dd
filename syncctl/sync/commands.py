# Syncctl Sync Commands
# Start, stop, resolve and continue commands with declarative availability

import logging
from typing import Any

from syncctl.config.registry import AUTO_SYNC_SETTING
from syncctl.config.service import ConfigurationService
from syncctl.sync.continuation import ConflictContinuationFlow, ContinuationResult
from syncctl.sync.service import UserDataSyncService
from syncctl.sync.status import CONTEXT_SYNC_STATE, USER_DATA_PREVIEW_SCHEME, SyncStatus
from syncctl.utils.lifecycle import Disposable
from syncctl.workbench.commands import (
    CommandAction,
    CommandsRegistry,
    CommandUnavailableError,
    MenuId,
    MenuItem,
    MenuRegistry,
)
from syncctl.workbench.context import (
    CONFIG_PREFIX,
    ContextKeyExpr,
    ContextKeyService,
    MappingContext,
    ResourceContextKey,
)

logger = logging.getLogger(__name__)

START_SYNC_COMMAND_ID = "syncctl.actions.startSync"
STOP_SYNC_COMMAND_ID = "syncctl.actions.stopSync"
RESOLVE_CONFLICTS_COMMAND_ID = "syncctl.actions.resolveConflicts"
CONTINUE_SYNC_COMMAND_ID = "syncctl.actions.continueSync"

SYNC_MENU_GROUP = "5_sync"
AUTO_SYNC_CONTEXT_KEY = CONFIG_PREFIX + AUTO_SYNC_SETTING

START_SYNC_WHEN = ContextKeyExpr.and_(
    CONTEXT_SYNC_STATE.not_equals_to(SyncStatus.UNINITIALIZED),
    ContextKeyExpr.not_(AUTO_SYNC_CONTEXT_KEY),
)
STOP_SYNC_WHEN = ContextKeyExpr.and_(
    CONTEXT_SYNC_STATE.not_equals_to(SyncStatus.UNINITIALIZED),
    ContextKeyExpr.has(AUTO_SYNC_CONTEXT_KEY),
)
RESOLVE_CONFLICTS_WHEN = CONTEXT_SYNC_STATE.is_equal_to(SyncStatus.HAS_CONFLICTS)
CONTINUE_SYNC_WHEN = CONTEXT_SYNC_STATE.is_equal_to(SyncStatus.HAS_CONFLICTS)
CONTINUE_SYNC_EDITOR_WHEN = ContextKeyExpr.and_(
    CONTINUE_SYNC_WHEN,
    ResourceContextKey.Scheme.is_equal_to(USER_DATA_PREVIEW_SCHEME),
)

COMMAND_TITLES: dict[str, str] = {
    START_SYNC_COMMAND_ID: "Sync: Start",
    STOP_SYNC_COMMAND_ID: "Sync: Stop",
    RESOLVE_CONFLICTS_COMMAND_ID: "Sync: Resolve Conflicts",
    CONTINUE_SYNC_COMMAND_ID: "Sync: Continue",
}

COMMAND_PRECONDITIONS: dict[str, ContextKeyExpr] = {
    START_SYNC_COMMAND_ID: START_SYNC_WHEN,
    STOP_SYNC_COMMAND_ID: STOP_SYNC_WHEN,
    RESOLVE_CONFLICTS_COMMAND_ID: RESOLVE_CONFLICTS_WHEN,
    CONTINUE_SYNC_COMMAND_ID: CONTINUE_SYNC_WHEN,
}


def evaluate_command_availability(status: SyncStatus, auto_sync_enabled: bool) -> dict[str, bool]:
    """
    Availability of every sync command for a status and auto-sync setting.

    Args:
        status: Current sync status.
        auto_sync_enabled: Current value of the auto-sync setting.

    Returns:
        Dict of command id to whether it is available.
    """
    context = MappingContext({CONTEXT_SYNC_STATE.key: status, AUTO_SYNC_CONTEXT_KEY: auto_sync_enabled})
    return {command_id: expr.evaluate(context) for command_id, expr in COMMAND_PRECONDITIONS.items()}


class SyncCommands(Disposable):
    """
    Registers the sync commands and their menu entries.

    Availability is never toggled here: each entry carries a ``when``
    expression that is evaluated against the live context on demand.
    """

    def __init__(
        self,
        sync_service: UserDataSyncService,
        configuration_service: ConfigurationService,
        context_key_service: ContextKeyService,
        commands_registry: CommandsRegistry,
        menu_registry: MenuRegistry,
        continuation_flow: ConflictContinuationFlow,
    ):
        super().__init__()
        self._sync_service = sync_service
        self._configuration_service = configuration_service
        self._context_key_service = context_key_service
        self._commands_registry = commands_registry
        self._menu_registry = menu_registry
        self._continuation_flow = continuation_flow
        self._register_actions()

    async def start_sync(self) -> None:
        logger.info("Turning auto sync on")
        self._configuration_service.update_value(AUTO_SYNC_SETTING, True)

    async def stop_sync(self) -> None:
        logger.info("Turning auto sync off")
        self._configuration_service.update_value(AUTO_SYNC_SETTING, False)
        await self._sync_service.stop_sync()

    async def resolve_conflicts(self) -> None:
        await self._sync_service.handle_conflicts()

    async def continue_sync(self) -> ContinuationResult:
        return await self._continuation_flow.run()

    def is_available(self, command_id: str) -> bool:
        """
        Whether command_id may run in the current context.

        Raises:
            KeyError: If command_id is not a sync command.
        """
        return self._context_key_service.context_matches(COMMAND_PRECONDITIONS[command_id])

    def available_commands(self) -> list[str]:
        return [command_id for command_id in COMMAND_PRECONDITIONS if self.is_available(command_id)]

    async def run_command(self, command_id: str) -> Any:
        """
        Run a sync command if its precondition currently holds.

        Raises:
            CommandUnavailableError: If the precondition does not hold.
        """
        if not self.is_available(command_id):
            raise CommandUnavailableError(command_id, COMMAND_PRECONDITIONS[command_id].serialize())
        return await self._commands_registry.execute_command(command_id)

    def _register_actions(self) -> None:
        handlers = {
            START_SYNC_COMMAND_ID: self.start_sync,
            STOP_SYNC_COMMAND_ID: self.stop_sync,
            RESOLVE_CONFLICTS_COMMAND_ID: self.resolve_conflicts,
            CONTINUE_SYNC_COMMAND_ID: self.continue_sync,
        }
        for command_id, handler in handlers.items():
            self._register(self._commands_registry.register_command(command_id, handler))

        # Start, stop and resolve live in the global activity menu and the palette
        for command_id in (START_SYNC_COMMAND_ID, STOP_SYNC_COMMAND_ID, RESOLVE_CONFLICTS_COMMAND_ID):
            item = MenuItem(
                command=CommandAction(command_id, COMMAND_TITLES[command_id]),
                when=COMMAND_PRECONDITIONS[command_id],
                group=SYNC_MENU_GROUP,
            )
            self._register(self._menu_registry.append_menu_item(MenuId.GLOBAL_ACTIVITY, item))
            self._register(self._menu_registry.append_menu_item(MenuId.COMMAND_PALETTE, item))

        continue_action = CommandAction(CONTINUE_SYNC_COMMAND_ID, COMMAND_TITLES[CONTINUE_SYNC_COMMAND_ID])
        self._register(
            self._menu_registry.append_menu_item(
                MenuId.COMMAND_PALETTE,
                MenuItem(command=continue_action, when=CONTINUE_SYNC_WHEN),
            )
        )
        self._register(
            self._menu_registry.append_menu_item(
                MenuId.EDITOR_TITLE,
                MenuItem(
                    command=CommandAction(CONTINUE_SYNC_COMMAND_ID, continue_action.title, icon="sync-push"),
                    when=CONTINUE_SYNC_EDITOR_WHEN,
                    group="navigation",
                    order=1,
                ),
            )
        )
