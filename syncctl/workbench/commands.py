# Syncctl Commands and Menus
# Command handlers plus menu items carrying availability predicates

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from syncctl.utils.lifecycle import DisposableLike, to_disposable
from syncctl.workbench.context import Context, ContextKeyExpr

logger = logging.getLogger(__name__)

CommandHandler = Callable[..., Any]


class CommandNotFoundError(Exception):
    """Raised when executing a command id nobody registered."""

    def __init__(self, command_id: str):
        self.command_id = command_id
        super().__init__(f"command '{command_id}' not found")


class CommandUnavailableError(Exception):
    """Raised when running a command whose precondition does not hold."""

    def __init__(self, command_id: str, precondition: str = ""):
        self.command_id = command_id
        self.precondition = precondition
        message = f"command '{command_id}' is not available"
        if precondition:
            message += f" (requires {precondition})"
        super().__init__(message)


class MenuId(str, Enum):
    """Places where menu items can appear."""

    GLOBAL_ACTIVITY = "globalActivity"
    COMMAND_PALETTE = "commandPalette"
    EDITOR_TITLE = "editorTitle"


@dataclass(frozen=True)
class CommandAction:
    id: str
    title: str
    icon: Optional[str] = None


@dataclass(frozen=True)
class MenuItem:
    command: CommandAction
    when: Optional[ContextKeyExpr] = None
    group: Optional[str] = None
    order: int = 0


class CommandsRegistry:
    """Maps command ids to handlers."""

    def __init__(self) -> None:
        self._commands: dict[str, list[CommandHandler]] = {}

    def register_command(self, command_id: str, handler: CommandHandler) -> DisposableLike:
        """Register handler for command_id. The latest registration wins until disposed."""
        handlers = self._commands.setdefault(command_id, [])
        handlers.append(handler)

        def remove() -> None:
            if handler in handlers:
                handlers.remove(handler)
            if not handlers:
                self._commands.pop(command_id, None)

        return to_disposable(remove)

    def get_command(self, command_id: str) -> Optional[CommandHandler]:
        handlers = self._commands.get(command_id)
        return handlers[-1] if handlers else None

    @property
    def command_ids(self) -> list[str]:
        return sorted(self._commands)

    async def execute_command(self, command_id: str, *args: Any) -> Any:
        """
        Run the handler registered for command_id, awaiting it if it is a coroutine.

        Raises:
            CommandNotFoundError: If no handler is registered.
        """
        handler = self.get_command(command_id)
        if handler is None:
            raise CommandNotFoundError(command_id)
        logger.debug("Executing command %s", command_id)
        result = handler(*args)
        if inspect.isawaitable(result):
            result = await result
        return result


class MenuRegistry:
    """Menu items per menu, each with an optional `when` predicate."""

    def __init__(self) -> None:
        self._items: dict[MenuId, list[MenuItem]] = {}

    def append_menu_item(self, menu_id: MenuId, item: MenuItem) -> DisposableLike:
        items = self._items.setdefault(menu_id, [])
        items.append(item)

        def remove() -> None:
            if item in items:
                items.remove(item)

        return to_disposable(remove)

    def get_menu_items(self, menu_id: MenuId, context: Optional[Context] = None) -> list[MenuItem]:
        """Items of menu_id sorted by group and order; filtered by `when` if a context is given."""
        items = sorted(self._items.get(menu_id, []), key=lambda item: (item.group or "", item.order))
        if context is None:
            return items
        return [item for item in items if item.when is None or item.when.evaluate(context)]

    def find_item(self, menu_id: MenuId, command_id: str) -> Optional[MenuItem]:
        for item in self._items.get(menu_id, []):
            if item.command.id == command_id:
                return item
        return None
