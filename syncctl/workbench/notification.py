# Syncctl Notifications
# User-visible prompts and error notifications

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from syncctl.utils.event import Emitter, Event

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Notification severity."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class PromptChoice:
    """An action offered by a prompt."""

    label: str
    run: Callable[[], Union[None, Awaitable[Any]]]


class NotificationHandle:
    """A shown notification. Closing is idempotent and fires on_did_close once."""

    def __init__(self, severity: Severity, message: str, choices: Sequence[PromptChoice] = ()):
        self.severity = severity
        self.message = message
        self.choices = tuple(choices)
        self._closed = False
        self._on_did_close: Emitter[None] = Emitter()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def on_did_close(self) -> Event[None]:
        return self._on_did_close.event

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._on_did_close.fire(None)
        self._on_did_close.dispose()

    async def select(self, label: str) -> None:
        """
        Run the choice with the given label, then close the notification.

        Raises:
            KeyError: If no choice has that label.
        """
        for choice in self.choices:
            if choice.label == label:
                break
        else:
            raise KeyError(f"No choice labelled '{label}'")

        try:
            result = choice.run()
            if inspect.isawaitable(result):
                await result
        finally:
            self.close()

    def __repr__(self) -> str:
        return f"<NotificationHandle {self.severity.value}: {self.message!r}>"


class NotificationService:
    """Keeps track of open notifications."""

    def __init__(self) -> None:
        self._active: list[NotificationHandle] = []
        self._on_did_add_notification: Emitter[NotificationHandle] = Emitter()
        self._on_did_remove_notification: Emitter[NotificationHandle] = Emitter()

    @property
    def active(self) -> list[NotificationHandle]:
        return list(self._active)

    @property
    def on_did_add_notification(self) -> Event[NotificationHandle]:
        return self._on_did_add_notification.event

    @property
    def on_did_remove_notification(self) -> Event[NotificationHandle]:
        return self._on_did_remove_notification.event

    def notify(self, severity: Severity, message: str) -> NotificationHandle:
        return self._show(NotificationHandle(severity, message))

    def prompt(self, severity: Severity, message: str, choices: Sequence[PromptChoice]) -> NotificationHandle:
        return self._show(NotificationHandle(severity, message, choices))

    def error(self, error: Union[str, BaseException]) -> NotificationHandle:
        message = error if isinstance(error, str) else (str(error) or type(error).__name__)
        return self.notify(Severity.ERROR, message)

    def info(self, message: str) -> NotificationHandle:
        return self.notify(Severity.INFO, message)

    def find(self, message: str) -> Optional[NotificationHandle]:
        for handle in self._active:
            if handle.message == message:
                return handle
        return None

    def _show(self, handle: NotificationHandle) -> NotificationHandle:
        self._active.append(handle)
        handle.on_did_close(lambda _: self._remove(handle))
        logger.debug("Notification shown: %r", handle)
        self._on_did_add_notification.fire(handle)
        return handle

    def _remove(self, handle: NotificationHandle) -> None:
        if handle in self._active:
            self._active.remove(handle)
            self._on_did_remove_notification.fire(handle)

    def dispose(self) -> None:
        for handle in list(self._active):
            handle.close()
        self._on_did_add_notification.dispose()
        self._on_did_remove_notification.dispose()
