# Syncctl Events
# Minimal typed event emitter with disposable subscriptions

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from syncctl.utils.lifecycle import DisposableLike, to_disposable

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]
Event = Callable[[Listener[T]], DisposableLike]


class Emitter(Generic[T]):
    """
    Fires values to subscribed listeners.

    Listeners run synchronously in subscription order. A failing listener is
    logged and does not prevent delivery to the remaining ones.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener[T]] = []
        self._disposed = False

    @property
    def event(self) -> Event[T]:
        return self._subscribe

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    def _subscribe(self, listener: Listener[T]) -> DisposableLike:
        if self._disposed:
            return to_disposable(lambda: None)

        # Wrap so the same callable can be subscribed twice and removed once
        entry = lambda value: listener(value)  # noqa: E731
        self._listeners.append(entry)

        def remove() -> None:
            try:
                self._listeners.remove(entry)
            except ValueError:
                pass

        return to_disposable(remove)

    def fire(self, value: T) -> None:
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception("Event listener failed")

    def dispose(self) -> None:
        self._disposed = True
        self._listeners.clear()
