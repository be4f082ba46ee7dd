# Syncctl Lifecycle
# Scoped disposal of subscriptions, handles and background tasks

import logging
from collections.abc import Callable
from typing import Generic, Optional, Protocol, TypeVar

logger = logging.getLogger(__name__)


class DisposableLike(Protocol):
    """Anything that releases a resource when disposed."""

    def dispose(self) -> None: ...


T = TypeVar("T", bound=DisposableLike)


class _CallbackDisposable:
    """Disposable wrapping a release callback. Runs the callback at most once."""

    def __init__(self, fn: Callable[[], None]):
        self._fn: Optional[Callable[[], None]] = fn

    def dispose(self) -> None:
        fn, self._fn = self._fn, None
        if fn is not None:
            fn()


def to_disposable(fn: Callable[[], None]) -> DisposableLike:
    """Turn a release callback into a disposable."""
    return _CallbackDisposable(fn)


class DisposableStore:
    """
    Collection of disposables released together.

    Items are disposed in registration order. Adding to a store that has
    already been disposed disposes the item immediately.
    """

    def __init__(self) -> None:
        self._items: list[DisposableLike] = []
        self._disposed = False

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def add(self, item: T) -> T:
        if self._disposed:
            logger.warning("Registering %r on an already disposed store, disposing it now", item)
            item.dispose()
        else:
            self._items.append(item)
        return item

    def clear(self) -> None:
        """Dispose all items but keep the store usable."""
        items, self._items = self._items, []
        for item in items:
            item.dispose()

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self.clear()

    def __len__(self) -> int:
        return len(self._items)


class MutableDisposable(Generic[T]):
    """
    Single slot holding at most one disposable.

    Assigning a new value disposes the previous one first.
    """

    def __init__(self) -> None:
        self._value: Optional[T] = None
        self._disposed = False

    @property
    def value(self) -> Optional[T]:
        return self._value

    @value.setter
    def value(self, value: Optional[T]) -> None:
        if self._disposed:
            if value is not None:
                value.dispose()
            return
        if value is self._value:
            return
        previous, self._value = self._value, value
        if previous is not None:
            previous.dispose()

    def clear(self) -> None:
        # Slot is emptied before disposing so re-entrant clears are no-ops
        self.value = None

    def dispose(self) -> None:
        self.clear()
        self._disposed = True


class Disposable:
    """Base class for components owning disposable resources."""

    def __init__(self) -> None:
        self._store = DisposableStore()

    @property
    def is_disposed(self) -> bool:
        return self._store.is_disposed

    def _register(self, item: T) -> T:
        if item is self:
            raise ValueError("Cannot register a disposable on itself")
        return self._store.add(item)

    def dispose(self) -> None:
        self._store.dispose()
