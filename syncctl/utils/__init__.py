# Syncctl Utilities Module
# Lifecycle management, events and path helpers

from syncctl.utils.event import Emitter, Event, Listener
from syncctl.utils.lifecycle import (
    Disposable,
    DisposableLike,
    DisposableStore,
    MutableDisposable,
    to_disposable,
)
from syncctl.utils.paths import atomic_write, ensure_dir, expand_path

__all__ = [
    # Lifecycle
    "Disposable",
    "DisposableLike",
    "DisposableStore",
    "MutableDisposable",
    "to_disposable",
    # Events
    "Emitter",
    "Event",
    "Listener",
    # Paths
    "atomic_write",
    "ensure_dir",
    "expand_path",
]
