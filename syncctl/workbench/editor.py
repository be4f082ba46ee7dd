# Syncctl Editors
# Open documents, their resources, and saving them

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlsplit

from syncctl.utils.event import Emitter, Event
from syncctl.utils.lifecycle import Disposable, DisposableLike, to_disposable
from syncctl.utils.paths import atomic_write
from syncctl.workbench.context import ContextKeyService, ResourceContextKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class URI:
    """Resource identifier made of a scheme and a path."""

    scheme: str
    path: str

    @classmethod
    def parse(cls, value: str) -> "URI":
        """
        Parse 'scheme:path' or 'scheme:///path'. Bare paths get the file scheme.

        Raises:
            ValueError: If value is empty.
        """
        if not value:
            raise ValueError("Cannot parse an empty URI")
        parts = urlsplit(value)
        # Single letters are Windows drive names, not schemes
        if not parts.scheme or len(parts.scheme) == 1:
            return cls.file(value)
        path = parts.path
        if parts.netloc:
            path = f"//{parts.netloc}{path}"
        return cls(parts.scheme, path)

    @classmethod
    def file(cls, path: str | Path) -> "URI":
        return cls("file", str(path))

    def __str__(self) -> str:
        if self.path.startswith("/"):
            return f"{self.scheme}://{self.path}"
        return f"{self.scheme}:{self.path}"


class EditorInput:
    """An open document."""

    def __init__(self, resource: URI, content: str = "", *, dirty: bool = False):
        self.resource = resource
        self.content = content
        self._dirty = dirty
        self._disposed = False
        self._on_did_dispose: Emitter[None] = Emitter()

    @property
    def on_did_dispose(self) -> Event[None]:
        return self._on_did_dispose.event

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def is_dirty(self) -> bool:
        return self._dirty

    def set_content(self, content: str) -> None:
        self.content = content
        self._dirty = True

    def mark_saved(self) -> None:
        self._dirty = False

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._on_did_dispose.fire(None)
        self._on_did_dispose.dispose()

    def __repr__(self) -> str:
        marker = "*" if self._dirty else ""
        return f"<EditorInput {self.resource}{marker}>"


class EditorService(Disposable):
    """
    Open editors in opening order.

    Keeps the ``resourceScheme`` context key in line with the active editor.
    """

    def __init__(self, context_key_service: Optional[ContextKeyService] = None):
        super().__init__()
        self._editors: list[EditorInput] = []
        self._active: Optional[EditorInput] = None
        self._listeners: dict[int, DisposableLike] = {}
        self._scheme_context = (
            ResourceContextKey.Scheme.bind_to(context_key_service) if context_key_service is not None else None
        )
        self._on_did_active_editor_change: Emitter[Optional[EditorInput]] = self._register(Emitter())
        self._register(to_disposable(self._close_all))

    @property
    def editors(self) -> list[EditorInput]:
        return list(self._editors)

    @property
    def active_editor(self) -> Optional[EditorInput]:
        return self._active

    @property
    def on_did_active_editor_change(self) -> Event[Optional[EditorInput]]:
        return self._on_did_active_editor_change.event

    def open_editor(self, editor: EditorInput) -> EditorInput:
        """Open editor (or re-activate it if already open) and make it active."""
        if editor.is_disposed:
            raise ValueError(f"Cannot open disposed editor {editor!r}")
        if editor not in self._editors:
            self._editors.append(editor)
            self._listeners[id(editor)] = editor.on_did_dispose(lambda _: self._on_editor_disposed(editor))
        self._set_active(editor)
        return editor

    def find_editors(self, scheme: str) -> list[EditorInput]:
        return [editor for editor in self._editors if editor.resource.scheme == scheme]

    def _on_editor_disposed(self, editor: EditorInput) -> None:
        if editor in self._editors:
            self._editors.remove(editor)
        listener = self._listeners.pop(id(editor), None)
        if listener is not None:
            listener.dispose()
        if self._active is editor:
            self._set_active(self._editors[-1] if self._editors else None)

    def _set_active(self, editor: Optional[EditorInput]) -> None:
        self._active = editor
        if self._scheme_context is not None:
            self._scheme_context.set(editor.resource.scheme if editor else None)
        self._on_did_active_editor_change.fire(editor)

    def _close_all(self) -> None:
        for editor in list(self._editors):
            editor.dispose()


SaveProvider = Callable[[URI, str], Awaitable[None]]


class FileSaveError(Exception):
    """Raised when a resource cannot be saved."""

    def __init__(self, message: str, resource: Optional[URI] = None):
        self.message = message
        self.resource = resource
        super().__init__(message)


async def _save_to_disk(resource: URI, content: str) -> None:
    atomic_write(Path(resource.path), content)


class TextFileService:
    """Saves open documents through a provider registered per URI scheme."""

    def __init__(self, editor_service: EditorService):
        self._editor_service = editor_service
        self._providers: dict[str, SaveProvider] = {"file": _save_to_disk}

    def register_save_provider(self, scheme: str, provider: SaveProvider) -> DisposableLike:
        self._providers[scheme] = provider

        def remove() -> None:
            if self._providers.get(scheme) is provider:
                del self._providers[scheme]

        return to_disposable(remove)

    async def save(self, resource: URI) -> bool:
        """
        Save the open editor for resource.

        Returns:
            True if something was written, False if the editor was not dirty.

        Raises:
            FileSaveError: If no editor is open for resource or no provider handles its scheme.
        """
        editor = next((e for e in self._editor_service.editors if e.resource == resource), None)
        if editor is None:
            raise FileSaveError(f"No open editor for {resource}", resource)
        if not editor.is_dirty():
            return False

        provider = self._providers.get(resource.scheme)
        if provider is None:
            raise FileSaveError(f"No save provider for scheme '{resource.scheme}'", resource)

        await provider(resource, editor.content)
        editor.mark_saved()
        logger.debug("Saved %s", resource)
        return True
