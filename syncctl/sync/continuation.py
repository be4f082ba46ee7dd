# Syncctl Conflict Continuation
# Hand a resolved conflict preview back to the sync service

import logging
from dataclasses import dataclass
from typing import Optional

from syncctl.sync.service import UserDataSyncService
from syncctl.sync.status import USER_DATA_PREVIEW_SCHEME
from syncctl.workbench.editor import EditorInput, EditorService, TextFileService
from syncctl.workbench.notification import NotificationService

logger = logging.getLogger(__name__)


@dataclass
class ContinuationResult:
    """Outcome of a continue-sync run."""

    success: bool
    preview: Optional[EditorInput] = None
    saved: bool = False
    preview_closed: bool = False
    error: Optional[Exception] = None


class ConflictContinuationFlow:
    """Save the conflict preview, continue the sync, then close the preview."""

    def __init__(
        self,
        sync_service: UserDataSyncService,
        editor_service: EditorService,
        text_file_service: TextFileService,
        notification_service: NotificationService,
    ):
        self._sync_service = sync_service
        self._editor_service = editor_service
        self._text_file_service = text_file_service
        self._notification_service = notification_service

    def find_preview_editor(self) -> Optional[EditorInput]:
        """First open editor, in opening order, showing a preview resource."""
        for editor in self._editor_service.editors:
            if editor.resource.scheme == USER_DATA_PREVIEW_SCHEME:
                return editor
        return None

    async def run(self) -> ContinuationResult:
        """
        Continue a sync that stopped on conflicts.

        A dirty preview is saved first; a failing save propagates to the
        caller. If ``continue_sync()`` fails the error is shown as a
        notification and the preview stays open. On success the preview
        is closed.

        Returns:
            ContinuationResult describing what was done.
        """
        preview = self.find_preview_editor()
        result = ContinuationResult(success=False, preview=preview)

        if preview is not None and preview.is_dirty():
            result.saved = await self._text_file_service.save(preview.resource)

        try:
            await self._sync_service.continue_sync()
        except Exception as e:
            logger.warning("Continue sync failed: %s", e)
            self._notification_service.error(e)
            result.error = e
            return result

        result.success = True
        if preview is not None:
            preview.dispose()
            result.preview_closed = True
        return result
