# Syncctl Sync Status Contribution
# Maps sync status onto the global badge, the conflicts prompt and the status context key

import logging
from typing import Optional

from syncctl.sync.service import UserDataSyncService
from syncctl.sync.status import CONTEXT_SYNC_STATE, SyncStatus
from syncctl.utils.lifecycle import Disposable, DisposableLike, DisposableStore, MutableDisposable, to_disposable
from syncctl.workbench.activity import GLOBAL_ACTIVITY_ID, ActivityService, Badge, NumberBadge, ProgressBadge
from syncctl.workbench.context import ContextKeyService
from syncctl.workbench.notification import NotificationService, PromptChoice, Severity

logger = logging.getLogger(__name__)

CONFLICTS_MESSAGE = "Unable to sync due to conflicts. Please resolve them to continue."
RESOLVE_CONFLICTS_LABEL = "Resolve Conflicts"
SYNCING_DESCRIPTION = "Synchronising User Configuration..."
PROGRESS_BADGE_CLASS = "progress-badge"


class SyncStatusContribution(Disposable):
    """
    Keeps the UI in step with the sync service status.

    On every status change the ``syncStatus`` context key is updated first,
    then the global badge, then the conflicts prompt:

    - ``Syncing`` shows a progress badge, ``HasConflicts`` a badge counting 1.
      Any other status clears the badge. A new badge always replaces the old one.
    - ``HasConflicts`` shows a single "Resolve Conflicts" prompt per conflict
      episode. Leaving ``HasConflicts`` closes it; dismissing it lets the
      next episode show a fresh one.
    """

    def __init__(
        self,
        sync_service: UserDataSyncService,
        context_key_service: ContextKeyService,
        activity_service: ActivityService,
        notification_service: NotificationService,
    ):
        super().__init__()
        self._sync_service = sync_service
        self._activity_service = activity_service
        self._notification_service = notification_service

        self._sync_status_context = CONTEXT_SYNC_STATE.bind_to(context_key_service)
        self._badge: MutableDisposable[DisposableLike] = self._register(MutableDisposable())
        self._badge_status: Optional[SyncStatus] = None
        self._conflicts_warning: MutableDisposable[DisposableStore] = self._register(MutableDisposable())

        self._on_did_change_status(sync_service.status)
        self._register(sync_service.on_did_change_status(self._on_did_change_status))

    @property
    def has_badge(self) -> bool:
        return self._badge.value is not None

    @property
    def has_conflicts_warning(self) -> bool:
        return self._conflicts_warning.value is not None

    def _on_did_change_status(self, status: SyncStatus) -> None:
        self._sync_status_context.set(status)
        self._update_badge(status)
        self._update_conflicts_warning(status)

    def _update_badge(self, status: SyncStatus) -> None:
        # Same status again keeps the badge already shown
        if self._badge.value is not None and status == self._badge_status:
            return

        badge: Optional[Badge] = None
        css_class: Optional[str] = None
        if status == SyncStatus.HAS_CONFLICTS:
            badge = NumberBadge(1, lambda: RESOLVE_CONFLICTS_LABEL)
        elif status == SyncStatus.SYNCING:
            badge = ProgressBadge(lambda: SYNCING_DESCRIPTION)
            css_class = PROGRESS_BADGE_CLASS

        self._badge.clear()
        self._badge_status = None

        if badge is not None:
            self._badge.value = self._activity_service.show_activity(GLOBAL_ACTIVITY_ID, badge, css_class)
            self._badge_status = status

    def _update_conflicts_warning(self, status: SyncStatus) -> None:
        if status != SyncStatus.HAS_CONFLICTS:
            self._conflicts_warning.clear()
            return

        if self._conflicts_warning.value is not None:
            return

        logger.info("Sync has conflicts, prompting to resolve them")
        handle = self._notification_service.prompt(
            Severity.WARNING,
            CONFLICTS_MESSAGE,
            [PromptChoice(RESOLVE_CONFLICTS_LABEL, self._sync_service.handle_conflicts)],
        )
        warning = DisposableStore()
        warning.add(to_disposable(handle.close))
        warning.add(handle.on_did_close(lambda _: self._conflicts_warning.clear()))
        self._conflicts_warning.value = warning
