# Syncctl Workbench Module
# UI-facing services: context keys, activity badges, notifications, commands, editors

from syncctl.workbench.activity import GLOBAL_ACTIVITY_ID, Activity, ActivityService, NumberBadge, ProgressBadge
from syncctl.workbench.commands import (
    CommandAction,
    CommandNotFoundError,
    CommandUnavailableError,
    CommandsRegistry,
    MenuId,
    MenuItem,
    MenuRegistry,
)
from syncctl.workbench.context import (
    ContextKey,
    ContextKeyExpr,
    ContextKeyService,
    MappingContext,
    RawContextKey,
    ResourceContextKey,
)
from syncctl.workbench.contributions import LifecyclePhase, WorkbenchContributionsRegistry
from syncctl.workbench.editor import URI, EditorInput, EditorService, FileSaveError, TextFileService
from syncctl.workbench.notification import NotificationHandle, NotificationService, PromptChoice, Severity

__all__ = [
    # Activity
    "GLOBAL_ACTIVITY_ID",
    "Activity",
    "ActivityService",
    "NumberBadge",
    "ProgressBadge",
    # Commands
    "CommandAction",
    "CommandNotFoundError",
    "CommandUnavailableError",
    "CommandsRegistry",
    "MenuId",
    "MenuItem",
    "MenuRegistry",
    # Context
    "ContextKey",
    "ContextKeyExpr",
    "ContextKeyService",
    "MappingContext",
    "RawContextKey",
    "ResourceContextKey",
    # Contributions
    "LifecyclePhase",
    "WorkbenchContributionsRegistry",
    # Editors
    "URI",
    "EditorInput",
    "EditorService",
    "FileSaveError",
    "TextFileService",
    # Notifications
    "NotificationHandle",
    "NotificationService",
    "PromptChoice",
    "Severity",
]
