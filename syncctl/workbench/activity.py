# Syncctl Activity
# Badges shown on activity anchors

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional, Union

from syncctl.utils.event import Emitter, Event
from syncctl.utils.lifecycle import DisposableLike, to_disposable

logger = logging.getLogger(__name__)

GLOBAL_ACTIVITY_ID = "syncctl.globalActivity"

Description = Union[str, Callable[[], str]]


def _describe(description: Description) -> str:
    return description() if callable(description) else description


@dataclass(frozen=True)
class NumberBadge:
    """Badge showing a count."""

    number: int
    description: Description = ""

    def get_description(self) -> str:
        return _describe(self.description)


@dataclass(frozen=True)
class ProgressBadge:
    """Badge showing ongoing work."""

    description: Description = ""

    def get_description(self) -> str:
        return _describe(self.description)


Badge = Union[NumberBadge, ProgressBadge]


@dataclass(eq=False)
class Activity:
    """A badge currently shown on an activity anchor."""

    activity_id: str
    badge: Badge
    css_class: Optional[str] = None
    _disposed: bool = field(default=False, repr=False)

    @property
    def is_disposed(self) -> bool:
        return self._disposed


@dataclass(frozen=True)
class ActivityChangeEvent:
    activity_id: str
    activity: Activity
    shown: bool


class ActivityService:
    """Tracks badges per activity anchor."""

    def __init__(self) -> None:
        self._activities: dict[str, list[Activity]] = {}
        self._on_did_change_activity: Emitter[ActivityChangeEvent] = Emitter()

    @property
    def on_did_change_activity(self) -> Event[ActivityChangeEvent]:
        return self._on_did_change_activity.event

    def show_activity(self, activity_id: str, badge: Badge, css_class: Optional[str] = None) -> DisposableLike:
        """Show badge on activity_id. Disposing the returned handle removes it."""
        activity = Activity(activity_id, badge, css_class)
        self._activities.setdefault(activity_id, []).append(activity)
        logger.debug("Badge shown on %s: %s", activity_id, badge)
        self._on_did_change_activity.fire(ActivityChangeEvent(activity_id, activity, shown=True))

        def remove() -> None:
            activity._disposed = True
            active = self._activities.get(activity_id, [])
            if activity in active:
                active.remove(activity)
            logger.debug("Badge removed from %s: %s", activity_id, badge)
            self._on_did_change_activity.fire(ActivityChangeEvent(activity_id, activity, shown=False))

        return to_disposable(remove)

    def get_activities(self, activity_id: str) -> list[Activity]:
        return list(self._activities.get(activity_id, []))

    def get_badge(self, activity_id: str) -> Optional[Badge]:
        """The most recently shown badge still alive on activity_id."""
        active = self._activities.get(activity_id)
        return active[-1].badge if active else None

    def dispose(self) -> None:
        self._on_did_change_activity.dispose()
