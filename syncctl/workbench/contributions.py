# Syncctl Workbench Contributions
# Components instantiated at a lifecycle phase and disposed with the workbench

import logging
from collections.abc import Callable
from enum import IntEnum
from typing import Generic, TypeVar

from syncctl.utils.lifecycle import DisposableLike, DisposableStore

logger = logging.getLogger(__name__)

S = TypeVar("S")

ContributionFactory = Callable[[S], DisposableLike]


class LifecyclePhase(IntEnum):
    """Startup phases, in order."""

    STARTING = 1
    READY = 2
    EVENTUALLY = 3


class WorkbenchContributionsRegistry(Generic[S]):
    """
    Contribution factories grouped by phase.

    A factory registered for a phase that has already started is
    instantiated right away.
    """

    def __init__(self) -> None:
        self._factories: dict[LifecyclePhase, list[ContributionFactory[S]]] = {}
        self._instances = DisposableStore()
        self._services: S | None = None
        self._phase: LifecyclePhase | None = None

    @property
    def phase(self) -> LifecyclePhase | None:
        return self._phase

    @property
    def instance_count(self) -> int:
        return len(self._instances)

    def register_workbench_contribution(self, factory: ContributionFactory[S], phase: LifecyclePhase) -> None:
        self._factories.setdefault(phase, []).append(factory)
        if self._phase is not None and self._services is not None and phase <= self._phase:
            self._instantiate(factory, self._services)

    def start(self, services: S, phase: LifecyclePhase) -> None:
        """Instantiate every contribution of every phase up to and including phase."""
        self._services = services
        first = self._phase + 1 if self._phase is not None else LifecyclePhase.STARTING
        for current in LifecyclePhase:
            if first <= current <= phase:
                logger.debug("Entering lifecycle phase %s", current.name)
                for factory in self._factories.get(current, []):
                    self._instantiate(factory, services)
                self._phase = current

    def dispose(self) -> None:
        self._instances.dispose()

    def _instantiate(self, factory: ContributionFactory[S], services: S) -> None:
        self._instances.add(factory(services))
