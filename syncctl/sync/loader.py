# Syncctl Sync Service Loader
# Resolve 'package.module:factory' references to sync service instances

import importlib
import logging

from syncctl.config.service import ConfigurationService
from syncctl.sync.service import UserDataSyncService

logger = logging.getLogger(__name__)


class SyncServiceLoadError(Exception):
    """Raised when a sync service reference cannot be turned into a service."""

    def __init__(self, message: str, reference: str = ""):
        self.message = message
        self.reference = reference
        super().__init__(message)


def load_sync_service(reference: str, configuration_service: ConfigurationService) -> UserDataSyncService:
    """
    Import a sync service factory and create the service.

    Args:
        reference: Factory as 'package.module:callable' (attribute may be dotted).
        configuration_service: Passed to the factory.

    Returns:
        The created sync service.

    Raises:
        SyncServiceLoadError: If the reference is malformed, cannot be imported,
            or the factory does not produce a sync service.
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise SyncServiceLoadError(f"Invalid service reference '{reference}', expected 'package.module:factory'", reference)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise SyncServiceLoadError(f"Cannot import '{module_name}': {e}", reference) from e

    factory = module
    for part in attr_path.split("."):
        try:
            factory = getattr(factory, part)
        except AttributeError as e:
            raise SyncServiceLoadError(f"'{module_name}' has no attribute '{attr_path}'", reference) from e

    if not callable(factory):
        raise SyncServiceLoadError(f"'{reference}' is not callable", reference)

    service = factory(configuration_service)
    if not isinstance(service, UserDataSyncService):
        raise SyncServiceLoadError(
            f"'{reference}' returned {type(service).__name__}, which is not a sync service",
            reference,
        )

    logger.debug("Loaded sync service %s from %s", type(service).__name__, reference)
    return service
