# Syncctl Configuration Service
# Dotted-key access to the live configuration with change notifications

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel

from syncctl.config.defaults import get_default_config
from syncctl.config.loader import load_config, save_config
from syncctl.config.registry import ConfigurationError, ConfigurationRegistry, create_default_registry
from syncctl.config.schema import SyncctlConfig
from syncctl.utils.event import Emitter, Event

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class ConfigurationChangeEvent:
    """Describes which settings changed."""

    affected_keys: frozenset[str]
    source: str = "user"

    def affects_configuration(self, key: str) -> bool:
        """True if key, or any setting below it, changed."""
        return any(changed == key or changed.startswith(key + ".") for changed in self.affected_keys)


class ConfigurationService:
    """
    Holds the current configuration and notifies listeners of changes.

    Values are addressed by dotted keys following the YAML layout,
    e.g. ``user_configuration.auto_sync``. When bound to a config path,
    updates are written back to that file.
    """

    def __init__(
        self,
        config: Optional[SyncctlConfig] = None,
        *,
        config_path: Optional[Path] = None,
        registry: Optional[ConfigurationRegistry] = None,
    ):
        self._config = config or SyncctlConfig.model_validate(get_default_config())
        self.config_path = config_path
        self.registry = registry or create_default_registry()
        self._on_did_change_configuration: Emitter[ConfigurationChangeEvent] = Emitter()

    @classmethod
    def from_file(cls, config_path: Path, **kwargs: Any) -> "ConfigurationService":
        """Create a service bound to config_path, using defaults if the file is absent."""
        config = load_config(config_path) if config_path.exists() else None
        return cls(config, config_path=config_path, **kwargs)

    @property
    def config(self) -> SyncctlConfig:
        return self._config

    @property
    def on_did_change_configuration(self) -> Event[ConfigurationChangeEvent]:
        return self._on_did_change_configuration.event

    def get_value(self, key: str, default: Any = None) -> Any:
        """Read a setting, falling back to its registered default, then to default."""
        value = _lookup(self._config, key)
        if value is not _MISSING:
            return value
        prop = self.registry.get_property(key)
        if prop is not None:
            return prop.default
        return default

    def update_value(self, key: str, value: Any) -> None:
        """
        Write a registered setting.

        Fires a change event only if the value actually changed.

        Raises:
            ConfigurationError: If the setting is unknown or the value has the wrong type.
        """
        self.registry.validate_value(key, value)

        if self.get_value(key) == value:
            return

        # Edit a copy so a failed save leaves the live config untouched
        updated = self._config.model_copy(deep=True)
        parent_key, _, attr = key.rpartition(".")
        parent = _lookup(updated, parent_key) if parent_key else updated
        if not isinstance(parent, BaseModel) or attr not in type(parent).model_fields:
            raise ConfigurationError(f"Setting '{key}' has no place in the configuration model", key=key)
        setattr(parent, attr, value)

        if self.config_path is not None:
            save_config(updated, self.config_path)
        self._config = updated

        logger.debug("Configuration %s = %r", key, value)
        self._on_did_change_configuration.fire(ConfigurationChangeEvent(frozenset({key}), source="user"))

    def reload(self) -> ConfigurationChangeEvent | None:
        """
        Re-read the bound config file and report registered settings that changed.

        Returns:
            The fired change event, or None if nothing changed.
        """
        if self.config_path is None:
            return None

        new_config = load_config(self.config_path)
        changed = {
            key
            for key in self.registry.properties
            if _lookup(self._config, key) != _lookup(new_config, key)
        }
        self._config = new_config
        if not changed:
            return None

        event = ConfigurationChangeEvent(frozenset(changed), source="file")
        logger.info("Configuration reloaded, changed: %s", ", ".join(sorted(changed)))
        self._on_did_change_configuration.fire(event)
        return event

    def dispose(self) -> None:
        self._on_did_change_configuration.dispose()


def _lookup(model: BaseModel, key: str) -> Any:
    current: Any = model
    for part in key.split("."):
        if isinstance(current, BaseModel) and part in type(current).model_fields:
            current = getattr(current, part)
        elif isinstance(current, dict) and part in current:
            current = current[part]
        else:
            return _MISSING
    return current
