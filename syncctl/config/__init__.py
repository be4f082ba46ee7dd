# Syncctl Configuration Module
# YAML-based configuration loading, validation, registry and live service

from syncctl.config.defaults import DEFAULT_CONFIG, generate_default_config, get_default_config
from syncctl.config.loader import (
    ensure_config_exists,
    get_config_dir,
    get_config_path,
    load_config,
    load_or_default_config,
    save_config,
    validate_config_file,
)
from syncctl.config.registry import (
    AUTO_SYNC_SETTING,
    ConfigurationError,
    ConfigurationNode,
    ConfigurationProperty,
    ConfigurationRegistry,
    create_default_registry,
)
from syncctl.config.schema import ConfigurationScope, OutputConfig, SyncctlConfig, UserConfigurationSection
from syncctl.config.service import ConfigurationChangeEvent, ConfigurationService

__all__ = [
    # Schema
    "SyncctlConfig",
    "UserConfigurationSection",
    "OutputConfig",
    "ConfigurationScope",
    # Registry
    "AUTO_SYNC_SETTING",
    "ConfigurationError",
    "ConfigurationNode",
    "ConfigurationProperty",
    "ConfigurationRegistry",
    "create_default_registry",
    # Service
    "ConfigurationService",
    "ConfigurationChangeEvent",
    # Loader
    "load_config",
    "load_or_default_config",
    "save_config",
    "get_config_dir",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "get_default_config",
    "generate_default_config",
]
