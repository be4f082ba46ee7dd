# Syncctl Config Tests
# Tests for configuration schema, loading, registry and the configuration service

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from pydantic import ValidationError

from syncctl.config.defaults import DEFAULT_CONFIG, generate_default_config, get_default_config
from syncctl.config.loader import (
    ensure_config_exists,
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
from syncctl.config.schema import ConfigurationScope, SyncctlConfig
from syncctl.config.service import ConfigurationChangeEvent, ConfigurationService


class TestSyncctlConfig:
    """Tests for SyncctlConfig schema."""

    def test_defaults(self):
        """Test default values."""
        config = SyncctlConfig()
        assert config.user_configuration.auto_sync is False
        assert config.service is None
        assert config.output.colored is True

    def test_full_config(self, sample_config: dict):
        """Test loading a complete config."""
        config = SyncctlConfig.model_validate(sample_config)
        assert config.service == "example.engine:create_service"
        assert config.output.colored is False

    def test_service_reference_requires_colon(self):
        """Test that a service reference needs a colon."""
        with pytest.raises(ValidationError):
            SyncctlConfig(service="example.engine")

    def test_service_reference_requires_both_parts(self):
        """Test that a service reference needs module and callable."""
        with pytest.raises(ValidationError):
            SyncctlConfig(service=":factory")

    def test_log_file_expanded(self, temp_home: Path):
        """Test that ~ in log_file is expanded."""
        config = SyncctlConfig.model_validate({"output": {"log_file": "~/syncctl.log"}})
        assert config.output.log_file == str(temp_home / "syncctl.log")


class TestDefaults:
    """Tests for default configuration."""

    def test_get_default_config_is_copy(self):
        """Test that defaults are returned as a copy."""
        config = get_default_config()
        config["user_configuration"]["auto_sync"] = True
        assert DEFAULT_CONFIG["user_configuration"]["auto_sync"] is False

    def test_generated_yaml_is_valid(self):
        """Test the generated default file parses and validates."""
        content = generate_default_config()
        assert content.startswith("# syncctl")
        data = yaml.safe_load(content)
        assert SyncctlConfig.model_validate(data).user_configuration.auto_sync is False


class TestLoader:
    """Tests for loading and saving configuration files."""

    def test_config_path_default(self, temp_home: Path):
        """Test the default config path."""
        assert get_config_path() == temp_home / ".config" / "syncctl" / "config.yaml"

    def test_config_path_env_override(self, config_file: Path):
        """Test SYNCCTL_CONFIG overrides the path."""
        assert get_config_path() == config_file

    def test_load_config(self, config_file: Path):
        """Test loading the config file."""
        config = load_config()
        assert config.service == "example.engine:create_service"

    def test_load_missing(self, temp_home: Path):
        """Test loading a missing file."""
        with pytest.raises(FileNotFoundError, match="syncctl config init"):
            load_config()

    def test_load_partial_merges_defaults(self, temp_dir: Path):
        """Test that missing settings come from defaults."""
        path = temp_dir / "config.yaml"
        path.write_text("user_configuration:\n  auto_sync: true\n", encoding="utf-8")

        config = load_config(path)

        assert config.user_configuration.auto_sync is True
        assert config.output.colored is True

    def test_load_root_not_mapping(self, temp_dir: Path):
        """Test that a list at the top level is rejected with a readable error."""
        path = temp_dir / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="root must be a mapping"):
            load_config(path)

    def test_load_empty_file(self, temp_dir: Path):
        """Test an empty file loads as defaults."""
        path = temp_dir / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path).user_configuration.auto_sync is False

    def test_save_and_load(self, temp_dir: Path):
        """Test saving creates parent directories and loads back."""
        path = temp_dir / "nested" / "config.yaml"
        config = SyncctlConfig()
        config.user_configuration.auto_sync = True

        save_config(config, path)

        assert load_config(path).user_configuration.auto_sync is True

    def test_ensure_config_exists(self, temp_home: Path):
        """Test ensure_config_exists creates the file once."""
        path, created = ensure_config_exists()
        assert created is True
        assert path.exists()

        path, created = ensure_config_exists()
        assert created is False

    def test_load_or_default_does_not_write(self, temp_home: Path):
        """Test that defaults are not written to disk."""
        config = load_or_default_config()
        assert config.user_configuration.auto_sync is False
        assert not get_config_path().exists()


class TestValidateConfigFile:
    """Tests for validate_config_file."""

    def test_valid(self, config_file: Path):
        """Test a valid file."""
        is_valid, errors = validate_config_file(config_file)
        assert is_valid
        assert errors == []

    def test_missing_file(self, temp_dir: Path):
        """Test a missing file."""
        is_valid, errors = validate_config_file(temp_dir / "nope.yaml")
        assert not is_valid
        assert "not found" in errors[0]

    def test_invalid_yaml(self, temp_dir: Path):
        """Test unparsable YAML."""
        path = temp_dir / "config.yaml"
        path.write_text("user_configuration: [unclosed", encoding="utf-8")
        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert "Invalid YAML" in errors[0]

    def test_empty(self, temp_dir: Path):
        """Test an empty file."""
        path = temp_dir / "config.yaml"
        path.write_text("", encoding="utf-8")
        assert validate_config_file(path) == (False, ["Configuration file is empty"])

    def test_root_not_mapping(self, temp_dir: Path):
        """Test a list at the top level."""
        path = temp_dir / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        assert validate_config_file(path) == (False, ["Configuration root must be a mapping"])

    def test_wrong_type(self, temp_dir: Path):
        """Test a value of the wrong type."""
        path = temp_dir / "config.yaml"
        path.write_text("user_configuration:\n  auto_sync: [1, 2]\n", encoding="utf-8")
        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert any("auto_sync" in error for error in errors)

    def test_missing_section(self, temp_dir: Path):
        """Test a file without user_configuration."""
        path = temp_dir / "config.yaml"
        path.write_text("output:\n  verbose: true\n", encoding="utf-8")
        is_valid, errors = validate_config_file(path)
        assert not is_valid
        assert errors == ["Missing 'user_configuration' section"]


class TestConfigurationRegistry:
    """Tests for ConfigurationRegistry."""

    def test_default_registry(self):
        """Test the auto sync setting is registered."""
        registry = create_default_registry()
        prop = registry.get_property(AUTO_SYNC_SETTING)
        assert prop is not None
        assert prop.type == "boolean"
        assert prop.default is False
        assert prop.scope == ConfigurationScope.APPLICATION

    def test_duplicate_registration(self):
        """Test registering a setting twice."""
        registry = create_default_registry()
        node = ConfigurationNode(
            id="again",
            properties={AUTO_SYNC_SETTING: ConfigurationProperty(type="boolean")},
        )
        with pytest.raises(ConfigurationError) as exc_info:
            registry.register_configuration(node)
        assert exc_info.value.key == AUTO_SYNC_SETTING

    def test_nodes_sorted_by_order(self):
        """Test nodes are kept in order."""
        registry = ConfigurationRegistry()
        registry.register_configuration(ConfigurationNode(id="late", order=20))
        registry.register_configuration(ConfigurationNode(id="early", order=10))
        assert [node.id for node in registry.nodes] == ["early", "late"]

    def test_validate_unknown(self):
        """Test validating an unknown setting."""
        with pytest.raises(ConfigurationError, match="Unknown setting"):
            create_default_registry().validate_value("nope", True)

    def test_validate_wrong_type(self):
        """Test validating a value of the wrong type."""
        with pytest.raises(ConfigurationError, match="expects boolean"):
            create_default_registry().validate_value(AUTO_SYNC_SETTING, "yes")

    def test_bool_is_not_integer(self):
        """Test that booleans are not accepted as integers."""
        registry = ConfigurationRegistry()
        registry.register_configuration(
            ConfigurationNode(id="n", properties={"limits.count": ConfigurationProperty(type="integer", default=0)})
        )
        registry.validate_value("limits.count", 3)
        with pytest.raises(ConfigurationError):
            registry.validate_value("limits.count", True)


class TestConfigurationChangeEvent:
    """Tests for ConfigurationChangeEvent."""

    def test_affects_key_and_parent(self):
        """Test matching changed keys and their parents."""
        event = ConfigurationChangeEvent(frozenset({AUTO_SYNC_SETTING}))
        assert event.affects_configuration(AUTO_SYNC_SETTING)
        assert event.affects_configuration("user_configuration")
        assert not event.affects_configuration("user")
        assert not event.affects_configuration("output")


class TestConfigurationService:
    """Tests for ConfigurationService."""

    def test_get_value(self, configuration_service: ConfigurationService):
        """Test reading values and fallbacks."""
        assert configuration_service.get_value(AUTO_SYNC_SETTING) is False
        assert configuration_service.get_value("output.colored") is True
        assert configuration_service.get_value("missing.key", "fallback") == "fallback"

    def test_update_fires_change(self, configuration_service: ConfigurationService):
        """Test that an update fires a change event."""
        events = []
        configuration_service.on_did_change_configuration(events.append)

        configuration_service.update_value(AUTO_SYNC_SETTING, True)

        assert configuration_service.get_value(AUTO_SYNC_SETTING) is True
        assert len(events) == 1
        assert events[0].affected_keys == frozenset({AUTO_SYNC_SETTING})
        assert events[0].source == "user"

    def test_update_same_value_silent(self, configuration_service: ConfigurationService):
        """Test that writing the current value fires nothing."""
        events = []
        configuration_service.on_did_change_configuration(events.append)
        configuration_service.update_value(AUTO_SYNC_SETTING, False)
        assert events == []

    def test_update_rejects_wrong_type(self, configuration_service: ConfigurationService):
        """Test that a mistyped update is rejected."""
        with pytest.raises(ConfigurationError):
            configuration_service.update_value(AUTO_SYNC_SETTING, "on")
        assert configuration_service.get_value(AUTO_SYNC_SETTING) is False

    def test_update_persists_to_bound_file(self, config_file: Path):
        """Test that updates are written to the bound file."""
        service = ConfigurationService.from_file(config_file)
        service.update_value(AUTO_SYNC_SETTING, True)

        assert load_config(config_file).user_configuration.auto_sync is True

    def test_failed_save_keeps_value(self, config_file: Path):
        """Test that a failed write leaves the setting and listeners untouched."""
        service = ConfigurationService.from_file(config_file)
        events = []
        service.on_did_change_configuration(events.append)

        with patch("syncctl.config.service.save_config", side_effect=OSError("read-only file system")):
            with pytest.raises(OSError):
                service.update_value(AUTO_SYNC_SETTING, True)

        assert service.get_value(AUTO_SYNC_SETTING) is False
        assert events == []
        assert load_config(config_file).user_configuration.auto_sync is False

    def test_from_file_missing_uses_defaults(self, temp_dir: Path):
        """Test binding to a file that does not exist yet."""
        path = temp_dir / "config.yaml"
        service = ConfigurationService.from_file(path)
        assert service.get_value(AUTO_SYNC_SETTING) is False
        assert not path.exists()

    def test_reload_reports_changes(self, config_file: Path, sample_config: dict):
        """Test that reload fires an event for changed settings."""
        service = ConfigurationService.from_file(config_file)
        events = []
        service.on_did_change_configuration(events.append)

        sample_config["user_configuration"]["auto_sync"] = True
        config_file.write_text(yaml.dump(sample_config), encoding="utf-8")
        event = service.reload()

        assert event is not None
        assert event.source == "file"
        assert events == [event]
        assert service.get_value(AUTO_SYNC_SETTING) is True

    def test_reload_unchanged(self, config_file: Path):
        """Test reload of an unchanged file."""
        service = ConfigurationService.from_file(config_file)
        assert service.reload() is None

    def test_reload_unbound(self, configuration_service: ConfigurationService):
        """Test reload without a bound file."""
        assert configuration_service.reload() is None
