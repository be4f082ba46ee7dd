# Syncctl Test Fixtures
# Pytest fixtures for syncctl tests

import logging
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
import yaml

from helpers import FakeSyncService, ManualTimer
from syncctl.config.service import ConfigurationService
from syncctl.sync.status import SyncStatus
from syncctl.workbench.activity import ActivityService
from syncctl.workbench.commands import CommandsRegistry, MenuRegistry
from syncctl.workbench.context import ContextKeyService
from syncctl.workbench.editor import EditorService, TextFileService
from syncctl.workbench.notification import NotificationService


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SYNCCTL_CONFIG", raising=False)
    return home


@pytest.fixture
def sample_config() -> dict:
    """Sample configuration dict."""
    return {
        "user_configuration": {"auto_sync": False},
        "service": "example.engine:create_service",
        "output": {"verbose": False, "colored": False},
    }


@pytest.fixture
def config_file(temp_home: Path, sample_config: dict, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Write the sample configuration and point SYNCCTL_CONFIG at it."""
    config_dir = temp_home / ".config" / "syncctl"
    config_dir.mkdir(parents=True)
    config_path = config_dir / "config.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    monkeypatch.setenv("SYNCCTL_CONFIG", str(config_path))
    return config_path


@pytest.fixture
def sync_service() -> FakeSyncService:
    return FakeSyncService(SyncStatus.IDLE)


@pytest.fixture
def manual_timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def configuration_service() -> ConfigurationService:
    """In-memory configuration service with defaults (auto sync off)."""
    return ConfigurationService()


@pytest.fixture
def context_key_service(configuration_service: ConfigurationService) -> ContextKeyService:
    return ContextKeyService(configuration_service)


@pytest.fixture
def activity_service() -> ActivityService:
    return ActivityService()


@pytest.fixture
def notification_service() -> NotificationService:
    return NotificationService()


@pytest.fixture
def editor_service(context_key_service: ContextKeyService) -> EditorService:
    return EditorService(context_key_service)


@pytest.fixture
def text_file_service(editor_service: EditorService) -> TextFileService:
    return TextFileService(editor_service)


@pytest.fixture
def commands_registry() -> CommandsRegistry:
    return CommandsRegistry()


@pytest.fixture
def menu_registry() -> MenuRegistry:
    return MenuRegistry()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo configure_logging so caplog sees syncctl records in every test."""
    yield
    logger = logging.getLogger("syncctl")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
