# Syncctl Configuration Schema
# Pydantic models for YAML configuration validation

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class ConfigurationScope(str, Enum):
    """Where a setting applies."""

    APPLICATION = "application"
    WINDOW = "window"


class UserConfigurationSection(BaseModel):
    """Settings controlling user configuration synchronization."""

    auto_sync: bool = Field(
        default=False,
        description=(
            "When enabled, automatically synchronises User Configuration: "
            "Settings, Keybindings, Extensions & Snippets."
        ),
    )


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")
    log_file: str | None = Field(default=None, description="Path to log file")

    @field_validator("log_file")
    @classmethod
    def expand_optional_path(cls, v: str | None) -> str | None:
        """Expand ~ in optional paths."""
        if v is None:
            return None
        return str(Path(v).expanduser())


class SyncctlConfig(BaseModel):
    """Root configuration model for syncctl."""

    user_configuration: UserConfigurationSection = Field(
        default_factory=UserConfigurationSection, description="User configuration sync settings"
    )
    service: str | None = Field(
        default=None,
        description="Sync service factory as 'package.module:callable'",
    )
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    @field_validator("service")
    @classmethod
    def check_service_reference(cls, v: str | None) -> str | None:
        """Require the 'module:attribute' form."""
        if v is None:
            return None
        module, sep, attr = v.partition(":")
        if not sep or not module or not attr:
            raise ValueError(f"service must look like 'package.module:factory', got {v!r}")
        return v
