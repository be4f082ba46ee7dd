# Syncctl Configuration Registry
# Declared settings with their type, default and scope

from typing import Any, Optional

from pydantic import BaseModel, Field

from syncctl.config.schema import ConfigurationScope

AUTO_SYNC_SETTING = "user_configuration.auto_sync"

_TYPE_CHECKS: dict[str, tuple[type, ...]] = {
    "boolean": (bool,),
    "string": (str,),
    "integer": (int,),
    "number": (int, float),
}


class ConfigurationError(Exception):
    """Raised for unknown settings or values of the wrong type."""

    def __init__(self, message: str, key: str = ""):
        self.message = message
        self.key = key
        super().__init__(message)


class ConfigurationProperty(BaseModel):
    """A single declared setting."""

    type: str = Field(description="JSON type name: boolean, string, integer or number")
    default: Any = Field(default=None, description="Value used when nothing is configured")
    description: str = Field(default="", description="Human-readable description")
    scope: ConfigurationScope = Field(default=ConfigurationScope.WINDOW, description="Where the setting applies")


class ConfigurationNode(BaseModel):
    """A titled group of settings."""

    id: str
    title: str = ""
    order: int = 0
    properties: dict[str, ConfigurationProperty] = Field(default_factory=dict)


class ConfigurationRegistry:
    """Registry of every setting the configuration service accepts."""

    def __init__(self) -> None:
        self._nodes: list[ConfigurationNode] = []
        self._properties: dict[str, ConfigurationProperty] = {}

    def register_configuration(self, node: ConfigurationNode) -> None:
        for key in node.properties:
            if key in self._properties:
                raise ConfigurationError(f"Setting '{key}' is already registered", key=key)
        self._nodes.append(node)
        self._properties.update(node.properties)

    def get_property(self, key: str) -> Optional[ConfigurationProperty]:
        return self._properties.get(key)

    @property
    def properties(self) -> dict[str, ConfigurationProperty]:
        return dict(self._properties)

    @property
    def nodes(self) -> list[ConfigurationNode]:
        return sorted(self._nodes, key=lambda node: node.order)

    def validate_value(self, key: str, value: Any) -> ConfigurationProperty:
        """
        Check that key is registered and value matches its declared type.

        Raises:
            ConfigurationError: If the setting is unknown or the value has the wrong type.
        """
        prop = self._properties.get(key)
        if prop is None:
            raise ConfigurationError(f"Unknown setting: {key}", key=key)

        expected = _TYPE_CHECKS.get(prop.type)
        if expected is None:
            return prop

        # bool is an int subclass, keep them apart
        if isinstance(value, bool) and prop.type != "boolean":
            raise ConfigurationError(f"Setting '{key}' expects {prop.type}, got boolean", key=key)
        if not isinstance(value, expected):
            raise ConfigurationError(
                f"Setting '{key}' expects {prop.type}, got {type(value).__name__}",
                key=key,
            )
        return prop


def create_default_registry() -> ConfigurationRegistry:
    """Registry with the settings syncctl itself declares."""
    registry = ConfigurationRegistry()
    registry.register_configuration(
        ConfigurationNode(
            id="user_configuration",
            title="User Configuration",
            order=30,
            properties={
                AUTO_SYNC_SETTING: ConfigurationProperty(
                    type="boolean",
                    default=False,
                    description=(
                        "When enabled, automatically synchronises User Configuration: "
                        "Settings, Keybindings, Extensions & Snippets."
                    ),
                    scope=ConfigurationScope.APPLICATION,
                ),
            },
        )
    )
    return registry
