# Syncctl Default Configuration
# Full default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "user_configuration": {
        "auto_sync": False,
    },
    "service": None,
    "output": {
        "verbose": False,
        "colored": True,
        "log_file": None,
    },
}


def get_default_config() -> dict[str, Any]:
    """Return an independent copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# syncctl - User Configuration Sync Control
#
# user_configuration.auto_sync:
#   When true, a sync is attempted every five minutes while the sync
#   service is idle, and immediately when the flag is switched on.
#
# service:
#   Factory for the sync service, as 'package.module:callable'.
#   The callable receives the configuration service.

"""
    return header + yaml.dump(get_default_config(), default_flow_style=False, sort_keys=False, allow_unicode=True)
