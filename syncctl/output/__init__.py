# Syncctl Output Module
# Rich console output

from syncctl.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
