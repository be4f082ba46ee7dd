# Syncctl Logging
# Rich console logging plus an optional plain log file

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from syncctl.config.schema import OutputConfig
from syncctl.utils.paths import ensure_dir

LOGGER_NAME = "syncctl"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(
    output: Optional[OutputConfig] = None,
    *,
    verbose: Optional[bool] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Configure the ``syncctl`` logger.

    Args:
        output: Output settings (verbosity, colors, log file).
        verbose: Overrides output.verbose when given.
        console: Rich console for the handler (defaults to stderr).

    Returns:
        The configured package logger.
    """
    output = output or OutputConfig()
    is_verbose = output.verbose if verbose is None else verbose

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if is_verbose else logging.INFO)

    # Reconfiguring replaces earlier handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    rich_console = console or Console(stderr=True, no_color=not output.colored)
    logger.addHandler(
        RichHandler(
            console=rich_console,
            show_path=is_verbose,
            markup=False,
            rich_tracebacks=is_verbose,
        )
    )

    if output.log_file:
        log_path = Path(output.log_file)
        ensure_dir(log_path.parent)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
