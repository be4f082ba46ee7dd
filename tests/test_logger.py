# Tests for syncctl.logger
# Rich logging setup

import logging
from io import StringIO
from pathlib import Path

from rich.console import Console as RichConsole
from rich.logging import RichHandler

from syncctl.config.schema import OutputConfig
from syncctl.logger import configure_logging


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_default_level_and_handler(self):
        """Test the default level and handler."""
        logger = configure_logging(console=RichConsole(file=StringIO()))
        assert logger.name == "syncctl"
        assert logger.level == logging.INFO
        assert [type(h) for h in logger.handlers] == [RichHandler]
        assert logger.propagate is False

    def test_verbose_override(self):
        """Test that verbose switches to DEBUG."""
        logger = configure_logging(OutputConfig(verbose=False), verbose=True, console=RichConsole(file=StringIO()))
        assert logger.level == logging.DEBUG

    def test_reconfigure_replaces_handlers(self):
        """Test that reconfiguring does not stack handlers."""
        configure_logging(console=RichConsole(file=StringIO()))
        logger = configure_logging(console=RichConsole(file=StringIO()))
        assert len(logger.handlers) == 1

    def test_messages_reach_console(self):
        """Test that child loggers reach the console."""
        stream = StringIO()
        configure_logging(console=RichConsole(file=stream, width=200))
        logging.getLogger("syncctl.sync.scheduler").warning("Auto sync failed: offline")
        assert "Auto sync failed: offline" in stream.getvalue()

    def test_log_file(self, temp_dir: Path):
        """Test logging to a file."""
        log_file = temp_dir / "logs" / "syncctl.log"
        logger = configure_logging(OutputConfig(log_file=str(log_file)), console=RichConsole(file=StringIO()))

        logging.getLogger("syncctl.app").info("Workbench started")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "INFO" in content
        assert "syncctl.app: Workbench started" in content
