"""Render the updater's log records on a rich console."""

from __future__ import annotations

import logging

from rich.console import Console

PACKAGE_LOGGER = "nuget_version_updater"

LEVEL_STYLES = {
    logging.DEBUG: "dim",
    logging.INFO: None,
    logging.WARNING: "yellow",
    logging.ERROR: "bold red",
    logging.CRITICAL: "bold red",
}


class ConsoleLogHandler(logging.Handler):
    """Print each record's message on ``console`` styled by level."""

    def __init__(self, console: Console, level: int = logging.DEBUG):
        super().__init__(level)
        self.console = console
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.console.print(
                self.format(record),
                style=LEVEL_STYLES.get(record.levelno),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
        except Exception:
            self.handleError(record)


def configure_logging(console: Console) -> ConsoleLogHandler:
    """Route the package's log records to ``console``.

    Handlers installed by earlier calls are removed first, so repeated runs
    in one process (tests) do not print twice.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, ConsoleLogHandler):
            logger.removeHandler(handler)
            handler.close()

    handler = ConsoleLogHandler(console)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler
