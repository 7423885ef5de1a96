"""Console logging for the secretmaker CLI, rendered with rich on stderr."""

import logging

from rich.console import Console
from rich.logging import RichHandler

# stderr keeps log lines out of generated output
console = Console(stderr=True)


def setup_logging(level: str = "WARNING") -> None:
    """Route the standard logging module through a RichHandler."""
    log_level = getattr(logging, str(level).upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.WARNING
    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
