"""Logging setup for command-line runs"""

import logging
import sys


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: str = "WARNING") -> None:
    """Send log records at log_level and above to stderr."""
    logging.basicConfig(
        level=log_level.upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    # Quieten down noisy libraries
    logging.getLogger("markdown_it").setLevel(logging.WARNING)
