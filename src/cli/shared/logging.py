"""Logging configuration for the CLI.

Library modules log through loguru's ``logger``; this module only decides
where those records go and at which level.
"""

import os
import sys

from loguru import logger


def configure_logging(debug: bool = False) -> None:
    """Configure the loguru sink for a CLI run.

    Debug output is enabled by ``--debug`` or by GitHub's ``RUNNER_DEBUG=1``
    (set when a workflow is re-run with debug logging).

    Args:
        debug: Force debug-level logging
    """
    level = "DEBUG" if debug or os.getenv("RUNNER_DEBUG") == "1" else "INFO"
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<level>{level: <8}</level> | {message}",
        colorize=None,
    )
