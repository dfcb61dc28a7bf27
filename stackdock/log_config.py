"""Logging configuration for stackdock.

Library modules log through ``logging.getLogger(__name__)``; only the command
line installs a handler.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(*, verbose: bool = False) -> None:
    """Route stackdock log records to stderr.

    Repeated calls replace the previous handler rather than stacking a new one.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("stackdock")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
