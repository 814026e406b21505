"""Python logging integration for metricrecorder.

The library only emits records; handlers and levels are configured by the
host application through the standard library logging module.
"""

import logging

ROOT_LOGGER_NAME = "metricrecorder"


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return a logger for the given module name.

    Example:
        ```python
        from metricrecorder import get_logger

        logger = get_logger(__name__)
        ```
    """
    return logging.getLogger(name)


def install_null_handler() -> logging.Logger:
    """Attach a NullHandler to the package root logger once."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in root.handlers):
        root.addHandler(logging.NullHandler())
    return root
