"""Centralized logging configuration for the Networkable SDK."""

import logging
import sys

from networkable_sdk.config import LOG_LEVEL

SDK_LOGGER_NAME = "networkable_sdk"

_configured = False


def get_logger(module_name: str) -> logging.Logger:
    """Get a logger for the specified module.

    Installs a stderr handler on the SDK logger on first use, unless the
    embedding application already attached handlers to it.

    Args:
        module_name: Name of the module requesting the logger.

    Returns:
        logging.Logger: Child of the SDK logger for the module.
    """
    global _configured

    sdk_logger = logging.getLogger(SDK_LOGGER_NAME)

    if not _configured and not sdk_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s [%(name)s] %(message)s"))
        sdk_logger.addHandler(handler)
        sdk_logger.setLevel(LOG_LEVEL)
        sdk_logger.propagate = False
        _configured = True

    return logging.getLogger(f"{SDK_LOGGER_NAME}.{module_name}")
