"""Logging configuration for processes hosting the htpasswd provider."""

from __future__ import annotations

import logging
import sys

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_PACKAGE_LOGGER = "htpasswd_resource"
_stderr_handler: logging.Handler | None = None


def configure_logging(*, level: str) -> logging.Logger:
    """Attach one stderr handler to the package logger at the requested level.

    Stdout is left untouched; dynamic provider hosts read their handshake from it.
    """

    global _stderr_handler

    normalized_level = level.strip().upper() if level.strip() else "INFO"
    resolved_level = getattr(logging, normalized_level, logging.INFO)

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.setLevel(resolved_level)
    if _stderr_handler is None:
        _stderr_handler = logging.StreamHandler(sys.stderr)
        _stderr_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        package_logger.addHandler(_stderr_handler)
    return package_logger
