"""Logging setup driven by WardenConfig.

Library modules only ever call ``logging.getLogger(__name__)``; handlers are
attached here, by applications (the CLI) that own the process. JSON output
goes through structlog's processor chain so stdlib records render the same
way structlog events would.
"""

from __future__ import annotations

import logging

import structlog

from warden_core.config.models import WardenConfig

LOGGER_NAMES = ("warden_core", "warden")

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def json_formatter() -> structlog.stdlib.ProcessorFormatter:
    """Formatter rendering each stdlib record as one JSON object."""
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )


def configure_logging(config: WardenConfig) -> None:
    """Attach a single stream handler to the Warden loggers.

    Safe to call repeatedly: existing Warden handlers are replaced, not stacked.
    """
    level = _LEVELS[config.log_level]
    if config.log_format == "json":
        formatter: logging.Formatter = json_formatter()
    else:
        formatter = logging.Formatter(_TEXT_FORMAT, datefmt=_DATE_FORMAT)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for handler in [h for h in logger.handlers if getattr(h, "_warden", False)]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler()
        handler._warden = True  # type: ignore[attr-defined]
        handler.setFormatter(formatter)
        logger.addHandler(handler)
