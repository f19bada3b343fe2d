"""
Logging infrastructure for Talent-Match.

Uses Loguru for console and file logging, plus a separate audit sink
recording every automated scoring decision.
"""

import sys
from typing import Any

from loguru import logger

from src.utils.config import get_settings


def setup_logging() -> None:
    """
    Configure application-wide logging.

    Sets up console and file logging with rotation and retention, and
    an audit sink that only receives records bound with ``audit_type``.
    """
    settings = get_settings()
    log_settings = settings.logging

    logger.remove()

    # Variable values only show up in tracebacks for local development
    enable_diagnose = settings.debug and settings.environment == "development"

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>",
            level=log_settings.level,
            colorize=True,
            backtrace=True,
            diagnose=enable_diagnose,
        )

    if not log_settings.file_output:
        logger.info(f"Logging initialized - Level: {log_settings.level}")
        return

    log_file = log_settings.file_path
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_file,
        format=log_settings.format,
        level=log_settings.level,
        rotation=log_settings.rotation,
        retention=log_settings.retention,
        compression="zip",
        backtrace=True,
        diagnose=enable_diagnose,
        enqueue=True,
    )

    # Scoring decisions are kept longer than regular logs
    audit_log_path = log_file.parent / "audit.log"
    logger.add(
        audit_log_path,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[audit_type]} | {message}",
        level="INFO",
        filter=lambda record: "audit_type" in record["extra"],
        rotation="1 week",
        retention="1 year",
        compression="zip",
        enqueue=True,
    )

    logger.info(f"Logging initialized - Level: {log_settings.level}")


# Records logged before setup_logging() still need extra[name] for the console format
logger.configure(extra={"name": "talent_match"})


def get_logger(name: str) -> Any:
    """Loguru logger tagged with ``name`` for the console format."""
    return logger.bind(name=name)


# Candidate contact fields never belong in the audit trail
_REDACTED_FIELDS = frozenset({"email", "phone", "contact_email", "contact_phone"})


def audit_log(
    action: str,
    details: dict[str, Any],
    audit_type: str = "DECISION",
) -> None:
    """
    Write one entry to the audit sink.

    Args:
        action: What happened, e.g. "match_scored"
        details: Flat mapping of ids and scores for the entry
        audit_type: DECISION for a stored score, TRIGGER for a finished run
    """
    entry = {k: "***" if k.lower() in _REDACTED_FIELDS else v for k, v in details.items()}
    logger.bind(audit_type=audit_type).info(f"{action} | {entry}")


class LoggerMixin:
    """Gives a class a ``logger`` named after itself."""

    @property
    def logger(self) -> Any:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger
