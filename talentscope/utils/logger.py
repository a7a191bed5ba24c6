"""
Logging for TalentScope.

Loguru sinks for the console and a rotating application log, plus an
audit log recording who generated which report and which users they could
see.
"""

import sys
from datetime import date
from enum import Enum
from typing import Any

from bson import ObjectId
from loguru import logger

from talentscope.utils.config import get_settings

AUDIT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {extra[audit_type]} | {message}"


def setup_logging() -> None:
    """Install the console, application and audit sinks from settings."""
    settings = get_settings()
    log_settings = settings.logging

    logger.remove()
    diagnose = settings.debug and settings.environment == "development"

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "<cyan>{name}</cyan> | <level>{message}</level>",
            level=log_settings.level,
            colorize=True,
            diagnose=diagnose,
        )

    log_dir = log_settings.file_path.parent
    log_dir.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_settings.file_path,
        format=log_settings.format,
        level=log_settings.level,
        rotation=log_settings.rotation,
        retention=log_settings.retention,
        compression="zip",
        diagnose=diagnose,
        enqueue=True,
    )
    logger.add(
        log_dir / "audit.log",
        format=AUDIT_FORMAT,
        level="INFO",
        filter=lambda record: "audit_type" in record["extra"],
        rotation="1 week",
        retention="1 year",
        enqueue=True,
    )


def get_logger(name: str) -> Any:
    """Logger bound to a module or class name."""
    return logger.bind(name=name)


def _audit_value(value: Any) -> Any:
    """Render ids, id sets, dates and enums as stable plain values."""
    if isinstance(value, dict):
        return {str(k): _audit_value(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(_audit_value(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [_audit_value(v) for v in value]
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value


def audit_log(action: str, details: dict[str, Any], audit_type: str = "ACCESS") -> None:
    """
    Write one audit entry.

    Args:
        action: What happened, e.g. ``report_generated``
        details: Actor, scope and request details
        audit_type: ACCESS for report reads, VISIBILITY for scope resolution
    """
    logger.bind(audit_type=audit_type).info(f"{action} | {_audit_value(details)}")


class LoggerMixin:
    """Gives a class a ``logger`` bound to its class name."""

    @property
    def logger(self) -> Any:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger
