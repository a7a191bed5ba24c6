"""
Utility modules for TalentScope.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Application-wide constants
"""

from talentscope.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    settings,
    ROOT_DIR,
    PACKAGE_DIR,
    LOGS_DIR,
)
from talentscope.utils.constants import (
    APP_NAME,
    APP_DISPLAY_NAME,
    VERSION,
    AttributionParty,
    AuditAction,
    CandidateStatus,
    Designation,
    JobStatus,
    LocalFilterMode,
)
from talentscope.utils.logger import (
    setup_logging,
    get_logger,
    audit_log,
    LoggerMixin,
)

__all__ = [
    # Config
    "AppSettings",
    "get_settings",
    "reload_settings",
    "settings",
    "ROOT_DIR",
    "PACKAGE_DIR",
    "LOGS_DIR",
    # Constants
    "APP_NAME",
    "APP_DISPLAY_NAME",
    "VERSION",
    "AttributionParty",
    "AuditAction",
    "CandidateStatus",
    "Designation",
    "JobStatus",
    "LocalFilterMode",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
    "LoggerMixin",
]
