"""
Utility modules for Talent-Match.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Application-wide constants
"""

from src.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
    SRC_DIR,
    LOGS_DIR,
)
from src.utils.constants import (
    APP_NAME,
    APP_DISPLAY_NAME,
    VERSION,
    EXPERIENCE_YEARS_BY_LEVEL,
    ExperienceLevel,
    JobStatus,
    MatchScoreLevel,
    PoolStrategy,
    UserRole,
)
from src.utils.logger import (
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
    "ROOT_DIR",
    "SRC_DIR",
    "LOGS_DIR",
    # Constants
    "APP_NAME",
    "APP_DISPLAY_NAME",
    "VERSION",
    "EXPERIENCE_YEARS_BY_LEVEL",
    "ExperienceLevel",
    "JobStatus",
    "MatchScoreLevel",
    "PoolStrategy",
    "UserRole",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
    "LoggerMixin",
]
