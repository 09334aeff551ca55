"""
Utility modules for RecruitFlow.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Application-wide constants and enums
- exceptions: Domain error taxonomy
"""

from recruitflow.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    DATA_DIR,
    LOG_DIR,
)
from recruitflow.utils.constants import (
    AuditAction,
    CandidateStatus,
    FitScoreLevel,
    InterviewStatus,
    InterviewType,
    JobStatus,
    Recommendation,
)
from recruitflow.utils.exceptions import (
    HasDependentsError,
    InvalidStatusError,
    JobMismatchError,
    NotFoundError,
    RecruitFlowError,
    StoreFailureError,
    ValidationError,
)
from recruitflow.utils.logger import (
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
    "DATA_DIR",
    "LOG_DIR",
    # Constants
    "AuditAction",
    "CandidateStatus",
    "FitScoreLevel",
    "InterviewStatus",
    "InterviewType",
    "JobStatus",
    "Recommendation",
    # Exceptions
    "HasDependentsError",
    "InvalidStatusError",
    "JobMismatchError",
    "NotFoundError",
    "RecruitFlowError",
    "StoreFailureError",
    "ValidationError",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
    "LoggerMixin",
]
