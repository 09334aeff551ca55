"""
Logging for RecruitFlow.

Application logs and the audit trail both go through Loguru. The audit
trail records who changed what in the hiring workflow: job postings,
candidate reviews, fit scores and interviews. Audit entries carry
``audit_type``, ``action`` and ``actor`` in the record's ``extra`` so the
audit sink can format them as columns.

Importing the package adds no sinks. The CLI, or an embedding
application, calls :func:`setup_logging` once at startup.
"""

import re
import sys
from typing import Any, Optional, Union

from loguru import logger

from recruitflow.utils.config import AppSettings, LoggingSettings, get_settings
from recruitflow.utils.constants import AuditAction

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

AUDIT_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {extra[audit_type]: <8} | "
    "{extra[action]} | actor={extra[actor]} | {message}"
)

# Keys never written to any log
SECRET_KEYS = frozenset(
    {
        "password", "passwd", "secret", "token", "api_key", "apikey",
        "credential", "private_key", "access_token", "refresh_token",
    }
)

# Applicant contact details, masked rather than dropped
CONTACT_KEYS = frozenset({"email", "phone"})

_EMAIL = re.compile(r"^([^@]{1,2})[^@]*(@.+)$")


def _is_audit_record(record: dict[str, Any]) -> bool:
    return "audit_type" in record["extra"]


def _add_file_sinks(log_settings: LoggingSettings, diagnose: bool) -> None:
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
        diagnose=diagnose,
        enqueue=True,
    )
    logger.add(
        log_file.parent / "audit.log",
        format=AUDIT_FORMAT,
        level="INFO",
        filter=_is_audit_record,
        rotation="1 week",
        retention="1 year",
        compression="zip",
        enqueue=True,
    )


def setup_logging(settings: Optional[AppSettings] = None) -> None:
    """
    Configure the console sink and, when enabled, the application and
    audit file sinks. Replaces any sinks configured earlier.
    """
    settings = settings or get_settings()
    log_settings = settings.logging

    logger.remove()

    # Variable values in tracebacks only while developing locally
    diagnose = settings.debug and settings.environment == "development"

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=log_settings.level,
            colorize=True,
            backtrace=True,
            diagnose=diagnose,
        )
    if log_settings.file_output:
        _add_file_sinks(log_settings, diagnose)

    logger.debug(
        f"Logging initialized - level {log_settings.level}, "
        f"file output {'on' if log_settings.file_output else 'off'}"
    )


def get_logger(name: str) -> Any:
    """
    Logger bound to ``name`` (typically ``__name__``).

    Binding never touches the configured sinks; applications call
    :func:`setup_logging` once at startup.
    """
    return logger.bind(name=name)


def mask_contact(key: str, value: Any) -> Any:
    """Mask an applicant email or phone number, keeping enough to recognise it."""
    if not isinstance(value, str) or not value:
        return value
    if key == "email":
        return _EMAIL.sub(r"\1***\2", value)
    return f"***{value[-4:]}" if len(value) > 4 else "***"


def sanitize_details(data: Any) -> Any:
    """Redact secrets and mask contact details in nested audit data."""
    if isinstance(data, dict):
        cleaned = {}
        for key, value in data.items():
            lowered = str(key).lower()
            if any(secret in lowered for secret in SECRET_KEYS):
                cleaned[key] = "***REDACTED***"
            elif lowered in CONTACT_KEYS:
                cleaned[key] = mask_contact(lowered, value)
            else:
                cleaned[key] = sanitize_details(value)
        return cleaned
    if isinstance(data, list):
        return [sanitize_details(item) for item in data]
    return data


def audit_log(
    action: Union[AuditAction, str],
    details: dict[str, Any],
    audit_type: str = "DECISION",
    actor: Optional[str] = None,
) -> None:
    """
    Record a state-changing hiring action in the audit trail.

    Args:
        action: What happened, e.g. ``candidate_scored`` or ``job_deleted``.
        details: Identifiers and values describing the change.
        audit_type: DECISION (reviews, scores), CHANGE or DELETE.
        actor: Opaque identifier of the user who triggered the action.
    """
    action_name = action.value if isinstance(action, AuditAction) else action
    logger.bind(
        audit_type=audit_type, action=action_name, actor=actor or "system"
    ).info(f"{action_name} | {sanitize_details(details)}")


class LoggerMixin:
    """Gives a class a ``logger`` bound to its class name."""

    @property
    def logger(self) -> Any:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger
