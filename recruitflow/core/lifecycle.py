"""
Status lifecycle rules for candidates and interviews.

Every status change goes through this module before anything is written:
the requested value is checked against its enumeration and the move is
checked against the entity's transition rules. A rejected change raises
:class:`InvalidStatusError` and leaves the record untouched.

Job status is any-to-any and only needs :func:`coerce_status`.
"""

from enum import Enum
from typing import Any, Optional, TypeVar

from recruitflow.data.models.interview import InterviewFeedback
from recruitflow.utils.config import get_settings
from recruitflow.utils.constants import CandidateStatus, InterviewStatus
from recruitflow.utils.exceptions import InvalidStatusError
from recruitflow.utils.logger import get_logger

logger = get_logger(__name__)

E = TypeVar("E", bound=Enum)

# Review pipeline order used when forward-only transitions are enabled
CANDIDATE_STATUS_ORDER: tuple[CandidateStatus, ...] = (
    CandidateStatus.NEW,
    CandidateStatus.REVIEWED,
    CandidateStatus.SENT_TO_MANAGER,
)


def coerce_status(enum_cls: type[E], value: Any, entity: str = "status") -> E:
    """
    Convert a raw status value into its enum member.

    Raises:
        InvalidStatusError: If the value is not one of the enum's values.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidStatusError(
            f"Invalid {entity} status '{value}'. Must be one of: {allowed}",
            value=value,
            allowed=[member.value for member in enum_cls],
        ) from None


class CandidateStatusMachine:
    """
    Transition rules for the candidate review pipeline.

    Any status may follow any other unless ``forward_only`` is set, in
    which case candidates can only move along ``new -> reviewed ->
    sent_to_manager`` (skipping ahead is allowed).
    """

    def __init__(self, forward_only: Optional[bool] = None):
        if forward_only is None:
            forward_only = get_settings().workflow.candidate_forward_only
        self.forward_only = forward_only

    def check(self, current: Any, target: Any) -> Optional[CandidateStatus]:
        """
        Validate a candidate status change.

        Returns:
            The target status, or ``None`` when it equals the current one
            and nothing needs to be written.
        """
        target_status = coerce_status(CandidateStatus, target, "candidate")
        current_status = coerce_status(CandidateStatus, current, "candidate")

        if target_status == current_status:
            return None

        if self.forward_only and CANDIDATE_STATUS_ORDER.index(
            target_status
        ) < CANDIDATE_STATUS_ORDER.index(current_status):
            raise InvalidStatusError(
                f"Candidate cannot move back from '{current_status.value}' "
                f"to '{target_status.value}'",
                current=current_status.value,
                target=target_status.value,
            )
        return target_status


class InterviewStatusMachine:
    """
    Transition rules for interviews.

    Interviews start ``scheduled`` and recruiters may set any enumerated
    status afterwards. Moving one back to ``scheduled`` is accepted but
    logged, since a rescheduled interview is normally followed up by a
    new record.
    """

    def check(
        self, current: Any, target: Any, interview_id: Optional[str] = None
    ) -> Optional[InterviewStatus]:
        """
        Validate an interview status change.

        Returns:
            The target status, or ``None`` when nothing needs to be written.
        """
        target_status = coerce_status(InterviewStatus, target, "interview")
        current_status = coerce_status(InterviewStatus, current, "interview")

        if target_status == current_status:
            return None

        if target_status == InterviewStatus.SCHEDULED:
            logger.warning(
                f"Interview {interview_id or '?'} moved back to 'scheduled' "
                f"from '{current_status.value}'"
            )
        return target_status


def warn_if_feedback_incomplete(
    interview_id: str, status: Any, feedback: InterviewFeedback
) -> bool:
    """
    Log a warning when a completed interview lacks its verdict.

    The change is still accepted. Returns whether a warning was logged.
    """
    if coerce_status(InterviewStatus, status, "interview") != InterviewStatus.COMPLETED:
        return False
    if feedback.is_complete:
        return False

    missing = [
        name
        for name in ("overall", "recommendation")
        if getattr(feedback, name) is None
    ]
    logger.warning(
        f"Interview {interview_id} completed without feedback: {', '.join(missing)}"
    )
    return True
