"""
Interview service for RecruitFlow.

Schedules interviews for candidate/job pairs, records outcomes and
feedback, and summarises them.
"""

from typing import Any, Optional, Union

from recruitflow.core.lifecycle import (
    InterviewStatusMachine,
    coerce_status,
    warn_if_feedback_incomplete,
)
from recruitflow.data.models import (
    Interview,
    InterviewCreate,
    InterviewStatistics,
    InterviewUpdate,
    Page,
)
from recruitflow.data.repositories import (
    CandidateRepository,
    InterviewRepository,
    JobRepository,
)
from recruitflow.data.store import EntityStore, get_entity_store
from recruitflow.utils.constants import AuditAction, InterviewStatus
from recruitflow.utils.exceptions import JobMismatchError, NotFoundError
from recruitflow.utils.logger import LoggerMixin, audit_log

from .base import logs_domain_errors, parse_schema


class InterviewService(LoggerMixin):
    """Service for interview operations."""

    def __init__(self, store: Optional[EntityStore] = None):
        store = store or get_entity_store()
        self.interviews = InterviewRepository(store)
        self.candidates = CandidateRepository(store)
        self.jobs = JobRepository(store)
        self.status_machine = InterviewStatusMachine()

    # -------------------------------------------------------------------------
    # Create / Read
    # -------------------------------------------------------------------------

    @logs_domain_errors
    def create_interview(
        self,
        data: Union[InterviewCreate, dict[str, Any]],
        actor: Optional[str] = None,
    ) -> Interview:
        """
        Schedule an interview.

        Raises:
            ValidationError: If a required field is missing or malformed.
            NotFoundError: If the candidate or the job does not exist.
            JobMismatchError: If the candidate did not apply to the job.
        """
        schema = parse_schema(InterviewCreate, data, "interview")

        with self.interviews.transaction():
            candidate = self.candidates.get_or_raise(schema.candidate_id)
            job = self.jobs.get_or_raise(schema.job_id)
            if candidate.job_id != job.id:
                raise JobMismatchError(candidate.id, candidate.job_id, job.id)
            interview = self.interviews.create_from_schema(schema)

        self.logger.info(
            f"Scheduled {interview.type} for candidate {interview.candidate_id}"
        )
        audit_log(
            AuditAction.INTERVIEW_SCHEDULED.value,
            {
                "interview_id": interview.id,
                "candidate_id": interview.candidate_id,
                "job_id": interview.job_id,
            },
            audit_type="CHANGE",
            actor=actor,
        )
        return interview

    @logs_domain_errors
    def get_interview(self, interview_id: str) -> Interview:
        """Get an interview by ID."""
        return self.interviews.get_or_raise(interview_id)

    # -------------------------------------------------------------------------
    # Update / Delete
    # -------------------------------------------------------------------------

    @logs_domain_errors
    def update_interview(
        self,
        interview_id: str,
        data: Union[InterviewUpdate, dict[str, Any]],
        actor: Optional[str] = None,
    ) -> Interview:
        """
        Merge-patch an interview.

        A status in the patch goes through the same rules as
        :meth:`update_status`. ``feedback`` replaces the stored feedback
        as a whole.
        """
        raw = data.to_patch() if isinstance(data, InterviewUpdate) else dict(data)
        status = raw.pop("status", None)
        schema = parse_schema(InterviewUpdate, raw, "interview update")

        current = self.interviews.get_or_raise(interview_id)
        patch = schema.to_patch()
        target = None
        if status is not None:
            target = self.status_machine.check(current.status, status, interview_id)
            if target is not None:
                patch["status"] = target.value

        if not patch:
            return current

        updated = self.interviews.update(interview_id, patch)
        if target is not None:
            self._after_status_change(current, updated, actor)
        return updated

    @logs_domain_errors
    def update_status(
        self,
        interview_id: str,
        status: Union[InterviewStatus, str],
        actor: Optional[str] = None,
    ) -> Interview:
        """
        Change an interview's status.

        Raises:
            InvalidStatusError: If the status is unknown.
            NotFoundError: If the interview does not exist.
        """
        coerce_status(InterviewStatus, status, "interview")
        current = self.interviews.get_or_raise(interview_id)

        target = self.status_machine.check(current.status, status, interview_id)
        if target is None:
            return current

        updated = self.interviews.update_status(interview_id, target)
        self._after_status_change(current, updated, actor)
        return updated

    def _after_status_change(
        self, previous: Interview, updated: Interview, actor: Optional[str]
    ) -> None:
        warn_if_feedback_incomplete(updated.id, updated.status, updated.feedback)
        audit_log(
            AuditAction.INTERVIEW_STATUS_CHANGED.value,
            {"interview_id": updated.id, "from": previous.status, "to": updated.status},
            audit_type="CHANGE",
            actor=actor,
        )

    @logs_domain_errors
    def delete_interview(self, interview_id: str, actor: Optional[str] = None) -> None:
        """Delete an interview."""
        if not self.interviews.delete(interview_id):
            raise NotFoundError("Interview", interview_id)

        audit_log(
            AuditAction.INTERVIEW_DELETED.value,
            {"interview_id": interview_id},
            audit_type="DELETE",
            actor=actor,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @logs_domain_errors
    def list_interviews(
        self,
        candidate_id: Optional[str] = None,
        job_id: Optional[str] = None,
        status: Optional[Union[InterviewStatus, str]] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> Page[Interview]:
        """List interviews newest first; every supplied filter must match."""
        if status is not None:
            status = coerce_status(InterviewStatus, status, "interview")
        return self.interviews.paginate(
            self.interviews.build_query(candidate_id, job_id, status),
            page=page,
            page_size=page_size,
        )

    def get_statistics(
        self, candidate_id: Optional[str] = None, job_id: Optional[str] = None
    ) -> InterviewStatistics:
        """
        Summarise interviews, optionally for one candidate or job.

        The average score covers completed interviews only; a completed
        interview without a score counts as zero. Recommendations are
        counted from completed interviews.
        """
        interviews = self.interviews.find(
            self.interviews.build_query(candidate_id, job_id)
        )

        by_status = {status.value: 0 for status in InterviewStatus}
        for interview in interviews:
            by_status[interview.status] += 1

        completed = [
            i for i in interviews if i.status == InterviewStatus.COMPLETED.value
        ]
        average_score = (
            sum(i.score or 0.0 for i in completed) / len(completed) if completed else 0.0
        )

        recommendations: dict[str, int] = {}
        for interview in completed:
            recommendation = interview.feedback.recommendation
            if recommendation:
                recommendations[recommendation] = recommendations.get(recommendation, 0) + 1

        return InterviewStatistics(
            total=len(interviews),
            by_status=by_status,
            completed=by_status[InterviewStatus.COMPLETED.value],
            scheduled=by_status[InterviewStatus.SCHEDULED.value],
            cancelled=by_status[InterviewStatus.CANCELLED.value],
            average_score=average_score,
            recommendations=recommendations,
        )
