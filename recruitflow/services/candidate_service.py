"""
Candidate service for RecruitFlow.

Handles applications from submission to hand-off: creation against an
existing job, review status changes and fit scoring.
"""

from typing import Any, Optional, Union

from recruitflow.core.lifecycle import CandidateStatusMachine, coerce_status
from recruitflow.core.scoring import FitScoreEngine, get_fit_score_engine
from recruitflow.data.models import Candidate, CandidateCreate, CandidateUpdate, Page
from recruitflow.data.repositories import CandidateRepository, JobRepository
from recruitflow.data.store import EntityStore, get_entity_store
from recruitflow.utils.constants import AuditAction, CandidateStatus
from recruitflow.utils.exceptions import NotFoundError
from recruitflow.utils.logger import LoggerMixin, audit_log

from .base import logs_domain_errors, parse_schema
from .resume_storage import LocalResumeStorage, ResumeStorage


class CandidateService(LoggerMixin):
    """Service for candidate operations."""

    def __init__(
        self,
        store: Optional[EntityStore] = None,
        engine: Optional[FitScoreEngine] = None,
        resume_storage: Optional[ResumeStorage] = None,
        status_machine: Optional[CandidateStatusMachine] = None,
    ):
        store = store or get_entity_store()
        self.candidates = CandidateRepository(store)
        self.jobs = JobRepository(store)
        self.engine = engine or get_fit_score_engine()
        self.status_machine = status_machine or CandidateStatusMachine()
        self._resume_storage = resume_storage

    @property
    def resume_storage(self) -> ResumeStorage:
        if self._resume_storage is None:
            self._resume_storage = LocalResumeStorage()
        return self._resume_storage

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    @logs_domain_errors
    def create_candidate(
        self,
        data: Union[CandidateCreate, dict[str, Any]],
        actor: Optional[str] = None,
    ) -> Candidate:
        """
        Create a candidate in ``new`` status.

        The job's candidate count is reserved atomically with the existence
        check, so the job cannot be deleted before the insert lands.

        Raises:
            ValidationError: If a required field is missing or malformed.
            NotFoundError: If the referenced job does not exist.
        """
        schema = parse_schema(CandidateCreate, data, "candidate")
        return self._insert_candidate(schema, actor)

    def _insert_candidate(
        self, schema: CandidateCreate, actor: Optional[str]
    ) -> Candidate:
        candidate = self.candidates.create_from_schema(schema)

        self.logger.info(f"Added candidate {candidate.id} to job {candidate.job_id}")
        audit_log(
            AuditAction.CANDIDATE_ADDED.value,
            {"candidate_id": candidate.id, "job_id": candidate.job_id},
            audit_type="CHANGE",
            actor=actor,
        )
        return candidate

    @logs_domain_errors
    def submit_application(
        self,
        data: dict[str, Any],
        resume_content: bytes,
        resume_content_type: str,
        actor: Optional[str] = None,
    ) -> Candidate:
        """
        Store the applicant's resume and create the candidate.

        The form is validated and the job looked up before the file is
        written, so a rejected application leaves no file behind.
        """
        form = dict(data)
        form.setdefault("resume_url", "")
        schema = parse_schema(CandidateCreate, form, "application")
        self.jobs.get_or_raise(schema.job_id)

        resume_url = self.resume_storage.store(
            schema.job_id, schema.name, resume_content, resume_content_type
        )
        return self._insert_candidate(
            schema.model_copy(update={"resume_url": resume_url}), actor
        )

    # -------------------------------------------------------------------------
    # Read / Update / Delete
    # -------------------------------------------------------------------------

    @logs_domain_errors
    def get_candidate(self, candidate_id: str) -> Candidate:
        """Get a candidate by ID."""
        return self.candidates.get_or_raise(candidate_id)

    @logs_domain_errors
    def update_candidate(
        self,
        candidate_id: str,
        data: Union[CandidateUpdate, dict[str, Any]],
        actor: Optional[str] = None,
    ) -> Candidate:
        """
        Merge-patch a candidate.

        ``job_id`` and ``fit_score`` cannot be patched; a status in the
        patch goes through the same rules as :meth:`update_status`.
        """
        raw = data.to_patch() if isinstance(data, CandidateUpdate) else dict(data)
        status = raw.pop("status", None)
        schema = parse_schema(CandidateUpdate, raw, "candidate update")

        current = self.candidates.get_or_raise(candidate_id)
        patch = schema.to_patch()
        target = None
        if status is not None:
            target = self.status_machine.check(current.status, status)
            if target is not None:
                patch["status"] = target.value

        if not patch:
            return current

        updated = self.candidates.update(candidate_id, patch)
        if target is not None:
            self._audit_status_change(candidate_id, current.status, target, actor)
        return updated

    @logs_domain_errors
    def update_status(
        self,
        candidate_id: str,
        status: Union[CandidateStatus, str],
        actor: Optional[str] = None,
    ) -> Candidate:
        """
        Change a candidate's review status.

        Setting the current status is a no-op. No fit score is required.

        Raises:
            InvalidStatusError: If the status is unknown or the move is not allowed.
            NotFoundError: If the candidate does not exist.
        """
        coerce_status(CandidateStatus, status, "candidate")
        current = self.candidates.get_or_raise(candidate_id)

        target = self.status_machine.check(current.status, status)
        if target is None:
            return current

        updated = self.candidates.update_status(candidate_id, target)
        self._audit_status_change(candidate_id, current.status, target, actor)
        return updated

    def _audit_status_change(
        self,
        candidate_id: str,
        previous: str,
        target: CandidateStatus,
        actor: Optional[str],
    ) -> None:
        audit_log(
            AuditAction.CANDIDATE_STATUS_CHANGED.value,
            {"candidate_id": candidate_id, "from": previous, "to": target.value},
            audit_type="DECISION",
            actor=actor,
        )

    @logs_domain_errors
    def delete_candidate(self, candidate_id: str, actor: Optional[str] = None) -> None:
        """Delete a candidate; their interviews are left untouched."""
        if not self.candidates.delete(candidate_id):
            raise NotFoundError("Candidate", candidate_id)

        audit_log(
            AuditAction.CANDIDATE_DELETED.value,
            {"candidate_id": candidate_id},
            audit_type="DELETE",
            actor=actor,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @logs_domain_errors
    def list_candidates(
        self,
        job_id: str,
        status: Optional[Union[CandidateStatus, str]] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> Page[Candidate]:
        """
        List a job's candidates newest first.

        Raises:
            NotFoundError: If the job does not exist.
        """
        if status is not None:
            status = coerce_status(CandidateStatus, status, "candidate")
        self.jobs.get_or_raise(job_id)
        return self.candidates.paginate(
            self.candidates.build_query(job_id, status), page=page, page_size=page_size
        )

    @logs_domain_errors
    def get_status_counts(self, job_id: Optional[str] = None) -> dict[str, int]:
        """
        Candidate counts by review status, for one job or across all jobs.

        Raises:
            NotFoundError: If ``job_id`` is given and the job does not exist.
        """
        if job_id is not None:
            self.jobs.get_or_raise(job_id)
        return self.candidates.get_status_counts(job_id)

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    @logs_domain_errors
    def calculate_fit_score(
        self, candidate_id: str, job_id: str, actor: Optional[str] = None
    ) -> Candidate:
        """
        Score a candidate against their job and store the result.

        Any previous fit score is replaced.

        Raises:
            NotFoundError: If the candidate or the job does not exist.
            JobMismatchError: If the candidate did not apply to ``job_id``.
        """
        candidate = self.candidates.get_or_raise(candidate_id)
        job = self.jobs.get_or_raise(job_id)

        fit_score = self.engine.calculate(candidate, job)
        updated = self.candidates.set_fit_score(candidate_id, fit_score)

        audit_log(
            AuditAction.CANDIDATE_SCORED.value,
            {
                "candidate_id": candidate_id,
                "job_id": job_id,
                "overall_score": fit_score.overall_score,
            },
            audit_type="DECISION",
            actor=actor,
        )
        return updated
