"""
Candidate repository for RecruitFlow.

Provides data access operations for candidate documents, including
per-job listing and fit score persistence. Inserts and deletes keep the
owning job's ``candidate_count`` in step.
"""

from typing import Any, Optional

from recruitflow.data.models.candidate import Candidate, CandidateCreate
from recruitflow.data.models.fit_score import FitScore
from recruitflow.data.store import EntityKind, EntityStore
from recruitflow.utils.constants import CandidateStatus
from recruitflow.utils.exceptions import StoreFailureError
from recruitflow.utils.logger import get_logger

from .base import BaseRepository
from .job_repository import JobRepository

logger = get_logger(__name__)


class CandidateRepository(BaseRepository[Candidate]):
    """Repository for candidate document operations."""

    def __init__(self, store: Optional[EntityStore] = None) -> None:
        super().__init__(store)
        self._jobs = JobRepository(self._store)

    @property
    def kind(self) -> EntityKind:
        return EntityKind.CANDIDATE

    @property
    def model_class(self) -> type[Candidate]:
        return Candidate

    # -------------------------------------------------------------------------
    # Create Operations
    # -------------------------------------------------------------------------

    def create_from_schema(self, data: CandidateCreate) -> Candidate:
        """
        Create a candidate from a create schema.

        The job's candidate count is bumped first; that single atomic
        update is also the existence check, so the job cannot be deleted
        between the check and the insert.

        Raises:
            NotFoundError: If the referenced job does not exist.
        """
        candidate = Candidate(
            job_id=data.job_id,
            name=data.name,
            email=data.email,
            phone=data.phone,
            resume_url=data.resume_url,
            cultural_fit=data.cultural_fit,
            status=CandidateStatus.NEW,
        )
        with self.transaction():
            self._jobs.reserve_candidate_slot(candidate.job_id)
            try:
                return self.create(candidate)
            except StoreFailureError:
                self._jobs.release_candidate_slot(candidate.job_id)
                raise

    # -------------------------------------------------------------------------
    # Update Operations
    # -------------------------------------------------------------------------

    def update_status(self, id_value: str, status: CandidateStatus) -> Candidate:
        """Update candidate status."""
        return self.update(id_value, {"status": CandidateStatus(status).value})

    def set_fit_score(self, id_value: str, fit_score: FitScore) -> Candidate:
        """Replace the candidate's fit score with a freshly calculated one."""
        return self.update(id_value, {"fit_score": fit_score.model_dump()})

    # -------------------------------------------------------------------------
    # Delete Operations
    # -------------------------------------------------------------------------

    def delete(self, id_value: str) -> bool:
        """Delete a candidate and release its place on the job."""
        with self.transaction():
            document = self._store.get(self.kind, id_value)
            if document is None or not super().delete(id_value):
                return False
            self._jobs.release_candidate_slot(document["job_id"])
            return True

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    @staticmethod
    def build_query(
        job_id: Optional[str] = None, status: Optional[CandidateStatus] = None
    ) -> dict[str, Any]:
        """Build the listing filter."""
        query: dict[str, Any] = {}
        if job_id is not None:
            query["job_id"] = job_id
        if status is not None:
            query["status"] = CandidateStatus(status).value
        return query

    # -------------------------------------------------------------------------
    # Analytics
    # -------------------------------------------------------------------------

    def get_status_counts(self, job_id: Optional[str] = None) -> dict[str, int]:
        """Get count of candidates by status, optionally for one job."""
        return {
            status.value: self.count(self.build_query(job_id, status))
            for status in CandidateStatus
        }
