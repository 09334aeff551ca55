"""
Job repository for RecruitFlow.

Provides data access operations for job posting documents, including
filtered listing and the guarded delete that refuses to orphan
candidates.
"""

import re
from typing import Any, Optional

from recruitflow.data.models.job import Job, JobCreate, JobUpdate, build_application_link
from recruitflow.data.store import EntityKind
from recruitflow.utils.constants import JobStatus
from recruitflow.utils.exceptions import HasDependentsError, NotFoundError
from recruitflow.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)

CANDIDATE_COUNT_FIELD = "candidate_count"

# Missing counter (jobs stored before it existed) counts as zero
NO_CANDIDATES_FILTER = {CANDIDATE_COUNT_FIELD: {"$in": [0, None]}}


class JobRepository(BaseRepository[Job]):
    """Repository for job posting document operations."""

    @property
    def kind(self) -> EntityKind:
        return EntityKind.JOB

    @property
    def model_class(self) -> type[Job]:
        return Job

    # -------------------------------------------------------------------------
    # Create Operations
    # -------------------------------------------------------------------------

    def create_from_schema(
        self, data: JobCreate, application_base_url: Optional[str] = None
    ) -> Job:
        """Create a draft job from a create schema and derive its application link."""
        job = Job(
            title=data.title,
            description=data.description,
            performance=data.performance,
            energy=data.energy,
            culture=data.culture,
            status=JobStatus.DRAFT,
        )
        job.application_link = build_application_link(job.id, application_base_url)
        return self.create(job)

    # -------------------------------------------------------------------------
    # Update Operations
    # -------------------------------------------------------------------------

    def update_from_schema(self, id_value: str, data: JobUpdate) -> Job:
        """Update a job from an update schema."""
        update_data = data.to_patch()
        if not update_data:
            return self.get_or_raise(id_value)
        return self.update(id_value, update_data)

    def update_status(self, id_value: str, status: JobStatus) -> Job:
        """Update job status."""
        return self.update(id_value, {"status": JobStatus(status).value})

    # -------------------------------------------------------------------------
    # Candidate Bookkeeping
    # -------------------------------------------------------------------------

    def reserve_candidate_slot(self, job_id: str) -> None:
        """
        Count a new candidate against the job before it is inserted.

        Raises:
            NotFoundError: If the job does not exist.
        """
        if self._store.increment(self.kind, job_id, CANDIDATE_COUNT_FIELD, 1) is None:
            raise NotFoundError(self.entity_name, job_id)

    def release_candidate_slot(self, job_id: str) -> None:
        """Undo :meth:`reserve_candidate_slot` once a candidate is gone."""
        if self._store.increment(self.kind, job_id, CANDIDATE_COUNT_FIELD, -1) is None:
            logger.debug(f"Job {job_id} already gone; candidate count not released")

    def count_candidates(self, job_id: str) -> int:
        """Number of candidates that applied to the job."""
        return self._store.count(EntityKind.CANDIDATE, {"job_id": job_id})

    # -------------------------------------------------------------------------
    # Delete Operations
    # -------------------------------------------------------------------------

    def delete(self, id_value: str) -> bool:
        """
        Delete a job that has no candidates.

        The candidate check runs inside a store transaction when the store
        offers one. The delete itself only matches a job whose
        ``candidate_count`` is still zero, so a candidate reserved
        concurrently makes it fail instead of leaving an orphan.

        Raises:
            NotFoundError: If the job does not exist.
            HasDependentsError: If at least one candidate references the job.
        """
        with self.transaction():
            if self._store.get(self.kind, id_value) is None:
                raise NotFoundError(self.entity_name, id_value)

            candidate_count = self.count_candidates(id_value)
            if candidate_count == 0 and self._store.delete(
                self.kind, id_value, NO_CANDIDATES_FILTER
            ):
                logger.debug(f"Deleted {self.kind.value} document: {id_value}")
                return True

            if self._store.get(self.kind, id_value) is None:
                raise NotFoundError(self.entity_name, id_value)
            candidate_count = max(candidate_count, self.count_candidates(id_value), 1)
            logger.warning(
                f"Refusing to delete job {id_value}: {candidate_count} candidate(s) attached"
            )
            raise HasDependentsError(id_value, candidate_count)

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    @staticmethod
    def build_query(
        status: Optional[JobStatus] = None, search: Optional[str] = None
    ) -> dict[str, Any]:
        """
        Build the listing filter.

        ``search`` is matched literally and case-insensitively against the
        title or the description; it is AND-ed with ``status``.
        """
        query: dict[str, Any] = {}
        if status is not None:
            query["status"] = JobStatus(status).value
        if search and search.strip():
            pattern = {"$regex": re.escape(search.strip()), "$options": "i"}
            query["$or"] = [{"title": pattern}, {"description": pattern}]
        return query

    def get_by_status(
        self,
        status: JobStatus,
        skip: int = 0,
        limit: Optional[int] = 100,
    ) -> list[Job]:
        """Get jobs by status."""
        return self.find(self.build_query(status=status), skip=skip, limit=limit)

    def search(
        self,
        search_text: str,
        status: Optional[JobStatus] = None,
        skip: int = 0,
        limit: Optional[int] = 100,
    ) -> list[Job]:
        """Search jobs by title or description text."""
        return self.find(self.build_query(status, search_text), skip=skip, limit=limit)

    # -------------------------------------------------------------------------
    # Analytics
    # -------------------------------------------------------------------------

    def get_status_counts(self) -> dict[str, int]:
        """Get count of jobs by status."""
        return {status.value: self.count({"status": status.value}) for status in JobStatus}
