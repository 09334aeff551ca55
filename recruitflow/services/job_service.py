"""
Job posting service for RecruitFlow.

Entry point for every job operation: creation, merge-patch updates,
status changes, listing and the guarded deletion.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

from recruitflow.core.lifecycle import coerce_status
from recruitflow.data.models import Job, JobCreate, JobStats, JobUpdate, Page
from recruitflow.data.repositories import JobRepository
from recruitflow.data.store import EntityStore, get_entity_store
from recruitflow.utils.constants import AuditAction, JobStatus
from recruitflow.utils.exceptions import RecruitFlowError, StoreFailureError
from recruitflow.utils.logger import LoggerMixin, audit_log

from .base import logs_domain_errors, parse_schema


@dataclass
class BulkDeleteResult:
    """Outcome of deleting several jobs one by one."""

    deleted: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def all_deleted(self) -> bool:
        return not self.failed


class JobService(LoggerMixin):
    """Service for job posting operations."""

    def __init__(self, store: Optional[EntityStore] = None):
        store = store or get_entity_store()
        self.jobs = JobRepository(store)

    # -------------------------------------------------------------------------
    # Create / Read
    # -------------------------------------------------------------------------

    @logs_domain_errors
    def create_job(
        self, data: Union[JobCreate, dict[str, Any]], actor: Optional[str] = None
    ) -> Job:
        """Create a draft job with its application link."""
        schema = parse_schema(JobCreate, data, "job")
        job = self.jobs.create_from_schema(schema)

        self.logger.info(f"Created job {job.id}: {job.title}")
        audit_log(
            AuditAction.JOB_CREATED.value,
            {"job_id": job.id, "title": job.title},
            audit_type="CHANGE",
            actor=actor,
        )
        return job

    @logs_domain_errors
    def get_job(self, job_id: str) -> Job:
        """Get a job by ID."""
        return self.jobs.get_or_raise(job_id)

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    @logs_domain_errors
    def update_job(
        self,
        job_id: str,
        data: Union[JobUpdate, dict[str, Any]],
        actor: Optional[str] = None,
    ) -> Job:
        """
        Merge-patch a job.

        ``id`` and ``application_link`` are system-managed and rejected
        with a ValidationError.
        """
        if isinstance(data, dict) and data.get("status") is not None:
            coerce_status(JobStatus, data["status"], "job")
        schema = parse_schema(JobUpdate, data, "job update")

        job = self.jobs.update_from_schema(job_id, schema)
        changed = sorted(schema.to_patch())
        if changed:
            audit_log(
                AuditAction.JOB_UPDATED.value,
                {"job_id": job_id, "fields": changed},
                audit_type="CHANGE",
                actor=actor,
            )
        return job

    @logs_domain_errors
    def update_status(
        self, job_id: str, status: Union[JobStatus, str], actor: Optional[str] = None
    ) -> Job:
        """Move a job to any status; setting the current status writes nothing."""
        target = coerce_status(JobStatus, status, "job")
        job = self.jobs.get_or_raise(job_id)
        if job.status == target.value:
            return job

        updated = self.jobs.update_status(job_id, target)
        audit_log(
            AuditAction.JOB_STATUS_CHANGED.value,
            {"job_id": job_id, "from": job.status, "to": target.value},
            audit_type="CHANGE",
            actor=actor,
        )
        return updated

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    @logs_domain_errors
    def delete_job(self, job_id: str, actor: Optional[str] = None) -> None:
        """
        Delete a job that has no candidates.

        Raises:
            NotFoundError: If the job does not exist.
            HasDependentsError: If candidates still reference the job.
        """
        self.jobs.delete(job_id)
        self.logger.info(f"Deleted job {job_id}")
        audit_log(
            AuditAction.JOB_DELETED.value,
            {"job_id": job_id},
            audit_type="DELETE",
            actor=actor,
        )

    def delete_jobs(
        self, job_ids: list[str], actor: Optional[str] = None
    ) -> BulkDeleteResult:
        """
        Delete several jobs, each through the candidate guard.

        A job that cannot be deleted is reported in ``failed`` and does not
        stop the others. Store failures abort the whole operation.
        """
        result = BulkDeleteResult()
        for job_id in job_ids:
            try:
                self.delete_job(job_id, actor=actor)
            except StoreFailureError:
                raise
            except RecruitFlowError as e:
                result.failed[job_id] = e.message
            else:
                result.deleted.append(job_id)

        self.logger.info(
            f"Bulk delete: {len(result.deleted)} deleted, {len(result.failed)} refused"
        )
        return result

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @logs_domain_errors
    def list_jobs(
        self,
        status: Optional[Union[JobStatus, str]] = None,
        search: Optional[str] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> Page[Job]:
        """List jobs newest first, filtered by status and title/description text."""
        if status is not None:
            status = coerce_status(JobStatus, status, "job")
        return self.jobs.paginate(
            self.jobs.build_query(status, search), page=page, page_size=page_size
        )

    @logs_domain_errors
    def search_jobs(self, text: str) -> list[Job]:
        """All jobs whose title or description contains ``text``, newest first."""
        return self.jobs.find(self.jobs.build_query(search=text))

    @logs_domain_errors
    def get_jobs_by_status(self, status: Union[JobStatus, str]) -> list[Job]:
        """All jobs in a status, newest first."""
        return self.jobs.get_by_status(coerce_status(JobStatus, status, "job"), limit=None)

    def get_job_stats(self) -> JobStats:
        """Job counts by status."""
        counts = self.jobs.get_status_counts()
        return JobStats(total=sum(counts.values()), **counts)
