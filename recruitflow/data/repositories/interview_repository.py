"""
Interview repository for RecruitFlow.

Provides data access operations for interview documents.
"""

from typing import Any, Optional

from recruitflow.data.models.interview import Interview, InterviewCreate
from recruitflow.data.store import EntityKind
from recruitflow.utils.constants import InterviewStatus
from recruitflow.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class InterviewRepository(BaseRepository[Interview]):
    """Repository for interview document operations."""

    @property
    def kind(self) -> EntityKind:
        return EntityKind.INTERVIEW

    @property
    def model_class(self) -> type[Interview]:
        return Interview

    # -------------------------------------------------------------------------
    # Create Operations
    # -------------------------------------------------------------------------

    def create_from_schema(self, data: InterviewCreate) -> Interview:
        """Schedule an interview from a create schema."""
        interview = Interview(
            candidate_id=data.candidate_id,
            job_id=data.job_id,
            type=data.type,
            date=data.date,
            duration=data.duration,
            interviewer=data.interviewer,
            location=data.location,
            notes=data.notes,
            status=InterviewStatus.SCHEDULED,
        )
        return self.create(interview)

    # -------------------------------------------------------------------------
    # Update Operations
    # -------------------------------------------------------------------------

    def update_status(self, id_value: str, status: InterviewStatus) -> Interview:
        """Update interview status."""
        return self.update(id_value, {"status": InterviewStatus(status).value})

    # -------------------------------------------------------------------------
    # Query Operations
    # -------------------------------------------------------------------------

    @staticmethod
    def build_query(
        candidate_id: Optional[str] = None,
        job_id: Optional[str] = None,
        status: Optional[InterviewStatus] = None,
    ) -> dict[str, Any]:
        """Build the listing filter; every supplied criterion must match."""
        query: dict[str, Any] = {}
        if candidate_id is not None:
            query["candidate_id"] = candidate_id
        if job_id is not None:
            query["job_id"] = job_id
        if status is not None:
            query["status"] = InterviewStatus(status).value
        return query
