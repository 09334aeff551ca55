"""
Job posting data models for RecruitFlow.

Defines the schema for job postings: the performance, energy and culture
expectations candidates are measured against, plus publication status.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recruitflow.utils.config import get_settings
from recruitflow.utils.constants import JobStatus

from .base import BaseDocument, EmbeddedModel, NonBlankStr, PatchModel


def build_application_link(job_id: str, base_url: Optional[str] = None) -> str:
    """Public application URL for a job, derived from its identifier."""
    base = (base_url or get_settings().workflow.application_base_url).rstrip("/")
    return f"{base}/apply/{job_id}"


def _clean_items(values: list[str]) -> list[str]:
    """Strip entries and drop blanks, keeping order."""
    return [v.strip() for v in values if v and v.strip()]


class Performance(EmbeddedModel):
    """What the role has to deliver."""

    experience: str = ""
    deliveries: str = ""
    skills: list[str] = Field(default_factory=list)

    @field_validator("skills")
    @classmethod
    def clean_skills(cls, v: list[str]) -> list[str]:
        return _clean_items(v)


class Energy(EmbeddedModel):
    """Working rhythm the role demands."""

    availability: str = ""
    deadlines: str = ""
    pressure: str = ""


class Culture(EmbeddedModel):
    """Values a hire is expected to share."""

    legal_values: list[str] = Field(default_factory=list)

    @field_validator("legal_values")
    @classmethod
    def clean_values(cls, v: list[str]) -> list[str]:
        return _clean_items(v)


class Job(BaseDocument):
    """
    Main job posting model.

    This is the primary document stored in the jobs collection.
    ``application_link`` is filled in from the id when the job is created
    and is never accepted from callers afterwards. ``candidate_count`` is
    bumped atomically with each candidate insert so the deletion guard
    holds without a multi-document transaction.
    """

    title: NonBlankStr = Field(..., max_length=200)
    description: NonBlankStr

    performance: Performance = Field(default_factory=Performance)
    energy: Energy = Field(default_factory=Energy)
    culture: Culture = Field(default_factory=Culture)

    application_link: str = ""
    status: JobStatus = JobStatus.DRAFT

    # Maintained alongside candidate inserts and deletes
    candidate_count: int = 0


class JobCreate(BaseModel):
    """Schema for creating a new job. New jobs always start as drafts."""

    model_config = ConfigDict(extra="forbid")

    title: NonBlankStr = Field(..., max_length=200)
    description: NonBlankStr
    performance: Performance = Field(default_factory=Performance)
    energy: Energy = Field(default_factory=Energy)
    culture: Culture = Field(default_factory=Culture)


class JobUpdate(PatchModel):
    """Schema for updating an existing job (merge-patch)."""

    title: Optional[NonBlankStr] = Field(None, max_length=200)
    description: Optional[NonBlankStr] = None
    performance: Optional[Performance] = None
    energy: Optional[Energy] = None
    culture: Optional[Culture] = None
    status: Optional[JobStatus] = None


class JobStats(BaseModel):
    """Job counts by status."""

    total: int = 0
    draft: int = 0
    published: int = 0
    closed: int = 0
