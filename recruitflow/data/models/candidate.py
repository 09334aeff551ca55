"""
Candidate data models for RecruitFlow.

A candidate is one application submitted against exactly one job:
contact details, the resume locator, and the applicant's own answers to
the job's performance, energy and culture questions.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from recruitflow.utils.constants import CandidateStatus

from .base import BaseDocument, EmbeddedModel, NonBlankStr, PatchModel
from .fit_score import FitScore


class CulturalFit(EmbeddedModel):
    """The applicant's self-assessment against the job's three dimensions."""

    performance: NonBlankStr
    energy: NonBlankStr
    culture: NonBlankStr

    @property
    def narrative(self) -> str:
        """All three answers as one block of text."""
        return " ".join([self.performance, self.energy, self.culture])


class Candidate(BaseDocument):
    """
    Main candidate model representing a job application.

    This is the primary document stored in the candidates collection.
    """

    job_id: NonBlankStr

    name: NonBlankStr = Field(..., max_length=200)
    email: EmailStr
    phone: NonBlankStr = Field(..., max_length=50)

    # Locator returned by the resume storage; never interpreted here
    resume_url: str = ""

    cultural_fit: CulturalFit
    status: CandidateStatus = CandidateStatus.NEW

    fit_score: Optional[FitScore] = None


class CandidateCreate(BaseModel):
    """Schema for creating a new candidate. New candidates always start as ``new``."""

    model_config = ConfigDict(extra="forbid")

    job_id: NonBlankStr
    name: NonBlankStr = Field(..., max_length=200)
    email: EmailStr
    phone: NonBlankStr = Field(..., max_length=50)
    resume_url: str = ""
    cultural_fit: CulturalFit


class CandidateUpdate(PatchModel):
    """Schema for updating an existing candidate (merge-patch).

    ``job_id`` and ``fit_score`` are deliberately absent: the first is
    immutable, the second is only written by the scoring engine.
    """

    name: Optional[NonBlankStr] = Field(None, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[NonBlankStr] = Field(None, max_length=50)
    resume_url: Optional[str] = None
    cultural_fit: Optional[CulturalFit] = None
    status: Optional[CandidateStatus] = None
