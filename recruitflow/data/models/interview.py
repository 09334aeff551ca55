"""
Interview data models for RecruitFlow.

Interviews record scheduled or completed evaluation touchpoints for a
candidate/job pair, together with the interviewer's structured feedback.
"""

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from recruitflow.utils.constants import (
    MAX_INTERVIEW_RATING,
    MIN_INTERVIEW_RATING,
    InterviewStatus,
    InterviewType,
    Recommendation,
)

from .base import BaseDocument, EmbeddedModel, NonBlankStr, PatchModel


def _rating():
    return Field(None, ge=MIN_INTERVIEW_RATING, le=MAX_INTERVIEW_RATING)


class InterviewFeedback(EmbeddedModel):
    """Interviewer ratings (0-10 each) and written feedback."""

    technical_skills: Optional[float] = _rating()
    communication: Optional[float] = _rating()
    problem_solving: Optional[float] = _rating()
    cultural_fit: Optional[float] = _rating()
    experience: Optional[float] = _rating()
    overall: Optional[float] = _rating()

    strengths: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list)
    recommendation: Optional[Recommendation] = None
    next_steps: str = ""

    @property
    def is_complete(self) -> bool:
        """Whether the feedback carries the rating and verdict expected after an interview."""
        return self.overall is not None and self.recommendation is not None


class Interview(BaseDocument):
    """
    Main interview model.

    This is the primary document stored in the interviews collection.
    """

    candidate_id: NonBlankStr
    job_id: NonBlankStr

    type: InterviewType = InterviewType.TECHNICAL
    date: datetime
    duration: str = "60 minutes"
    interviewer: str = ""
    location: Optional[str] = None

    status: InterviewStatus = InterviewStatus.SCHEDULED
    notes: str = ""
    score: Optional[float] = _rating()
    feedback: InterviewFeedback = Field(default_factory=InterviewFeedback)


class InterviewCreate(BaseModel):
    """Schema for scheduling a new interview."""

    model_config = ConfigDict(extra="forbid")

    candidate_id: NonBlankStr
    job_id: NonBlankStr
    type: InterviewType = InterviewType.TECHNICAL
    date: datetime
    duration: str = "60 minutes"
    interviewer: str = ""
    location: Optional[str] = None
    notes: str = ""


class InterviewUpdate(PatchModel):
    """Schema for updating an interview (merge-patch)."""

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"location", "score"})

    type: Optional[InterviewType] = None
    date: Optional[datetime] = None
    duration: Optional[str] = None
    interviewer: Optional[str] = None
    location: Optional[str] = None
    status: Optional[InterviewStatus] = None
    notes: Optional[str] = None
    score: Optional[float] = _rating()
    feedback: Optional[InterviewFeedback] = None


class InterviewStatistics(BaseModel):
    """Aggregate view over a set of interviews."""

    total: int = 0
    by_status: dict[str, int] = Field(default_factory=dict)
    completed: int = 0
    scheduled: int = 0
    cancelled: int = 0
    average_score: float = 0.0
    recommendations: dict[str, int] = Field(default_factory=dict)
