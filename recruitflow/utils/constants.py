"""
Application-wide constants for RecruitFlow.

This module contains all constant values used throughout the application.
Modify these values to customize behavior without changing code logic.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Resume Uploads
# =============================================================================

# Content type -> stored file extension
RESUME_CONTENT_TYPES: Final[dict[str, str]] = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}

MAX_RESUME_SIZE_BYTES: Final[int] = 5 * 1024 * 1024


# =============================================================================
# Scoring Constants
# =============================================================================

MIN_COMPONENT_SCORE: Final[int] = 0
MAX_COMPONENT_SCORE: Final[int] = 100

# Used when a job leaves a dimension empty, so there is nothing to compare
NEUTRAL_COMPONENT_SCORE: Final[int] = 50

# Share of the technical score that comes from listed skills;
# the rest comes from experience/deliveries wording
TECHNICAL_SKILLS_WEIGHT: Final[float] = 0.8

# Score thresholds (0-100 scale)
SCORE_THRESHOLDS: Final[dict[str, int]] = {
    "excellent": 85,
    "good": 70,
    "fair": 50,
}

# Words ignored when comparing free-text job expectations to candidate answers
STOPWORDS: Final[frozenset[str]] = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "has",
    "have", "i", "in", "is", "it", "its", "me", "my", "of", "on", "or", "our",
    "so", "that", "the", "their", "this", "to", "was", "we", "were", "will",
    "with", "you", "your", "very", "can", "am", "all", "any", "also",
})

# Interview scores and feedback ratings
MIN_INTERVIEW_RATING: Final[float] = 0.0
MAX_INTERVIEW_RATING: Final[float] = 10.0


# =============================================================================
# Enums
# =============================================================================


class JobStatus(str, Enum):
    """Status of a job posting."""

    DRAFT = "draft"
    PUBLISHED = "published"
    CLOSED = "closed"


class CandidateStatus(str, Enum):
    """Status of a candidate in the review pipeline."""

    NEW = "new"
    REVIEWED = "reviewed"
    SENT_TO_MANAGER = "sent_to_manager"


class InterviewStatus(str, Enum):
    """Status of an interview."""

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"
    NO_SHOW = "no-show"


class InterviewType(str, Enum):
    """Kinds of interview a recruiter can log."""

    TECHNICAL = "Technical Interview"
    CULTURAL_FIT = "Cultural Fit Interview"
    BEHAVIORAL = "Behavioral Interview"
    FINAL_ROUND = "Final Round Interview"
    PHONE_SCREEN = "Phone Screen"
    TAKE_HOME_REVIEW = "Take-Home Assignment Review"
    REFERENCE_CHECK = "Reference Check"
    OTHER = "Other"


class Recommendation(str, Enum):
    """Interviewer hiring recommendation."""

    STRONG_YES = "strong_yes"
    YES = "yes"
    MAYBE = "maybe"
    NO = "no"
    STRONG_NO = "strong_no"


class FitScoreLevel(Enum):
    """Categorical levels for overall fit scores."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @classmethod
    def from_score(cls, score: float) -> "FitScoreLevel":
        """Convert a 0-100 score to a level."""
        if score >= SCORE_THRESHOLDS["excellent"]:
            return cls.EXCELLENT
        elif score >= SCORE_THRESHOLDS["good"]:
            return cls.GOOD
        elif score >= SCORE_THRESHOLDS["fair"]:
            return cls.FAIR
        return cls.POOR


class AuditAction(str, Enum):
    """Types of actions that can be audited."""

    JOB_CREATED = "job_created"
    JOB_UPDATED = "job_updated"
    JOB_STATUS_CHANGED = "job_status_changed"
    JOB_DELETED = "job_deleted"
    CANDIDATE_ADDED = "candidate_added"
    CANDIDATE_STATUS_CHANGED = "candidate_status_changed"
    CANDIDATE_DELETED = "candidate_deleted"
    CANDIDATE_SCORED = "candidate_scored"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    INTERVIEW_STATUS_CHANGED = "interview_status_changed"
    INTERVIEW_DELETED = "interview_deleted"
