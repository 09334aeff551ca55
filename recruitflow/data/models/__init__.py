"""
Pydantic data models and schemas for RecruitFlow.

This module provides all data models used throughout the application,
including stored documents, embedded models, and create/update schemas.
"""

# Base models
from .base import (
    BaseDocument,
    EmbeddedModel,
    NonBlankStr,
    PatchModel,
    TimestampMixin,
    generate_id,
    utcnow,
)

# Job models
from .job import (
    Culture,
    Energy,
    Job,
    JobCreate,
    JobStats,
    JobUpdate,
    Performance,
    build_application_link,
)

# FitScore models
from .fit_score import FitScore, aggregate_overall_score

# Candidate models
from .candidate import (
    Candidate,
    CandidateCreate,
    CandidateUpdate,
    CulturalFit,
)

# Interview models
from .interview import (
    Interview,
    InterviewCreate,
    InterviewFeedback,
    InterviewStatistics,
    InterviewUpdate,
)

# Pagination
from .pagination import Page, count_pages, page_offset, validate_page_params

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "NonBlankStr",
    "PatchModel",
    "TimestampMixin",
    "generate_id",
    "utcnow",
    # Job
    "Culture",
    "Energy",
    "Job",
    "JobCreate",
    "JobStats",
    "JobUpdate",
    "Performance",
    "build_application_link",
    # FitScore
    "FitScore",
    "aggregate_overall_score",
    # Candidate
    "Candidate",
    "CandidateCreate",
    "CandidateUpdate",
    "CulturalFit",
    # Interview
    "Interview",
    "InterviewCreate",
    "InterviewFeedback",
    "InterviewStatistics",
    "InterviewUpdate",
    # Pagination
    "Page",
    "count_pages",
    "page_offset",
    "validate_page_params",
]
