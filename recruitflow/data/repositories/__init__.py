"""
Repositories for RecruitFlow data access.

This module provides repository classes for every entity kind,
implementing the repository pattern over an injected entity store.
"""

# Base repository
from .base import BaseRepository

# Entity repositories
from .candidate_repository import CandidateRepository
from .interview_repository import InterviewRepository
from .job_repository import JobRepository

__all__ = [
    # Base
    "BaseRepository",
    # Entities
    "CandidateRepository",
    "InterviewRepository",
    "JobRepository",
]
