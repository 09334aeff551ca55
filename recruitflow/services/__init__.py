"""
Application services for RecruitFlow.

Each service is the entry point for one entity's operations; callers
(the CLI or an HTTP layer) never talk to repositories directly.
"""

from .candidate_service import CandidateService
from .interview_service import InterviewService
from .job_service import BulkDeleteResult, JobService
from .resume_storage import (
    LocalResumeStorage,
    ResumeStorage,
    build_resume_path,
    resume_extension,
)

__all__ = [
    "BulkDeleteResult",
    "CandidateService",
    "InterviewService",
    "JobService",
    "LocalResumeStorage",
    "ResumeStorage",
    "build_resume_path",
    "resume_extension",
]
