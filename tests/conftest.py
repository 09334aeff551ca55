"""
Shared test fixtures for the RecruitFlow test suite.

Sets environment variables before any recruitflow imports so settings and
logging never touch real files or databases, then provides an isolated
in-memory store per test plus factory fixtures for input payloads and
models.
"""

import os

# === Set environment BEFORE any recruitflow imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "recruitflow_test")
os.environ.setdefault("LOG_FILE_OUTPUT", "false")
os.environ.setdefault("LOG_CONSOLE_OUTPUT", "false")

from typing import Any, Optional

import pytest
from loguru import logger

from recruitflow.data.models import (
    Candidate,
    CulturalFit,
    Culture,
    Energy,
    Job,
    Performance,
)
from recruitflow.data.store import InMemoryEntityStore, set_entity_store
from recruitflow.services import (
    CandidateService,
    InterviewService,
    JobService,
    LocalResumeStorage,
)
from recruitflow.utils.config import StorageSettings


# ---------------------------------------------------------------------------
# Store and services
# ---------------------------------------------------------------------------


@pytest.fixture
def store():
    """Fresh in-memory store, also installed as the default store."""
    memory_store = InMemoryEntityStore()
    set_entity_store(memory_store)
    yield memory_store
    set_entity_store(None)


@pytest.fixture
def resume_storage(tmp_path):
    return LocalResumeStorage(
        StorageSettings(
            resume_dir=tmp_path / "resumes",
            public_base_url="https://files.example.com/resumes",
        )
    )


@pytest.fixture
def job_service(store):
    return JobService(store)


@pytest.fixture
def candidate_service(store, resume_storage):
    return CandidateService(store, resume_storage=resume_storage)


@pytest.fixture
def interview_service(store):
    return InterviewService(store)


@pytest.fixture
def log_messages():
    """Collects WARNING-and-above loguru messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="WARNING",
    )
    yield messages
    logger.remove(handler_id)


# ---------------------------------------------------------------------------
# Input payload factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_job_data():
    """Factory that returns a callable to build job create payloads."""

    def _factory(
        title: str = "Senior Backend Engineer",
        description: str = "Build and run the services behind our hiring platform.",
        skills: Optional[list[str]] = None,
        legal_values: Optional[list[str]] = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        if skills is None:
            skills = ["Python", "MongoDB", "Docker"]
        if legal_values is None:
            legal_values = ["Ownership", "Transparency"]
        data = {
            "title": title,
            "description": description,
            "performance": {
                "experience": "5 years building backend APIs",
                "deliveries": "Ship reliable services and mentor engineers",
                "skills": skills,
            },
            "energy": {
                "availability": "Full time, remote friendly",
                "deadlines": "Quarterly roadmap deadlines",
                "pressure": "Calm under incident pressure",
            },
            "culture": {"legal_values": legal_values},
        }
        data.update(kwargs)
        return data

    return _factory


@pytest.fixture
def make_candidate_data():
    """Factory that returns a callable to build candidate create payloads."""

    def _factory(job_id: str, name: str = "Jane Smith", **kwargs: Any) -> dict[str, Any]:
        data = {
            "job_id": job_id,
            "name": name,
            "email": "jane.smith@example.com",
            "phone": "+1-555-0100",
            "resume_url": "",
            "cultural_fit": {
                "performance": "I have 6 years building backend APIs in Python and Docker.",
                "energy": "Full time and calm under pressure; I like clear deadlines.",
                "culture": "I value ownership and transparency in a team.",
            },
        }
        data.update(kwargs)
        return data

    return _factory


@pytest.fixture
def make_interview_data():
    """Factory that returns a callable to build interview create payloads."""

    def _factory(candidate_id: str, job_id: str, **kwargs: Any) -> dict[str, Any]:
        data = {
            "candidate_id": candidate_id,
            "job_id": job_id,
            "type": "Technical Interview",
            "date": "2026-11-02T15:00:00+00:00",
            "duration": "45 minutes",
            "interviewer": "Alex Kim",
        }
        data.update(kwargs)
        return data

    return _factory


# ---------------------------------------------------------------------------
# Persisted entity helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def create_job(job_service, make_job_data):
    """Factory that creates a job through the service."""

    def _factory(**kwargs: Any) -> Job:
        return job_service.create_job(make_job_data(**kwargs))

    return _factory


@pytest.fixture
def create_candidate(candidate_service, make_candidate_data):
    """Factory that creates a candidate through the service."""

    def _factory(job_id: str, **kwargs: Any) -> Candidate:
        return candidate_service.create_candidate(make_candidate_data(job_id, **kwargs))

    return _factory


# ---------------------------------------------------------------------------
# Model factories (not persisted)
# ---------------------------------------------------------------------------


@pytest.fixture
def make_job():
    """Factory that returns a callable to build Job models."""

    def _factory(
        skills: Optional[list[str]] = None,
        experience: str = "5 years building backend APIs",
        deliveries: str = "Ship reliable services",
        legal_values: Optional[list[str]] = None,
        availability: str = "Full time",
        deadlines: str = "Quarterly deadlines",
        pressure: str = "Calm under pressure",
        **kwargs: Any,
    ) -> Job:
        return Job(
            title=kwargs.pop("title", "Backend Engineer"),
            description=kwargs.pop("description", "Backend services"),
            performance=Performance(
                experience=experience,
                deliveries=deliveries,
                skills=["Python", "Docker"] if skills is None else skills,
            ),
            energy=Energy(availability=availability, deadlines=deadlines, pressure=pressure),
            culture=Culture(
                legal_values=["Ownership"] if legal_values is None else legal_values
            ),
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_candidate():
    """Factory that returns a callable to build Candidate models."""

    def _factory(
        job_id: str,
        performance: str = "I build backend APIs in Python.",
        energy: str = "Full time and calm under pressure.",
        culture: str = "Ownership matters to me.",
        **kwargs: Any,
    ) -> Candidate:
        return Candidate(
            job_id=job_id,
            name=kwargs.pop("name", "Jane Smith"),
            email=kwargs.pop("email", "jane.smith@example.com"),
            phone=kwargs.pop("phone", "+1-555-0100"),
            cultural_fit=CulturalFit(performance=performance, energy=energy, culture=culture),
            **kwargs,
        )

    return _factory
