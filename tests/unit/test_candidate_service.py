"""
Tests for recruitflow.services.candidate_service: applications, review status and scoring.
"""

import pytest

from recruitflow.core.lifecycle import CandidateStatusMachine
from recruitflow.core.scoring import ComponentScorer, ComponentScores, FitScoreEngine
from recruitflow.data.store import EntityKind
from recruitflow.services import CandidateService
from recruitflow.utils.exceptions import (
    InvalidStatusError,
    JobMismatchError,
    NotFoundError,
    ValidationError,
)

PDF_BYTES = b"%PDF-1.4 resume"
PDF_TYPE = "application/pdf"


class FixedScorer(ComponentScorer):
    def __init__(self, technical, cultural, behavioral):
        self.values = (technical, cultural, behavioral)

    def score(self, candidate, job):
        return ComponentScores(*self.values)


# ── Create ───────────────────────────────────────────────────────────────────


class TestCreateCandidate:
    def test_created_as_new_without_score(self, create_job, create_candidate):
        job = create_job()
        candidate = create_candidate(job.id)
        assert candidate.status == "new"
        assert candidate.fit_score is None
        assert candidate.job_id == job.id

    def test_missing_job_creates_nothing(self, candidate_service, store, make_candidate_data):
        with pytest.raises(NotFoundError) as exc_info:
            candidate_service.create_candidate(make_candidate_data("missing-job"))
        assert exc_info.value.entity == "Job"
        assert store.count(EntityKind.CANDIDATE) == 0

    def test_bad_email(self, candidate_service, create_job, make_candidate_data):
        job = create_job()
        with pytest.raises(ValidationError) as exc_info:
            candidate_service.create_candidate(make_candidate_data(job.id, email="not-an-email"))
        assert exc_info.value.errors[0]["field"] == "email"

    def test_missing_answers(self, candidate_service, create_job, make_candidate_data):
        job = create_job()
        data = make_candidate_data(job.id)
        data["cultural_fit"] = {"performance": "Python", "energy": "Full time"}
        with pytest.raises(ValidationError):
            candidate_service.create_candidate(data)

    def test_cannot_supply_status(self, candidate_service, create_job, make_candidate_data):
        job = create_job()
        with pytest.raises(ValidationError):
            candidate_service.create_candidate(make_candidate_data(job.id, status="reviewed"))


# ── Applications with a resume file ──────────────────────────────────────────


class TestSubmitApplication:
    def test_stores_resume_and_candidate(
        self, candidate_service, resume_storage, create_job, make_candidate_data
    ):
        job = create_job()
        data = make_candidate_data(job.id)
        del data["resume_url"]

        candidate = candidate_service.submit_application(data, PDF_BYTES, PDF_TYPE)

        assert candidate.resume_url.startswith(
            f"https://files.example.com/resumes/{job.id}/Jane_Smith_"
        )
        assert candidate.resume_url.endswith(".pdf")
        relative = candidate.resume_url.removeprefix("https://files.example.com/resumes/")
        assert (resume_storage.base_path / relative).read_bytes() == PDF_BYTES

    def test_wrong_file_type_leaves_nothing(
        self, candidate_service, resume_storage, store, create_job, make_candidate_data
    ):
        job = create_job()
        with pytest.raises(ValidationError) as exc_info:
            candidate_service.submit_application(
                make_candidate_data(job.id), b"hello", "text/plain"
            )
        assert "PDF, DOC, or DOCX" in exc_info.value.message
        assert store.count(EntityKind.CANDIDATE) == 0
        assert not resume_storage.base_path.exists()

    def test_missing_job_leaves_no_file(
        self, candidate_service, resume_storage, make_candidate_data
    ):
        with pytest.raises(NotFoundError):
            candidate_service.submit_application(
                make_candidate_data("missing-job"), PDF_BYTES, PDF_TYPE
            )
        assert not resume_storage.base_path.exists()

    def test_invalid_form_leaves_no_file(
        self, candidate_service, resume_storage, create_job, make_candidate_data
    ):
        job = create_job()
        with pytest.raises(ValidationError):
            candidate_service.submit_application(
                make_candidate_data(job.id, name=""), PDF_BYTES, PDF_TYPE
            )
        assert not resume_storage.base_path.exists()


# ── Update / status ──────────────────────────────────────────────────────────


class TestUpdateCandidate:
    def test_merge_patch(self, candidate_service, create_job, create_candidate):
        candidate = create_candidate(create_job().id)
        updated = candidate_service.update_candidate(candidate.id, {"phone": "+1-555-0199"})
        assert updated.phone == "+1-555-0199"
        assert updated.name == candidate.name

    def test_job_id_not_editable(self, candidate_service, create_job, create_candidate):
        job = create_job()
        other = create_job(title="Other")
        candidate = create_candidate(job.id)
        with pytest.raises(ValidationError):
            candidate_service.update_candidate(candidate.id, {"job_id": other.id})
        assert candidate_service.get_candidate(candidate.id).job_id == job.id

    def test_fit_score_not_editable(self, candidate_service, create_job, create_candidate):
        candidate = create_candidate(create_job().id)
        with pytest.raises(ValidationError):
            candidate_service.update_candidate(candidate.id, {"fit_score": None})

    def test_status_in_patch(self, candidate_service, create_job, create_candidate):
        candidate = create_candidate(create_job().id)
        updated = candidate_service.update_candidate(
            candidate.id, {"status": "reviewed", "name": "Jane Q. Smith"}
        )
        assert updated.status == "reviewed"
        assert updated.name == "Jane Q. Smith"

    def test_invalid_status_in_patch(self, candidate_service, create_job, create_candidate):
        candidate = create_candidate(create_job().id)
        with pytest.raises(InvalidStatusError):
            candidate_service.update_candidate(candidate.id, {"status": "hired"})

    def test_empty_patch_returns_current(self, candidate_service, create_job, create_candidate):
        candidate = create_candidate(create_job().id)
        assert candidate_service.update_candidate(candidate.id, {}) == candidate


class TestCandidateStatus:
    def test_moves_freely_by_default(self, candidate_service, create_job, create_candidate):
        candidate = create_candidate(create_job().id)
        for status in ["sent_to_manager", "new", "reviewed"]:
            assert candidate_service.update_status(candidate.id, status).status == status

    def test_no_fit_score_required(self, candidate_service, create_job, create_candidate):
        candidate = create_candidate(create_job().id)
        updated = candidate_service.update_status(candidate.id, "sent_to_manager")
        assert updated.status == "sent_to_manager"
        assert updated.fit_score is None

    def test_same_status_is_idempotent(self, candidate_service, create_job, create_candidate):
        candidate = create_candidate(create_job().id)
        first = candidate_service.update_status(candidate.id, "reviewed")
        second = candidate_service.update_status(candidate.id, "reviewed")
        assert second.status == "reviewed"
        assert second.updated_at == first.updated_at

    def test_unknown_status(self, candidate_service, create_job, create_candidate):
        candidate = create_candidate(create_job().id)
        with pytest.raises(InvalidStatusError):
            candidate_service.update_status(candidate.id, "hired")
        assert candidate_service.get_candidate(candidate.id).status == "new"

    def test_missing_candidate(self, candidate_service):
        with pytest.raises(NotFoundError):
            candidate_service.update_status("missing", "reviewed")

    def test_forward_only(self, store, create_job, create_candidate):
        service = CandidateService(store, status_machine=CandidateStatusMachine(forward_only=True))
        candidate = create_candidate(create_job().id)
        service.update_status(candidate.id, "sent_to_manager")
        with pytest.raises(InvalidStatusError):
            service.update_status(candidate.id, "reviewed")
        assert service.get_candidate(candidate.id).status == "sent_to_manager"


# ── Delete / list ────────────────────────────────────────────────────────────


class TestDeleteCandidate:
    def test_delete(self, candidate_service, create_job, create_candidate):
        candidate = create_candidate(create_job().id)
        candidate_service.delete_candidate(candidate.id)
        with pytest.raises(NotFoundError):
            candidate_service.get_candidate(candidate.id)

    def test_delete_missing(self, candidate_service):
        with pytest.raises(NotFoundError):
            candidate_service.delete_candidate("missing")

    def test_interviews_survive(
        self, candidate_service, interview_service, create_job, create_candidate,
        make_interview_data,
    ):
        job = create_job()
        candidate = create_candidate(job.id)
        interview = interview_service.create_interview(make_interview_data(candidate.id, job.id))

        candidate_service.delete_candidate(candidate.id)

        assert interview_service.get_interview(interview.id).candidate_id == candidate.id


class TestListCandidates:
    def test_pagination_scenario(self, candidate_service, create_job, create_candidate):
        job = create_job()
        for i in range(25):
            create_candidate(job.id, name=f"Candidate {i}")

        third = candidate_service.list_candidates(job.id, page=3, page_size=10)
        assert len(third.items) == 5
        assert third.total == 25
        assert third.total_pages == 3

        fourth = candidate_service.list_candidates(job.id, page=4, page_size=10)
        assert fourth.items == []
        assert fourth.total == 25

    def test_only_this_job(self, candidate_service, create_job, create_candidate):
        job = create_job()
        other = create_job(title="Other")
        mine = create_candidate(job.id)
        create_candidate(other.id)
        assert [c.id for c in candidate_service.list_candidates(job.id).items] == [mine.id]

    def test_status_filter(self, candidate_service, create_job, create_candidate):
        job = create_job()
        reviewed = create_candidate(job.id, name="Reviewed")
        create_candidate(job.id, name="Fresh")
        candidate_service.update_status(reviewed.id, "reviewed")

        page = candidate_service.list_candidates(job.id, status="reviewed")
        assert [c.id for c in page.items] == [reviewed.id]

    def test_missing_job(self, candidate_service):
        with pytest.raises(NotFoundError):
            candidate_service.list_candidates("missing")


# ── Fit scoring ──────────────────────────────────────────────────────────────


class TestStatusCounts:
    def test_per_job_and_overall(self, candidate_service, create_job, create_candidate):
        job = create_job()
        other = create_job(title="Other")
        reviewed = create_candidate(job.id)
        create_candidate(job.id, name="John Doe")
        create_candidate(other.id)
        candidate_service.update_status(reviewed.id, "reviewed")

        assert candidate_service.get_status_counts(job.id) == {
            "new": 1,
            "reviewed": 1,
            "sent_to_manager": 0,
        }
        assert candidate_service.get_status_counts()["new"] == 2

    def test_missing_job(self, candidate_service):
        with pytest.raises(NotFoundError):
            candidate_service.get_status_counts("missing")


class TestCalculateFitScore:
    def test_stores_score(self, candidate_service, create_job, create_candidate):
        job = create_job()
        candidate = create_candidate(job.id)

        scored = candidate_service.calculate_fit_score(candidate.id, job.id)

        assert scored.fit_score is not None
        assert scored.fit_score.job_id == job.id
        assert 0 <= scored.fit_score.overall_score <= 100
        assert candidate_service.get_candidate(candidate.id).fit_score == scored.fit_score

    def test_replaces_previous_score(self, store, create_job, create_candidate):
        job = create_job()
        candidate = create_candidate(job.id)

        CandidateService(store, engine=FitScoreEngine(FixedScorer(20, 20, 20))).calculate_fit_score(
            candidate.id, job.id
        )
        rescored = CandidateService(
            store, engine=FitScoreEngine(FixedScorer(90, 80, 70))
        ).calculate_fit_score(candidate.id, job.id)

        assert rescored.fit_score.overall_score == 80
        assert rescored.fit_score.technical_score == 90

    def test_status_untouched(self, candidate_service, create_job, create_candidate):
        job = create_job()
        candidate = create_candidate(job.id)
        candidate_service.update_status(candidate.id, "reviewed")
        assert candidate_service.calculate_fit_score(candidate.id, job.id).status == "reviewed"

    def test_job_mismatch(self, candidate_service, create_job, create_candidate):
        job = create_job()
        other = create_job(title="Other")
        candidate = create_candidate(job.id)
        with pytest.raises(JobMismatchError):
            candidate_service.calculate_fit_score(candidate.id, other.id)
        assert candidate_service.get_candidate(candidate.id).fit_score is None

    def test_missing_candidate(self, candidate_service, create_job):
        with pytest.raises(NotFoundError):
            candidate_service.calculate_fit_score("missing", create_job().id)

    def test_missing_job(self, candidate_service, create_job, create_candidate):
        candidate = create_candidate(create_job().id)
        with pytest.raises(NotFoundError):
            candidate_service.calculate_fit_score(candidate.id, "missing")
