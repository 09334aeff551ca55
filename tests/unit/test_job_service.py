"""
Tests for recruitflow.services.job_service: job operations and the deletion guard.
"""

import pytest

from recruitflow.utils.exceptions import (
    HasDependentsError,
    InvalidStatusError,
    NotFoundError,
    ValidationError,
)


# ── Create / read ────────────────────────────────────────────────────────────


class TestCreateJob:
    def test_created_as_draft_with_link(self, job_service, make_job_data):
        job = job_service.create_job(make_job_data())
        assert job.status == "draft"
        assert job.application_link == f"http://localhost:3000/apply/{job.id}"
        assert job_service.get_job(job.id) == job

    def test_missing_title(self, job_service, make_job_data):
        data = make_job_data()
        del data["title"]
        with pytest.raises(ValidationError) as exc_info:
            job_service.create_job(data)
        assert exc_info.value.errors[0]["field"] == "title"
        assert exc_info.value.http_status == 400

    def test_blank_description(self, job_service, make_job_data):
        with pytest.raises(ValidationError):
            job_service.create_job(make_job_data(description="   "))

    def test_cannot_supply_application_link(self, job_service, make_job_data):
        with pytest.raises(ValidationError):
            job_service.create_job(make_job_data(application_link="https://elsewhere"))

    def test_get_missing(self, job_service):
        with pytest.raises(NotFoundError):
            job_service.get_job("missing")

    def test_rejection_is_logged(self, job_service, log_messages):
        with pytest.raises(NotFoundError):
            job_service.get_job("missing")
        assert any("Job not found: missing" in m for m in log_messages)


# ── Update ───────────────────────────────────────────────────────────────────


class TestUpdateJob:
    def test_merge_patch(self, job_service, create_job):
        job = create_job()
        updated = job_service.update_job(job.id, {"title": "Staff Engineer"})
        assert updated.title == "Staff Engineer"
        assert updated.description == job.description
        assert updated.application_link == job.application_link

    def test_nested_section_replaced(self, job_service, create_job):
        job = create_job()
        updated = job_service.update_job(job.id, {"culture": {"legal_values": ["Curiosity"]}})
        assert updated.culture.legal_values == ["Curiosity"]
        assert updated.performance == job.performance

    def test_application_link_not_editable(self, job_service, create_job):
        job = create_job()
        with pytest.raises(ValidationError):
            job_service.update_job(job.id, {"application_link": "https://elsewhere"})
        assert job_service.get_job(job.id).application_link == job.application_link

    def test_id_not_editable(self, job_service, create_job):
        job = create_job()
        with pytest.raises(ValidationError):
            job_service.update_job(job.id, {"_id": "other"})

    def test_invalid_status_in_patch(self, job_service, create_job):
        job = create_job()
        with pytest.raises(InvalidStatusError):
            job_service.update_job(job.id, {"status": "archived"})

    def test_missing_job(self, job_service):
        with pytest.raises(NotFoundError):
            job_service.update_job("missing", {"title": "x"})


class TestUpdateJobStatus:
    def test_any_to_any(self, job_service, create_job):
        job = create_job()
        for status in ["published", "closed", "draft", "closed", "published"]:
            assert job_service.update_status(job.id, status).status == status

    def test_same_status_writes_nothing(self, job_service, create_job):
        job = create_job()
        again = job_service.update_status(job.id, "draft")
        assert again.updated_at == job.updated_at

    def test_invalid_status_leaves_job(self, job_service, create_job):
        job = create_job()
        with pytest.raises(InvalidStatusError):
            job_service.update_status(job.id, "archived")
        assert job_service.get_job(job.id).status == "draft"

    def test_lifecycle_listing_scenario(self, job_service, create_job):
        job = create_job()
        drafts = job_service.list_jobs(status="draft")
        assert job.id in [j.id for j in drafts.items]
        assert drafts.total == 1

        job_service.update_status(job.id, "published")

        assert job_service.list_jobs(status="draft").total == 0
        published = job_service.list_jobs(status="published")
        assert [j.id for j in published.items] == [job.id]


# ── Delete ───────────────────────────────────────────────────────────────────


class TestDeleteJob:
    def test_delete_without_candidates(self, job_service, create_job):
        job = create_job()
        job_service.delete_job(job.id)
        with pytest.raises(NotFoundError):
            job_service.get_job(job.id)
        assert job_service.list_jobs().total == 0

    def test_delete_missing(self, job_service):
        with pytest.raises(NotFoundError):
            job_service.delete_job("missing")

    def test_guard_scenario(self, job_service, candidate_service, create_job, create_candidate):
        job = create_job()
        candidate = create_candidate(job.id)

        with pytest.raises(HasDependentsError) as exc_info:
            job_service.delete_job(job.id)
        assert exc_info.value.http_status == 400
        assert job_service.get_job(job.id).id == job.id

        candidate_service.delete_candidate(candidate.id)
        job_service.delete_job(job.id)
        with pytest.raises(NotFoundError):
            job_service.get_job(job.id)

    def test_bulk_delete_reports_each_job(self, job_service, create_job, create_candidate):
        free = create_job(title="Free")
        taken = create_job(title="Taken")
        create_candidate(taken.id)

        result = job_service.delete_jobs([free.id, taken.id, "missing"])

        assert result.deleted == [free.id]
        assert set(result.failed) == {taken.id, "missing"}
        assert "existing candidates" in result.failed[taken.id]
        assert not result.all_deleted
        assert job_service.get_job(taken.id).id == taken.id


# ── Queries ──────────────────────────────────────────────────────────────────


class TestListJobs:
    def test_newest_first(self, job_service, create_job):
        ids = [create_job(title=f"Job {i}").id for i in range(3)]
        assert [j.id for j in job_service.list_jobs().items] == list(reversed(ids))

    def test_search_and_status_combined(self, job_service, create_job):
        python_draft = create_job(title="Python Developer")
        python_published = create_job(title="Senior PYTHON Engineer")
        create_job(title="Designer", description="Figma and research")
        job_service.update_status(python_published.id, "published")

        result = job_service.list_jobs(status="draft", search="python")
        assert [j.id for j in result.items] == [python_draft.id]

    def test_search_in_description(self, job_service, create_job):
        job = create_job(title="Analyst", description="Heavy SQL and Python work")
        assert [j.id for j in job_service.list_jobs(search="sql").items] == [job.id]

    def test_search_is_literal(self, job_service, create_job):
        create_job(title="Engineer")
        assert job_service.list_jobs(search=".*").total == 0

    def test_page_past_end_is_empty(self, job_service, create_job):
        for i in range(3):
            create_job(title=f"Job {i}")
        first = job_service.list_jobs(page=1, page_size=2)
        beyond = job_service.list_jobs(page=5, page_size=2)
        assert beyond.items == []
        assert beyond.total == first.total == 3
        assert beyond.total_pages == 2

    def test_invalid_status_filter(self, job_service):
        with pytest.raises(InvalidStatusError):
            job_service.list_jobs(status="archived")

    def test_invalid_page(self, job_service):
        with pytest.raises(ValidationError):
            job_service.list_jobs(page=0)

    def test_search_jobs(self, job_service, create_job):
        create_job(title="Python Developer")
        create_job(title="Go Developer")
        assert [j.title for j in job_service.search_jobs("python")] == ["Python Developer"]

    def test_jobs_by_status(self, job_service, create_job):
        job = create_job()
        create_job()
        job_service.update_status(job.id, "closed")
        assert [j.id for j in job_service.get_jobs_by_status("closed")] == [job.id]

    def test_stats(self, job_service, create_job):
        jobs = [create_job(title=f"Job {i}") for i in range(4)]
        job_service.update_status(jobs[0].id, "published")
        job_service.update_status(jobs[1].id, "published")
        job_service.update_status(jobs[2].id, "closed")

        stats = job_service.get_job_stats()
        assert (stats.total, stats.draft, stats.published, stats.closed) == (4, 1, 2, 1)
