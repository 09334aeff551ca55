"""
Tests for the error taxonomy and the service-layer error helpers.
"""

import pytest

from recruitflow.data.models import JobCreate
from recruitflow.services.base import logs_domain_errors, parse_schema
from recruitflow.utils.exceptions import (
    HasDependentsError,
    InvalidStatusError,
    JobMismatchError,
    NotFoundError,
    StoreFailureError,
    ValidationError,
)


class TestErrorTaxonomy:
    @pytest.mark.parametrize(
        "error, status",
        [
            (ValidationError("bad"), 400),
            (NotFoundError("Job", "j1"), 404),
            (JobMismatchError("c1", "j1", "j2"), 400),
            (InvalidStatusError("bad status"), 400),
            (HasDependentsError("j1", 2), 400),
            (StoreFailureError("down"), 500),
        ],
    )
    def test_http_status(self, error, status):
        assert error.http_status == status

    def test_to_dict(self):
        payload = NotFoundError("Candidate", "c1").to_dict()
        assert payload["error"] == "not_found"
        assert payload["message"] == "Candidate not found: c1"
        assert payload["details"] == {"entity": "Candidate", "id": "c1"}

    def test_store_failure_keeps_original(self):
        original = ConnectionError("reset by peer")
        error = StoreFailureError("Query failed", original)
        assert error.message == "Query failed: reset by peer"
        assert error.original is original

    def test_mismatch_message(self):
        error = JobMismatchError("c1", "j1", "j2")
        assert "c1" in error.message and "j2" in error.message


class TestParseSchema:
    def test_passes_schema_through(self, make_job_data):
        schema = JobCreate(**make_job_data())
        assert parse_schema(JobCreate, schema, "job") is schema

    def test_collects_each_field(self, make_job_data):
        data = make_job_data(title="")
        del data["description"]
        with pytest.raises(ValidationError) as exc_info:
            parse_schema(JobCreate, data, "job")
        fields = {e["field"] for e in exc_info.value.errors}
        assert fields == {"title", "description"}
        assert exc_info.value.message.startswith("Invalid job:")
        assert "errors" in exc_info.value.to_dict()


class TestLogsDomainErrors:
    def test_domain_error_logged_and_raised(self, log_messages):
        @logs_domain_errors
        def lookup():
            raise NotFoundError("Job", "j1")

        with pytest.raises(NotFoundError):
            lookup()
        assert any("rejected: Job not found: j1" in m for m in log_messages)

    def test_other_errors_untouched(self, log_messages):
        @logs_domain_errors
        def broken():
            raise KeyError("x")

        with pytest.raises(KeyError):
            broken()
        assert log_messages == []

    def test_returns_value(self):
        @logs_domain_errors
        def ok():
            return 42

        assert ok() == 42
        assert ok.__name__ == "ok"
