"""
Error taxonomy for RecruitFlow.

Every failure the core reports is one of these types. Each carries the
HTTP status a web layer should answer with, so callers never have to
parse messages to decide how to respond.
"""

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError


class RecruitFlowError(Exception):
    """Base class for all domain errors."""

    http_status: int = 500
    code: str = "error"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for an API response body."""
        payload: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(RecruitFlowError):
    """A required field is missing or malformed."""

    http_status = 400
    code = "validation_error"

    def __init__(
        self,
        message: str,
        errors: Optional[list[dict[str, Any]]] = None,
        **details: Any,
    ) -> None:
        super().__init__(message, **details)
        self.errors = errors or []

    @classmethod
    def from_pydantic(
        cls, exc: PydanticValidationError, context: str = "input"
    ) -> "ValidationError":
        """Build from a pydantic error, keeping one entry per offending field."""
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        fields = ", ".join(e["field"] or context for e in errors)
        return cls(f"Invalid {context}: {fields}", errors=errors)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class NotFoundError(RecruitFlowError):
    """A referenced job, candidate or interview does not exist."""

    http_status = 404
    code = "not_found"

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found: {entity_id}", entity=entity, id=entity_id)
        self.entity = entity
        self.entity_id = entity_id


class JobMismatchError(RecruitFlowError):
    """A candidate is paired with a job it did not apply to."""

    http_status = 400
    code = "job_mismatch"

    def __init__(self, candidate_id: str, expected_job_id: str, given_job_id: str) -> None:
        super().__init__(
            f"Candidate {candidate_id} applied to job {expected_job_id}, not {given_job_id}",
            candidate_id=candidate_id,
            expected_job_id=expected_job_id,
            given_job_id=given_job_id,
        )


class InvalidStatusError(RecruitFlowError):
    """A status value is outside its enumeration or the move is not allowed."""

    http_status = 400
    code = "invalid_status"


class HasDependentsError(RecruitFlowError):
    """A job cannot be deleted while candidates still reference it."""

    http_status = 400
    code = "has_dependents"

    def __init__(self, job_id: str, candidate_count: int) -> None:
        super().__init__(
            "Cannot delete job with existing candidates. "
            "Please remove all candidates first.",
            job_id=job_id,
            candidate_count=candidate_count,
        )
        self.job_id = job_id
        self.candidate_count = candidate_count


class StoreFailureError(RecruitFlowError):
    """The persistence backend failed; the original error is kept for diagnostics."""

    http_status = 500
    code = "store_failure"

    def __init__(self, message: str, original: Optional[BaseException] = None) -> None:
        if original is not None:
            message = f"{message}: {original}"
        super().__init__(message)
        self.original = original
