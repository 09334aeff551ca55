"""
Resume file storage for RecruitFlow.

Resumes are stored outside the entity store; candidates only keep the
locator string returned here. Files are named
``{job_id}/{candidate_name}_{timestamp}.{extension}``.
"""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from recruitflow.data.models.base import utcnow
from recruitflow.utils.config import StorageSettings, get_settings
from recruitflow.utils.constants import RESUME_CONTENT_TYPES
from recruitflow.utils.exceptions import StoreFailureError, ValidationError
from recruitflow.utils.logger import get_logger

logger = get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _safe_segment(value: str, fallback: str) -> str:
    """Make ``value`` usable as a single path segment."""
    cleaned = _UNSAFE_CHARS.sub("_", value.strip()).strip("._")
    return cleaned or fallback


def resume_extension(content_type: str) -> str:
    """
    File extension for an accepted resume content type.

    Raises:
        ValidationError: If the type is not PDF, DOC or DOCX.
    """
    extension = RESUME_CONTENT_TYPES.get((content_type or "").split(";")[0].strip().lower())
    if extension is None:
        raise ValidationError(
            "Invalid file type. Please upload PDF, DOC, or DOCX files only.",
            field="resume",
            content_type=content_type,
        )
    return extension


def build_resume_path(
    job_id: str,
    candidate_name: str,
    extension: str,
    timestamp: Optional[int] = None,
) -> str:
    """Relative storage path for a resume; ``timestamp`` is milliseconds since the epoch."""
    if timestamp is None:
        timestamp = int(utcnow().timestamp() * 1000)
    job_segment = _safe_segment(job_id, "job")
    name_segment = _safe_segment(candidate_name, "candidate")
    return f"{job_segment}/{name_segment}_{timestamp}.{extension}"


class ResumeStorage(ABC):
    """Stores resume files and hands back a locator for the candidate record."""

    def __init__(self, max_size_bytes: Optional[int] = None):
        if max_size_bytes is None:
            max_size_bytes = get_settings().storage.max_resume_size_bytes
        self.max_size_bytes = max_size_bytes

    def validate(self, content: bytes, content_type: str) -> str:
        """
        Check a resume upload before it is written.

        Returns:
            The file extension for ``content_type``.

        Raises:
            ValidationError: If the file is empty, too large or of the wrong type.
        """
        extension = resume_extension(content_type)
        if not content:
            raise ValidationError("Resume file is empty.", field="resume")
        if len(content) > self.max_size_bytes:
            raise ValidationError(
                f"File too large. Maximum size is {self.max_size_bytes // (1024 * 1024)}MB.",
                field="resume",
                size=len(content),
            )
        return extension

    def store(
        self, job_id: str, candidate_name: str, content: bytes, content_type: str
    ) -> str:
        """Validate and store a resume, returning its locator."""
        extension = self.validate(content, content_type)
        path = build_resume_path(job_id, candidate_name, extension)
        locator = self._write(path, content, content_type)
        logger.info(f"Stored resume for job {job_id}: {path}")
        return locator

    @abstractmethod
    def _write(self, path: str, content: bytes, content_type: str) -> str:
        """Persist ``content`` at ``path`` and return its locator."""


class LocalResumeStorage(ResumeStorage):
    """Stores resumes on the local filesystem under ``STORAGE_RESUME_DIR``."""

    def __init__(self, storage_settings: Optional[StorageSettings] = None):
        storage_settings = storage_settings or get_settings().storage
        super().__init__(storage_settings.max_resume_size_bytes)
        self.base_path = Path(storage_settings.resume_dir)
        self.public_base_url = storage_settings.public_base_url.rstrip("/")

    def _write(self, path: str, content: bytes, content_type: str) -> str:
        file_path = self.base_path / path
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(content)
        except OSError as e:
            logger.error(f"Failed to write resume {file_path}: {e}")
            raise StoreFailureError("Failed to store resume", e) from e

        logger.debug(f"Saved resume to {file_path}")
        return f"{self.public_base_url}/{path}"
