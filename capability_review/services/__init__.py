"""Services — SubmissionService."""

from capability_review.services.submission_service import SubmissionService

__all__ = ["SubmissionService"]
