"""Persistence — SubmissionRepository."""

from capability_review.persistence.submission_repository import SubmissionRepository

__all__ = ["SubmissionRepository"]
