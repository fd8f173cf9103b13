"""Capability Review — capability submission store and reviewer workflow."""

from capability_review.models import Submission, SubmissionStatus
from capability_review.services import SubmissionService

__all__ = ["Submission", "SubmissionStatus", "SubmissionService"]
