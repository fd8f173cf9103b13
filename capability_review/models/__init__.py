from .enums import SubmissionStatus
from .schemas import Submission

__all__ = ["SubmissionStatus", "Submission"]
