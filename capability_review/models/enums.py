from __future__ import annotations

from enum import Enum


class SubmissionStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, value: "SubmissionStatus | str") -> "SubmissionStatus":
        """Accept a member, its name in any case, or a reviewer action verb."""
        if isinstance(value, cls):
            return value
        normalised = str(value).strip().upper()
        normalised = _ACTIONS.get(normalised, normalised)
        try:
            return cls(normalised)
        except ValueError:
            raise ValueError(f"Unknown submission status: {value!r}") from None


_ACTIONS = {
    "APPROVE": "APPROVED",
    "REJECT": "REJECTED",
}
