"""
Capability submission record as stored on disk and returned to callers.

Attributes are snake_case in Python and camelCase on the wire; the JSON
file written by earlier versions of the service uses the camelCase names.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from capability_review.utils.coercion import as_text, as_text_list

from .enums import SubmissionStatus


class Submission(BaseModel):
    """One company capability profile awaiting or having received a decision."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }

    id: Optional[str] = None

    # ── Company profile ──────────────────────────────────
    company_name: Optional[str] = None
    credit_code: Optional[str] = None
    company_scale: Optional[str] = None
    company_type: Optional[str] = None
    company_address: Optional[str] = None
    business_intro: Optional[str] = None
    core_products: list[Optional[str]] = Field(default_factory=list)
    intellectual_properties: list[Optional[str]] = Field(default_factory=list)
    patents: list[Optional[str]] = Field(default_factory=list)
    contact_name: Optional[str] = None
    contact_info: Optional[str] = None

    # ── Ownership ────────────────────────────────────────
    submitted_by: Optional[str] = None
    submitted_by_username: Optional[str] = None

    # ── Review ───────────────────────────────────────────
    status: SubmissionStatus = SubmissionStatus.PENDING
    created_at: Optional[datetime] = None
    decision_at: Optional[datetime] = None
    decision_remark: Optional[str] = None
    decision_reason: Optional[str] = None  # legacy duplicate of decision_remark
    decision_by: Optional[str] = None
    decision_by_name: Optional[str] = None

    @field_validator(
        "id",
        "company_name",
        "credit_code",
        "company_scale",
        "company_type",
        "company_address",
        "business_intro",
        "contact_name",
        "contact_info",
        "submitted_by",
        "submitted_by_username",
        "decision_remark",
        "decision_reason",
        "decision_by",
        "decision_by_name",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return as_text(value)

    @field_validator("core_products", "intellectual_properties", "patents", mode="before")
    @classmethod
    def _coerce_text_list(cls, value: Any) -> list[Optional[str]]:
        return as_text_list(value)

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, value: Any) -> SubmissionStatus:
        if value is None:
            return SubmissionStatus.PENDING
        return SubmissionStatus.parse(value)

    @field_validator("created_at", "decision_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict using the camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)
