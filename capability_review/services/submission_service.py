"""
Submission Service — the capability submission store.

Holds every submission in memory keyed by id, mirrors the full collection
to a JSON file after each mutation and records reviewer decisions.
Load and save failures are logged and never raised: the in-memory
collection stays authoritative for the running process.
"""

from __future__ import annotations

import logging
import os
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional

from capability_review.config import get_settings
from capability_review.models.enums import SubmissionStatus
from capability_review.models.schemas import Submission
from capability_review.persistence.submission_repository import SubmissionRepository
from capability_review.utils.coercion import as_text, as_text_list

logger = logging.getLogger(__name__)

TEXT_FIELDS = {
    "companyName": "company_name",
    "creditCode": "credit_code",
    "companyScale": "company_scale",
    "companyType": "company_type",
    "companyAddress": "company_address",
    "businessIntro": "business_intro",
    "contactName": "contact_name",
    "contactInfo": "contact_info",
}

LIST_FIELDS = {
    "coreProducts": "core_products",
    "intellectualProperties": "intellectual_properties",
    "patents": "patents",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def _newest_first(items: list[Submission]) -> list[Submission]:
    # Records without created_at go last; list.sort is stable for ties.
    with_time = [s for s in items if s.created_at is not None]
    without_time = [s for s in items if s.created_at is None]
    with_time.sort(key=lambda s: s.created_at, reverse=True)
    return with_time + without_time


class SubmissionService:
    """In-memory submission store with snapshot persistence to a JSON file."""

    def __init__(
        self,
        storage_path: str | os.PathLike[str] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if storage_path is None:
            storage_path = get_settings().storage_path
        self.repository = SubmissionRepository(storage_path)
        self._clock = clock
        self._submissions: dict[str, Submission] = {}
        self._lock = threading.RLock()
        self._persist_lock = threading.Lock()
        self.load_from_disk()

    # ── Loading ──────────────────────────────────────────

    def _read_stored(self) -> dict[str, Submission]:
        """Parse the storage file into a fresh id → record map, backfilling old records."""
        self.repository.ensure_directory()
        loaded: dict[str, Submission] = {}
        for item in self.repository.load_all():
            if item.id is None:
                item.id = _new_id()
            if item.created_at is None:
                item.created_at = self._clock()
            if item.decision_reason is None and item.decision_remark is not None:
                item.decision_reason = item.decision_remark
            loaded[item.id] = item
        return loaded

    def load_from_disk(self) -> bool:
        """Merge the storage file into the collection. Returns False if it could not be read."""
        try:
            loaded = self._read_stored()
        except Exception:
            logger.warning(
                f"Failed to load submissions from {self.repository.path}", exc_info=True
            )
            return False

        with self._lock:
            self._submissions.update(loaded)
        logger.info(
            f"Loaded {len(loaded)} capability submissions from {self.repository.path}"
        )
        return True

    def reload(self) -> bool:
        """
        Replace the collection with the storage file's contents.
        On a read failure the current collection is kept and False is returned.
        """
        try:
            loaded = self._read_stored()
        except Exception:
            logger.warning(
                f"Failed to reload submissions from {self.repository.path}; "
                f"keeping {len(self._submissions)} in memory",
                exc_info=True,
            )
            return False

        with self._lock:
            self._submissions = loaded
        logger.info(
            f"Reloaded {len(loaded)} capability submissions from {self.repository.path}"
        )
        return True

    # ── Commands ─────────────────────────────────────────

    def create_submission(
        self,
        payload: Mapping[str, Any],
        submitted_by: Optional[str],
        submitted_by_username: Optional[str],
    ) -> Submission:
        """Create a PENDING submission from a loosely-typed form payload."""
        fields: dict[str, Any] = {}
        for key, attr in TEXT_FIELDS.items():
            fields[attr] = as_text(payload.get(key))
        for key, attr in LIST_FIELDS.items():
            fields[attr] = as_text_list(payload.get(key))

        submission = Submission(
            id=_new_id(),
            submitted_by=submitted_by,
            submitted_by_username=submitted_by_username,
            status=SubmissionStatus.PENDING,
            created_at=self._clock(),
            **fields,
        )

        with self._lock:
            self._submissions[submission.id] = submission
        logger.info(
            f"Created submission {submission.id} for {submission.company_name!r} "
            f"by {submitted_by_username}"
        )
        self.persist_safely()
        return submission

    def decide(
        self,
        submission_id: str,
        status: SubmissionStatus | str,
        remark: Optional[str],
        decision_by: Optional[str],
        decision_by_name: Optional[str],
    ) -> Optional[Submission]:
        """
        Record a reviewer decision. Returns None when the id is unknown,
        whatever the status; raises ValueError for an unparseable status on
        a known id. An earlier decision on the same submission is overwritten.
        """
        with self._lock:
            submission = self._submissions.get(submission_id)
            if submission is None:
                return None

            status = SubmissionStatus.parse(status)
            submission.status = status
            submission.decision_remark = remark
            submission.decision_reason = remark
            submission.decision_by = decision_by
            submission.decision_by_name = decision_by_name
            submission.decision_at = self._clock()

        logger.info(f"Submission {submission_id} → {status.value} by {decision_by}")
        self.persist_safely()
        return submission

    # ── Queries ──────────────────────────────────────────

    def list_submissions(self) -> list[Submission]:
        """All submissions, newest first."""
        with self._lock:
            snapshot = list(self._submissions.values())
        return _newest_first(snapshot)

    def get_submission(self, submission_id: str) -> Optional[Submission]:
        with self._lock:
            return self._submissions.get(submission_id)

    def list_submissions_by_user(self, username: Optional[str]) -> list[Submission]:
        """Submissions owned by `username`, newest first. Empty for a blank username."""
        if not username:
            return []
        with self._lock:
            owned = [
                s for s in self._submissions.values()
                if s.submitted_by_username == username
            ]
        return _newest_first(owned)

    def count_by_status(self) -> dict[SubmissionStatus, int]:
        """Number of submissions per status, zero-filled."""
        counts = {status: 0 for status in SubmissionStatus}
        with self._lock:
            for submission in self._submissions.values():
                counts[submission.status] += 1
        return counts

    # ── Persistence ──────────────────────────────────────

    def persist_safely(self) -> None:
        """Write the whole collection to disk; failures are logged, not raised."""
        with self._persist_lock:
            with self._lock:
                snapshot = [s.model_copy() for s in self._submissions.values()]
            try:
                self.repository.save_all(snapshot)
                logger.debug(f"Persisted {len(snapshot)} submissions")
            except Exception:
                logger.warning(
                    f"Failed to persist submissions to {self.repository.path}",
                    exc_info=True,
                )
