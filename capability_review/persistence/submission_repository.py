"""
Submission Repository — JSON file snapshot storage.

The whole collection lives in a single pretty-printed JSON array that is
rewritten on every save.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterable

from capability_review.models.schemas import Submission

logger = logging.getLogger(__name__)


class SubmissionRepository:
    """Read and overwrite the submissions file."""

    def __init__(self, storage_path: str | os.PathLike[str]):
        self.path = Path(storage_path)

    def ensure_directory(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def exists(self) -> bool:
        return self.path.exists()

    def load_all(self) -> list[Submission]:
        """
        Parse the storage file into Submission records.
        Returns an empty list when the file does not exist.
        Raises on unreadable or malformed content.
        """
        if not self.path.exists():
            return []
        raw = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError(f"{self.path} does not contain a JSON array")
        return [Submission.model_validate(item) for item in raw]

    def save_all(self, submissions: Iterable[Submission]) -> None:
        """
        Write the given records as the new file contents.
        The data goes to a temporary sibling first and is renamed over the
        target, so a failed write leaves the previous file intact.
        """
        self.ensure_directory()
        payload = json.dumps(
            [item.to_wire() for item in submissions],
            indent=2,
            ensure_ascii=False,
        )
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.write("\n")
            os.chmod(tmp_name, self._target_mode())
            os.replace(tmp_name, self.path)
        except Exception:
            try:
                os.remove(tmp_name)
            except OSError:
                pass
            raise
        logger.debug(f"Wrote {self.path}")

    def _target_mode(self) -> int:
        """Permission bits for the rewritten file: keep the existing ones, else the umask default."""
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask
