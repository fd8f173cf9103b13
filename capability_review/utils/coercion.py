"""
Coercion of loosely-typed form payload values.

Submissions arrive as arbitrary JSON objects from the web layer. Scalar
fields become strings (or stay None); list fields always become lists.
"""

from __future__ import annotations

import json
from typing import Any, Optional


def as_text(value: Any) -> Optional[str]:
    """Render a single payload value as text, keeping None as None."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    # JSON spelling for values whose str() differs from what the client sent
    if isinstance(value, (bool, dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def as_text_list(value: Any) -> list[Optional[str]]:
    """
    Render a list-shaped payload value.

    A list/tuple keeps its elements (each rendered with as_text), a missing
    value becomes an empty list and any other value is wrapped as a
    single-element list.
    """
    if isinstance(value, (list, tuple)):
        return [as_text(item) for item in value]
    if value is None:
        return []
    return [as_text(value)]
