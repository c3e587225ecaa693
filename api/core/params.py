"""
Request parameter parsing shared by feature routers.
"""

from __future__ import annotations

import re

from .errors import ValidationError

_INT_RE = re.compile(r"[+-]?\d+")

# Id columns are Postgres `integer`.
INT_ID_MIN = -(2**31)
INT_ID_MAX = 2**31 - 1


def parse_int_id(raw: str | None, *, message: str) -> int:
    """
    Parse a base-10 integer path id, or raise ValidationError with `message`.
    """
    text = (raw or "").strip()
    if not _INT_RE.fullmatch(text):
        raise ValidationError(message)
    value = int(text)
    if not INT_ID_MIN <= value <= INT_ID_MAX:
        raise ValidationError(message)
    return value
