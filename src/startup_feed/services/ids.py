"""Time-derived record identifiers."""

from __future__ import annotations

import time
from collections.abc import Iterable


def next_record_id(existing: Iterable[int]) -> int:
    """Return a new id for a user, post or comment.

    Ids are the current epoch time in milliseconds, bumped past the
    largest id already taken so two records created within the same
    millisecond still get distinct, increasing ids.
    """
    now_ms = time.time_ns() // 1_000_000
    return max(now_ms, max(existing, default=0) + 1)
