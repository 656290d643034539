"""Timestamp default-injection."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Mapping

from paramsign.config import TIMESTAMP_FIELD


def with_timestamp(
    params: Mapping[str, Any],
    clock: Callable[[], float] = time.time,
    field: str = TIMESTAMP_FIELD,
) -> Dict[str, Any]:
    """Return a copy of *params* that carries a non-empty timestamp.

    A missing, ``None`` or empty *field* is set to ``clock()`` in whole
    seconds rendered as text.  An existing value is never overwritten.
    """
    result = dict(params)
    if result.get(field) in (None, ""):
        result[field] = str(int(clock()))
    return result
