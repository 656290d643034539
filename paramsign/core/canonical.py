"""Canonical serialization of a parameter set.

Entries are sorted by the UTF-8 bytes of their names and rendered as
``name=value`` joined with ``&``::

    client_id=16327128&method=android.shutdown&timestamp=1727494645

Values are rendered through :func:`render_value`, which dispatches once on
the value's type (text, number, boolean, null, nested).  Separator
characters inside names or values are NOT escaped unless ``escape=True``;
two different sets can therefore share a canonical form, e.g.
``{"a": "1&b=2"}`` and ``{"a": "1", "b": "2"}``.  Turning escaping on
changes the wire format and must be done on both sides.
"""

from __future__ import annotations

import json
import math
from functools import singledispatch
from typing import Any, Iterable, Mapping
from urllib.parse import quote

from paramsign.errors import EncodingError


def _json_text(value: Any) -> str:
    """Compact JSON with sorted keys; raises ``EncodingError`` on failure."""
    try:
        return json.dumps(
            value,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise EncodingError(f"Cannot render nested value: {exc}") from exc


@singledispatch
def render_value(value: Any) -> str:
    """Return the canonical text form of a parameter value."""
    raise EncodingError(f"Unsupported parameter value type: {type(value).__name__}")


@render_value.register
def _(value: str) -> str:
    return value


@render_value.register
def _(value: bool) -> str:
    return "true" if value else "false"


@render_value.register
def _(value: int) -> str:
    return str(value)


@render_value.register
def _(value: float) -> str:
    if not math.isfinite(value):
        raise EncodingError(f"Non-finite number cannot be rendered: {value!r}")
    return _json_text(value)


@render_value.register(type(None))
def _(value: None) -> str:
    return ""


@render_value.register(dict)
@render_value.register(list)
@render_value.register(tuple)
def _(value) -> str:
    return _json_text(value)


def _sort_key(name: str) -> bytes:
    return name.encode("utf-8")


def canonicalize(
    params: Mapping[str, Any],
    exclude: Iterable[str] = (),
    escape: bool = False,
) -> str:
    """Serialize *params* to its canonical ``name=value&...`` string.

    Names in *exclude* are left out.  An empty set yields ``""``.
    """
    skipped = set(exclude)
    names = [name for name in params if name not in skipped]
    for name in names:
        if not isinstance(name, str):
            raise EncodingError(f"Parameter names must be text, got {type(name).__name__}")

    parts = []
    for name in sorted(names, key=_sort_key):
        value = render_value(params[name])
        if escape:
            name, value = quote(name, safe=""), quote(value, safe="")
        parts.append(f"{name}={value}")
    return "&".join(parts)
