"""Portable token form of a parameter set: base64(JSON object).

The JSON rendering keeps value types (numbers stay numbers, nested values
stay nested), so a decoded token is mapping-equal to what was encoded.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Dict, Mapping

from paramsign.errors import DecodingError, EncodingError


def encode_token(params: Mapping[str, Any]) -> str:
    """Render *params* as JSON and encode it with the standard base64 alphabet."""
    try:
        body = json.dumps(
            dict(params),
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise EncodingError(f"Cannot serialize params to JSON: {exc}") from exc
    return base64.b64encode(body.encode("utf-8")).decode("ascii")


def decode_token(token: str) -> Dict[str, Any]:
    """Reverse :func:`encode_token`; raise ``DecodingError`` on any malformed input."""
    if not isinstance(token, str):
        raise DecodingError(f"Token must be text, got {type(token).__name__}")
    try:
        raw = base64.b64decode(token.strip().encode("ascii"), validate=True)
    except (UnicodeEncodeError, binascii.Error) as exc:
        raise DecodingError(f"Token is not valid base64: {exc}") from exc

    try:
        result = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise DecodingError(f"Token does not contain valid JSON: {exc}") from exc

    if not isinstance(result, dict):
        raise DecodingError(f"Token must hold a JSON object, got {type(result).__name__}")
    return result
