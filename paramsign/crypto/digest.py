"""Keyed digest – the single place where the hash algorithm is chosen.

Concatenation digests hash ``payload + "&key=" + key``; this is the wire
format of existing legacy signers.  ``hmac-sha256`` keys an HMAC with the
secret instead and is the recommended choice for new deployments.
"""

from __future__ import annotations

import hashlib
import hmac

from paramsign.config import KEY_FIELD

_CONCAT_ALGORITHMS = {
    "md5": hashlib.md5,
    "sha256": hashlib.sha256,
}

_HMAC_ALGORITHMS = {
    "hmac-sha256": hashlib.sha256,
}

ALGORITHMS = tuple(sorted(set(_CONCAT_ALGORITHMS) | set(_HMAC_ALGORITHMS)))


def check_algorithm(algorithm: str) -> str:
    """Return the normalised algorithm name or raise ``ValueError``."""
    if not isinstance(algorithm, str):
        raise ValueError(f"Digest algorithm must be text, got {type(algorithm).__name__}")
    name = algorithm.strip().lower()
    if name not in ALGORITHMS:
        raise ValueError(
            f"Unsupported digest algorithm {algorithm!r} (choose from {', '.join(ALGORITHMS)})"
        )
    return name


def signing_string(payload: str, key: str) -> str:
    """Append the secret to a canonical *payload*: ``<payload>&key=<key>``."""
    return f"{payload}&{KEY_FIELD}={key}"


def keyed_digest(payload: str, key: str, algorithm: str = "md5") -> str:
    """Produce a lowercase hex digest of (*payload*, *key*)."""
    name = check_algorithm(algorithm)
    if name in _HMAC_ALGORITHMS:
        return hmac.new(key.encode(), payload.encode(), _HMAC_ALGORITHMS[name]).hexdigest()
    return _CONCAT_ALGORITHMS[name](signing_string(payload, key).encode()).hexdigest()


def signatures_match(expected: str, claimed: str) -> bool:
    """Constant-time, case-sensitive comparison of two signature strings."""
    return hmac.compare_digest(expected.encode(), claimed.encode())
