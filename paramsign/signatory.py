"""Signatory – signs, validates, encodes and decodes parameter sets.

A ``Signatory`` owns one secret key for its whole lifetime and holds no
other mutable state, so a single instance can be shared across threads
and requests.

Signing flow:
1. Copy the parameters and inject ``timestamp`` if it is missing.
2. Canonicalize (sorted ``name=value`` pairs joined by ``&``), leaving out
   the ``sign`` field so a set that carries its own signature still signs
   the same way.
3. Append ``&key=<secret>`` and hash (or HMAC, depending on the algorithm).
4. Render the digest as hex.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Mapping, Tuple

from paramsign.config import (
    DEFAULT_ALGORITHM,
    ESCAPE_VALUES,
    SIGNATURE_FIELD,
    TIMESTAMP_FIELD,
    UPPERCASE_SIGNATURE,
)
from paramsign.core.canonical import canonicalize
from paramsign.core.timestamp import with_timestamp
from paramsign.core.token import decode_token, encode_token
from paramsign.crypto.digest import check_algorithm, keyed_digest, signatures_match
from paramsign.errors import EncodingError

logger = logging.getLogger(__name__)


class Signatory:
    """Keyed signer for query-string style parameter sets."""

    def __init__(
        self,
        key: str,
        *,
        algorithm: str = DEFAULT_ALGORITHM,
        uppercase: bool = UPPERCASE_SIGNATURE,
        escape_values: bool = ESCAPE_VALUES,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not isinstance(key, str):
            raise TypeError(f"Secret key must be text, got {type(key).__name__}")
        self._key = key
        self._algorithm = check_algorithm(algorithm)
        self._uppercase = uppercase
        self._escape_values = escape_values
        self._clock = clock

    def __repr__(self) -> str:
        # never expose the key
        return f"Signatory(algorithm={self._algorithm!r}, uppercase={self._uppercase})"

    @property
    def key(self) -> str:
        return self._key

    @property
    def algorithm(self) -> str:
        return self._algorithm

    # ---- helpers ----

    def _prepare(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        if not isinstance(params, Mapping):
            raise EncodingError(f"Params must be a mapping, got {type(params).__name__}")
        return with_timestamp(params, clock=self._clock, field=TIMESTAMP_FIELD)

    def _sign_prepared(self, params: Mapping[str, Any]) -> str:
        payload = canonicalize(params, exclude=(SIGNATURE_FIELD,), escape=self._escape_values)
        digest = keyed_digest(payload, self._key, self._algorithm)
        logger.debug("Signed fields %s with %s", sorted(params), self._algorithm)
        return digest.upper() if self._uppercase else digest

    # ---- public API ----

    def generate_signature(self, params: Mapping[str, Any]) -> str:
        """Return the signature of *params* (``sign`` itself is not signed)."""
        return self._sign_prepared(self._prepare(params))

    def encode(self, params: Mapping[str, Any], include_signature: bool = False) -> str:
        """Encode *params* (with timestamp injected) as a base64 token.

        With *include_signature* the signature is added under ``sign``
        unless the caller already supplied one.
        """
        prepared = self._prepare(params)
        if include_signature and SIGNATURE_FIELD not in prepared:
            prepared[SIGNATURE_FIELD] = self._sign_prepared(prepared)
        return encode_token(prepared)

    def decode(self, token: str) -> Dict[str, Any]:
        """Decode a token produced by :meth:`encode`."""
        return decode_token(token)

    def validate(self, params: Mapping[str, Any], signature: str) -> bool:
        """Return True if *signature* is the signature of *params*."""
        expected = self.generate_signature(params)
        if not isinstance(signature, str):
            return False
        return signatures_match(expected, signature)

    def verify_token(self, token: str) -> Tuple[bool, Dict[str, Any]]:
        """Decode *token* and check the ``sign`` field embedded in it.

        Returns ``(valid, params)``; a token without ``sign`` is not valid.
        """
        params = self.decode(token)
        claimed = params.get(SIGNATURE_FIELD)
        if claimed is None:
            return False, params
        return self.validate(params, claimed), params
