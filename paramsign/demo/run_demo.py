#!/usr/bin/env python3
"""paramsign end-to-end demo.

Usage (``pip install -e .[serve]``, then start the service, e.g.
``PARAMSIGN_SECRET_KEY=your_secret_key uvicorn --factory paramsign.service.app:create_app``):
    python -m paramsign.demo.run_demo

The script:
1. Signs a sample parameter set.
2. Encodes it (signature folded in) as a base64 token.
3. Decodes the token back to a parameter set.
4. Validates the decoded set against the signature.
5. Tampers with one field and shows validation failing.
6. Sends a corrupted token and shows it being rejected.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from paramsign.config import LOG_FILE, LOG_LEVEL, SERVICE_URL
from paramsign.logging_setup import setup_logging

logger = logging.getLogger(__name__)

# ---------- sample request parameters ------------------------------------
SAMPLE_PARAMS = {
    "client_id": "16327128",
    "method": "android.shutdown",
    "timestamp": "1727494645",
}


def banner(msg: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {msg}")
    print(f"{'='*60}")


def run_demo(client: httpx.Client, params: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Drive the service through the full sign/encode/decode/validate cycle.

    *client* must have its ``base_url`` pointing at the service.  Returns a
    summary of what was observed.
    """
    if params is None:
        params = dict(SAMPLE_PARAMS)

    # ---- 1. Sign ----
    banner("1) Sign parameters")
    resp = client.post("/sign", json={"params": params})
    resp.raise_for_status()
    sign = resp.json()["sign"]
    print(f"   sign = {sign}")

    # ---- 2. Encode ----
    banner("2) Encode as token (signature included)")
    resp = client.post("/encode", json={"params": params, "include_signature": True})
    resp.raise_for_status()
    token = resp.json()["token"]
    print(f"   token = {token[:48]}…")

    # ---- 3. Decode ----
    banner("3) Decode token")
    resp = client.post("/decode", json={"token": token})
    resp.raise_for_status()
    decoded = resp.json()["params"]
    for name in sorted(decoded):
        print(f"   {name} = {decoded[name]}")

    # ---- 4. Validate ----
    banner("4) Validate decoded parameters")
    resp = client.post("/validate", json={"params": decoded, "sign": sign})
    resp.raise_for_status()
    valid = resp.json()["valid"]
    print(f"   valid = {valid}")

    # ---- 5. Tamper ----
    banner("5) Tamper with a field")
    tampered = dict(decoded, method="android.reboot")
    resp = client.post("/validate", json={"params": tampered, "sign": sign})
    resp.raise_for_status()
    tampered_valid = resp.json()["valid"]
    print(f"   valid after tampering = {tampered_valid}")

    # ---- 6. Corrupted token ----
    banner("6) Corrupted token")
    resp = client.post("/decode", json={"token": "!!" + token[2:]})
    print(f"   HTTP {resp.status_code}: {resp.json().get('detail', resp.text)}")

    banner("DEMO COMPLETE")
    return {
        "sign": sign,
        "token": token,
        "decoded": decoded,
        "valid": valid,
        "tampered_valid": tampered_valid,
        "corrupt_status": resp.status_code,
    }


def main() -> None:
    setup_logging(LOG_LEVEL, LOG_FILE)
    logger.info("Running demo against %s", SERVICE_URL)
    with httpx.Client(base_url=SERVICE_URL, timeout=15.0) as client:
        run_demo(client)


if __name__ == "__main__":
    main()
