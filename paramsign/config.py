"""Global configuration for paramsign."""

import os

# ---------- Reserved parameter names ----------
TIMESTAMP_FIELD = "timestamp"
SIGNATURE_FIELD = "sign"
# Label placed before the secret when it is appended to the canonical string
KEY_FIELD = "key"

# ---------- Digest ----------
# "md5" matches the legacy wire format; "hmac-sha256" is the modern option.
DEFAULT_ALGORITHM = os.environ.get("PARAMSIGN_ALGORITHM", "md5")
UPPERCASE_SIGNATURE = os.environ.get("PARAMSIGN_UPPERCASE", "false").lower() == "true"

# ---------- Canonical serialization ----------
# Percent-encode names and values.  Off by default: changes the wire format.
ESCAPE_VALUES = os.environ.get("PARAMSIGN_ESCAPE_VALUES", "false").lower() == "true"

# ---------- Service ----------
SECRET_KEY = os.environ.get("PARAMSIGN_SECRET_KEY", "")
LOG_LEVEL = os.environ.get("PARAMSIGN_LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get("PARAMSIGN_LOG_FILE") or None

# ---------- Demo ----------
SERVICE_URL = os.environ.get("PARAMSIGN_SERVICE_URL", "http://localhost:8000")
