import hashlib
import logging
from typing import Any

# Create the library logger
logger = logging.getLogger("scrollfeed")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())


def redact_value(value: Any) -> str:
    """
    Redacts user-supplied payloads (search text, e-mail addresses) for logging.
    Hashes the value to allow correlation between log lines without revealing PII.
    """
    try:
        return hashlib.sha256(str(value).encode("utf-8")).hexdigest()[:8]
    except Exception:
        return "<redaction_failed>"
