"""Content fingerprinting.

Fingerprints are computed over the content bytes alone. Title and submission
time are deliberately left out so that resubmitting identical content yields
the same fingerprint, which is what verification relies on.
"""

import hashlib
import re
from typing import Union

from arc_hives.errors import ValidationError

_FINGERPRINT_RE = re.compile(r"^[0-9a-f]{64}$")


def fingerprint(content: Union[bytes, str]) -> str:
    """
    Compute the SHA-256 fingerprint of article content.

    Args:
        content: Raw bytes, or text which is encoded as UTF-8

    Returns:
        Lowercase hex digest (64 characters)
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def normalize_fingerprint(value: str) -> str:
    """Strip and lowercase a client-supplied fingerprint, rejecting malformed ones."""
    normalized = (value or "").strip().lower()
    if not _FINGERPRINT_RE.match(normalized):
        raise ValidationError("fingerprint must be a 64-character hex SHA-256 digest")
    return normalized
