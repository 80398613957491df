"""Payload fingerprints embedded in end markers."""

from __future__ import annotations

import hashlib
import re
from functools import lru_cache
from typing import Pattern

FINGERPRINT_PLACEHOLDER = "%fingerprint%"
FINGERPRINT_LENGTH = 40


def fingerprint(text: str) -> str:
    """Return the SHA-1 hex digest of ``text`` (40 lowercase characters)."""
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


@lru_cache(maxsize=64)
def end_marker_pattern(end_marker_template: str) -> Pattern[str]:
    """Compile a regex matching materialized end markers of ``end_marker_template``.

    Every character of the template is matched literally except the placeholder,
    which becomes a capture group for the hex digest.
    """
    digest_group = "([0-9a-fA-F]{%d})" % FINGERPRINT_LENGTH
    escaped = re.escape(end_marker_template).replace(
        re.escape(FINGERPRINT_PLACEHOLDER), digest_group, 1
    )
    return re.compile(escaped)


def materialize_end_marker(end_marker_template: str, payload: str) -> str:
    """Return the end marker for ``payload`` with its fingerprint filled in."""
    return end_marker_template.replace(FINGERPRINT_PLACEHOLDER, fingerprint(payload), 1)


__all__ = [
    "FINGERPRINT_LENGTH",
    "FINGERPRINT_PLACEHOLDER",
    "end_marker_pattern",
    "fingerprint",
    "materialize_end_marker",
]
