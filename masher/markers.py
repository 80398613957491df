"""Marker pairs delimiting mash blocks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .fingerprint import FINGERPRINT_PLACEHOLDER, end_marker_pattern, materialize_end_marker
from .locator import locate
from .merger import is_mashed, merge
from .models import MarkerError, MashInfo

DEFAULT_BEGIN_MARKER = "<!-- masher:begin -->\n"
DEFAULT_END_MARKER = "\n<!-- masher:end (%fingerprint%) -->"


@dataclass(frozen=True)
class MarkerPair:
    """Begin marker and end marker template validated for use together."""

    begin: str = DEFAULT_BEGIN_MARKER
    end: str = DEFAULT_END_MARKER

    def __post_init__(self) -> None:
        if not self.begin:
            raise MarkerError("Begin marker must be a non-empty string")
        count = self.end.count(FINGERPRINT_PLACEHOLDER)
        if count != 1:
            raise MarkerError(
                f"End marker must contain {FINGERPRINT_PLACEHOLDER} exactly once (found {count})"
            )

    def wrap(self, payload: str) -> str:
        """Return ``payload`` wrapped into a complete mash block."""
        return f"{self.begin}{payload}{materialize_end_marker(self.end, payload)}"

    def locate(self, document: str, expected_payload: Optional[str] = None) -> MashInfo:
        return locate(document, self.begin, expected_payload, self.end)

    def merge(self, document: str, payload: str) -> str:
        return merge(document, self.begin, payload, self.end)

    def is_mashed(self, document: str, payload: str) -> bool:
        return is_mashed(document, self.begin, payload, self.end)


__all__ = [
    "DEFAULT_BEGIN_MARKER",
    "DEFAULT_END_MARKER",
    "MarkerError",
    "MarkerPair",
    "end_marker_pattern",
    "materialize_end_marker",
]
