"""Value types describing the outcome of a mash scan."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class MarkerError(ValueError):
    """Raised when a marker pair cannot delimit a mash block."""


class MashState(str, Enum):
    """Terminal classification of a document scan."""

    UNMASHED = "unmashed"
    BEGIN_TAG_MISSING = "begin-tag-missing"
    END_TAG_MISSING = "end-tag-missing"
    SOURCE_TEXT_TAMPERED = "source-text-tampered"
    FINGERPRINT_INVALID = "fingerprint-invalid"
    MASHED = "mashed"


@dataclass(frozen=True)
class MashInfo:
    """State of a scan plus the offsets of the relevant markers.

    Offsets that do not apply to the state are ``None``.
    """

    state: MashState
    begin_tag_index: Optional[int] = None
    end_of_begin_tag_index: Optional[int] = None
    end_tag_index: Optional[int] = None
    end_of_end_tag_index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["state"] = self.state.value
        return payload


@dataclass(frozen=True)
class MergeResult:
    """New document produced by a merge and the scan that placed it."""

    document: str
    info: MashInfo
    changed: bool


__all__ = ["MarkerError", "MashInfo", "MashState", "MergeResult"]
