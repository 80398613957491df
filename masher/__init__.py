"""Idempotent, self-healing mashing of generated text into unstructured documents."""

from .fingerprint import FINGERPRINT_LENGTH, FINGERPRINT_PLACEHOLDER, fingerprint
from .locator import locate
from .markers import MarkerError, MarkerPair
from .merger import is_mashed, merge, merge_with_info
from .models import MashInfo, MashState, MergeResult

__all__ = [
    "FINGERPRINT_LENGTH",
    "FINGERPRINT_PLACEHOLDER",
    "MarkerError",
    "MarkerPair",
    "MashInfo",
    "MashState",
    "MergeResult",
    "fingerprint",
    "is_mashed",
    "locate",
    "merge",
    "merge_with_info",
]
