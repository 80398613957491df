"""Shared documents and markers for masher tests."""

from __future__ import annotations

from masher.fingerprint import FINGERPRINT_LENGTH, FINGERPRINT_PLACEHOLDER
from masher.markers import materialize_end_marker

DESTINATION_TEXT = "This is a placeholder so that we can test insertions/updates."
SOURCE_TEXT = "Text to be inserted/updated."
SOURCE_TEXT_2 = "Updated inserted text."
SOURCE_TEXT_3 = "A new different better text."
TAMPERED_SOURCE_TEXT = "Tampered text."
BEGIN_TAG = "\n\r<masher>\n\r\n\r"
END_TAG = "\n\r\n\r</masher (%fingerprint%)>\n\r"


def block(payload: str, begin: str = BEGIN_TAG, end: str = END_TAG) -> str:
    """Return a complete, valid mash block for ``payload``."""
    return begin + payload + materialize_end_marker(end, payload)


def zeroed_end_tag(end: str = END_TAG) -> str:
    """Return an end marker carrying a well-formed but wrong fingerprint."""
    return end.replace(FINGERPRINT_PLACEHOLDER, "0" * FINGERPRINT_LENGTH)
