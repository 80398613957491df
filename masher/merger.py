"""Merging generated payloads into unstructured documents."""

from __future__ import annotations

from .locator import locate
from .logging import get_logger
from .fingerprint import materialize_end_marker
from .models import MashState, MergeResult

_LOGGER = get_logger("merger")


def splice(
    document: str,
    offset: int,
    begin_marker: str,
    payload: str,
    end_marker_template: str,
) -> str:
    """Insert a complete mash block for ``payload`` at ``offset``."""
    return (
        document[:offset]
        + begin_marker
        + payload
        + materialize_end_marker(end_marker_template, payload)
        + document[offset:]
    )


def merge_with_info(
    document: str,
    begin_marker: str,
    payload: str,
    end_marker_template: str,
) -> MergeResult:
    """Merge ``payload`` into ``document`` and report the scan that placed it.

    An intact block is replaced in place. Damaged blocks are left untouched
    and the new block is inserted next to them: after a stray end marker, or
    before a begin marker whose block is incomplete or fails its fingerprint.
    Documents without markers get the block appended.
    """
    # The previous payload is unknown, so there is nothing to compare against.
    info = locate(document, begin_marker, None, end_marker_template)
    state = info.state

    if state is MashState.UNMASHED:
        offset = len(document)
        base = document
    elif state is MashState.BEGIN_TAG_MISSING:
        # Appending would separate the partial mash from the new one.
        offset = _require(info.end_of_end_tag_index)
        base = document
    elif state in (MashState.END_TAG_MISSING, MashState.FINGERPRINT_INVALID):
        offset = _require(info.begin_tag_index)
        base = document
    else:
        assert state is not MashState.SOURCE_TEXT_TAMPERED, (
            "Tampering cannot be detected without an expected payload"
        )
        assert state is MashState.MASHED
        offset = _require(info.begin_tag_index)
        base = document[:offset] + document[_require(info.end_of_end_tag_index):]

    if state not in (MashState.UNMASHED, MashState.MASHED):
        _LOGGER.warning("Damaged mash block (%s); inserting a new block at %d", state.value, offset)

    merged = splice(base, offset, begin_marker, payload, end_marker_template)
    return MergeResult(document=merged, info=info, changed=merged != document)


def merge(
    document: str,
    begin_marker: str,
    payload: str,
    end_marker_template: str,
) -> str:
    """Return ``document`` with ``payload`` mashed between the markers."""
    return merge_with_info(document, begin_marker, payload, end_marker_template).document


def is_mashed(
    document: str,
    begin_marker: str,
    payload: str,
    end_marker_template: str,
) -> bool:
    """Return True if ``document`` holds an intact block containing exactly ``payload``."""
    info = locate(document, begin_marker, payload, end_marker_template)
    return info.state is MashState.MASHED


def _require(offset: int | None) -> int:
    assert offset is not None
    return offset


__all__ = ["is_mashed", "merge", "merge_with_info", "splice"]
