"""Scanning documents for previously mashed blocks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .fingerprint import end_marker_pattern, fingerprint
from .logging import get_logger
from .models import MarkerError, MashInfo, MashState

_LOGGER = get_logger("locator")


@dataclass(frozen=True)
class _Occurrence:
    index: int
    end_index: int
    fingerprint: Optional[str] = None


def _begin_occurrences(document: str, begin_marker: str) -> Iterator[_Occurrence]:
    index = document.find(begin_marker)
    while index != -1:
        end_index = index + len(begin_marker)
        yield _Occurrence(index, end_index)
        index = document.find(begin_marker, end_index)


def _end_occurrences(document: str, end_marker_template: str, start: int) -> Iterator[_Occurrence]:
    pattern = end_marker_pattern(end_marker_template)
    match = pattern.search(document, start)
    while match is not None:
        yield _Occurrence(match.start(), match.end(), match.group(1))
        match = pattern.search(document, match.end())


def _info(
    state: MashState,
    begin: Optional[_Occurrence] = None,
    end: Optional[_Occurrence] = None,
) -> MashInfo:
    return MashInfo(
        state=state,
        begin_tag_index=begin.index if begin else None,
        end_of_begin_tag_index=begin.end_index if begin else None,
        end_tag_index=end.index if end else None,
        end_of_end_tag_index=end.end_index if end else None,
    )


def locate(
    document: str,
    begin_marker: str,
    expected_payload: Optional[str],
    end_marker_template: str,
) -> MashInfo:
    """Find the first valid mash block in ``document`` and classify the document.

    Every begin marker is paired with every end marker following it until a
    pair is found whose payload matches the fingerprint in the end marker (and
    ``expected_payload`` when given). Without such a pair the first begin and
    end markers are reported along with the first failure seen.
    """
    if not begin_marker:
        raise MarkerError("Begin marker must be a non-empty string")

    first_begin: Optional[_Occurrence] = None
    first_end: Optional[_Occurrence] = None
    first_invalid = MashState.UNMASHED

    for begin in _begin_occurrences(document, begin_marker):
        if first_begin is None:
            first_begin = begin

        for end in _end_occurrences(document, end_marker_template, begin.end_index):
            if first_end is None:
                first_end = end

            candidate = document[begin.end_index:end.index]
            tampered = expected_payload is not None and expected_payload != candidate
            fingerprint_invalid = end.fingerprint != fingerprint(candidate)

            if first_invalid is MashState.UNMASHED:
                if tampered:
                    first_invalid = MashState.SOURCE_TEXT_TAMPERED
                elif fingerprint_invalid:
                    first_invalid = MashState.FINGERPRINT_INVALID

            if not tampered and not fingerprint_invalid:
                _LOGGER.debug("Mash block found at [%d, %d)", begin.index, end.end_index)
                return _info(MashState.MASHED, begin, end)

    if first_begin is None:
        # End markers are only searched after begin markers above, so look
        # for a stray one from the start of the document.
        stray_end = next(_end_occurrences(document, end_marker_template, 0), None)
        if stray_end is None:
            _LOGGER.debug("No markers found")
            return _info(MashState.UNMASHED)
        _LOGGER.debug("End marker at %d has no begin marker", stray_end.index)
        return _info(MashState.BEGIN_TAG_MISSING, end=stray_end)

    if first_end is None:
        _LOGGER.debug("Begin marker at %d has no end marker", first_begin.index)
        return _info(MashState.END_TAG_MISSING, first_begin)

    _LOGGER.debug(
        "No valid mash block; first failure %s at [%d, %d)",
        first_invalid.value,
        first_begin.index,
        first_end.end_index,
    )
    return _info(first_invalid, first_begin, first_end)


__all__ = ["locate"]
