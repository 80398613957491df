"""Tests for masher.orchestrator."""

from __future__ import annotations

from pathlib import Path

import pytest

from masher.config import MasherConfig
from masher.markers import MarkerPair
from masher.models import MashState
from masher.orchestrator import MergeOutcome, Orchestrator
from tests._fixtures.texts import DESTINATION_TEXT, SOURCE_TEXT, SOURCE_TEXT_2


def test_run_merge_appends_block_and_writes(tmp_path: Path, markers: MarkerPair) -> None:
    target = tmp_path / "NOTES.md"
    target.write_text(DESTINATION_TEXT, encoding="utf-8")

    outcome = Orchestrator().run_merge(target, SOURCE_TEXT, markers)

    assert isinstance(outcome, MergeOutcome)
    assert outcome.changed is True
    assert outcome.dry_run is False
    assert outcome.state is MashState.UNMASHED
    assert target.read_text(encoding="utf-8") == DESTINATION_TEXT + markers.wrap(SOURCE_TEXT)
    assert "NOTES.md (updated)" in outcome.diff


def test_run_merge_skips_write_when_up_to_date(tmp_path: Path, markers: MarkerPair) -> None:
    target = tmp_path / "NOTES.md"
    target.write_text(DESTINATION_TEXT + markers.wrap(SOURCE_TEXT), encoding="utf-8")
    before = target.stat().st_mtime_ns

    outcome = Orchestrator().run_merge(target, SOURCE_TEXT, markers)

    assert outcome.changed is False
    assert outcome.state is MashState.MASHED
    assert outcome.diff == ""
    assert target.stat().st_mtime_ns == before


def test_run_merge_dry_run_leaves_file_untouched(tmp_path: Path, markers: MarkerPair) -> None:
    target = tmp_path / "NOTES.md"
    original = DESTINATION_TEXT + markers.wrap(SOURCE_TEXT)
    target.write_text(original, encoding="utf-8")

    outcome = Orchestrator().run_merge(target, SOURCE_TEXT_2, markers, dry_run=True)

    assert outcome.changed is True
    assert outcome.dry_run is True
    assert SOURCE_TEXT_2 in outcome.diff
    assert target.read_text(encoding="utf-8") == original


def test_run_merge_requires_existing_file(tmp_path: Path, markers: MarkerPair) -> None:
    with pytest.raises(FileNotFoundError):
        Orchestrator().run_merge(tmp_path / "missing.md", SOURCE_TEXT, markers)


def test_run_merge_creates_file_when_requested(tmp_path: Path, markers: MarkerPair) -> None:
    target = tmp_path / "docs" / "GENERATED.md"

    outcome = Orchestrator().run_merge(target, SOURCE_TEXT, markers, create=True)

    assert outcome.changed is True
    assert target.read_text(encoding="utf-8") == markers.wrap(SOURCE_TEXT)


def test_run_merge_uses_configured_encoding(tmp_path: Path) -> None:
    markers = MarkerPair(begin="<b>", end="<e %fingerprint%>")
    config = MasherConfig(encoding="latin-1")
    target = tmp_path / "legacy.txt"
    target.write_bytes("Caf\xe9 notes.".encode("latin-1"))

    Orchestrator(config).run_merge(target, "r\xe9sum\xe9", markers)

    assert target.read_bytes().decode("latin-1") == "Caf\xe9 notes." + markers.wrap("r\xe9sum\xe9")


def test_run_check_and_locate(tmp_path: Path, markers: MarkerPair) -> None:
    target = tmp_path / "NOTES.md"
    target.write_text("intro" + markers.wrap(SOURCE_TEXT), encoding="utf-8")
    orchestrator = Orchestrator()

    assert orchestrator.run_check(target, SOURCE_TEXT, markers) is True
    assert orchestrator.run_check(target, SOURCE_TEXT_2, markers) is False

    info = orchestrator.run_locate(target, markers)
    assert info.state is MashState.MASHED
    assert info.begin_tag_index == len("intro")


def test_run_check_requires_existing_file(tmp_path: Path, markers: MarkerPair) -> None:
    with pytest.raises(FileNotFoundError):
        Orchestrator().run_check(tmp_path / "missing.md", SOURCE_TEXT, markers)


def test_run_merge_keeps_crlf_line_endings(tmp_path: Path) -> None:
    markers = MarkerPair(begin="<b>\n", end="\n<e %fingerprint%>")
    target = tmp_path / "windows.txt"
    original = b"line one\r\nline two\r\n"
    target.write_bytes(original)

    Orchestrator().run_merge(target, "generated", markers)

    assert target.read_bytes() == original + markers.wrap("generated").encode("utf-8")


def test_run_merge_is_stable_with_carriage_returns_in_markers(tmp_path: Path) -> None:
    markers = MarkerPair(begin="<b>\r\n", end="\r\n<e %fingerprint%>")
    target = tmp_path / "notes.txt"
    target.write_bytes(b"intro\r\n")
    orchestrator = Orchestrator()

    first = orchestrator.run_merge(target, "payload\r\nline", markers)
    written = target.read_bytes()
    second = orchestrator.run_merge(target, "payload\r\nline", markers)

    assert first.changed is True
    assert second.changed is False
    assert second.state is MashState.MASHED
    assert target.read_bytes() == written
    assert written.count(b"<b>") == 1
    assert orchestrator.run_check(target, "payload\r\nline", markers) is True
