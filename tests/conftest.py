from __future__ import annotations

import logging
from pathlib import Path

import pytest

from masher.markers import MarkerPair
from tests._fixtures.texts import BEGIN_TAG, END_TAG


@pytest.fixture
def markers() -> MarkerPair:
    """Marker pair with multi-line tags, as used throughout the merge tests."""
    return MarkerPair(begin=BEGIN_TAG, end=END_TAG)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory without a .masher.yml."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _reset_masher_logger():
    yield
    # configure_logging() detaches the hierarchy from the root logger.
    logger = logging.getLogger("masher")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
