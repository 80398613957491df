"""File-level merge/check/locate flows built on the in-memory core."""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from pathlib import Path

from .config import MasherConfig
from .logging import get_logger
from .markers import MarkerPair
from .merger import merge_with_info
from .models import MashInfo, MashState


@dataclass
class MergeOutcome:
    """Result of merging a payload into a file."""

    path: Path
    state: MashState
    diff: str
    changed: bool
    dry_run: bool


class Orchestrator:
    """Reads documents from disk, runs the core on them and writes results back."""

    def __init__(self, config: MasherConfig | None = None) -> None:
        self.config = config
        self.logger = get_logger("orchestrator")

    @property
    def encoding(self) -> str:
        return self.config.encoding if self.config is not None else "utf-8"

    def run_merge(
        self,
        path: str | Path,
        payload: str,
        markers: MarkerPair,
        *,
        dry_run: bool = False,
        create: bool = False,
    ) -> MergeOutcome:
        """Mash ``payload`` into the file at ``path``."""
        target = Path(path).expanduser()
        self.logger.info("Merging payload into %s", target)
        if target.exists():
            original = self._read(target)
        elif create:
            self.logger.info("%s does not exist; starting from an empty document", target)
            original = ""
        else:
            raise FileNotFoundError(f"{target} not found. Pass --create to start a new file.")

        result = merge_with_info(original, markers.begin, payload, markers.end)
        self.logger.debug("Previous mash state: %s", result.info.state.value)
        diff_text = self._render_diff(original, result.document, target.name)

        if not result.changed:
            self.logger.info("%s already up to date; skipping write", target)
            return MergeOutcome(
                path=target,
                state=result.info.state,
                diff="",
                changed=False,
                dry_run=dry_run,
            )

        if dry_run:
            self.logger.info("Dry-run completed; %s not written", target)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(result.document, encoding=self.encoding, newline="")
            self.logger.info("%s updated", target)

        return MergeOutcome(
            path=target,
            state=result.info.state,
            diff=diff_text,
            changed=True,
            dry_run=dry_run,
        )

    def run_check(self, path: str | Path, payload: str, markers: MarkerPair) -> bool:
        """Return True if the file holds an intact block with exactly ``payload``."""
        document = self._read(path)
        mashed = markers.is_mashed(document, payload)
        self.logger.debug("%s mashed: %s", path, mashed)
        return mashed

    def run_locate(self, path: str | Path, markers: MarkerPair) -> MashInfo:
        """Classify the file's current mash block without an expected payload."""
        return markers.locate(self._read(path))

    def _read(self, path: str | Path) -> str:
        target = Path(path).expanduser()
        if not target.exists():
            raise FileNotFoundError(f"{target} not found.")
        # Line endings stay untranslated.
        with target.open(encoding=self.encoding, newline="") as handle:
            return handle.read()

    @staticmethod
    def _render_diff(original: str, updated: str, name: str) -> str:
        diff = difflib.unified_diff(
            original.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=f"{name} (original)",
            tofile=f"{name} (updated)",
        )
        return "".join(diff)


__all__ = ["MergeOutcome", "Orchestrator"]
