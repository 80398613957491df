"""Configuration loading for masher (.masher.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .markers import MarkerError, MarkerPair

CONFIG_FILENAME = ".masher.yml"
DEFAULT_BLOCK = "default"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class MasherConfig:
    """Represents the settings defined in .masher.yml."""

    encoding: str = "utf-8"
    blocks: Dict[str, MarkerPair] = field(
        default_factory=lambda: {DEFAULT_BLOCK: MarkerPair()}
    )
    default_block: str = DEFAULT_BLOCK

    def markers(self, name: Optional[str] = None) -> MarkerPair:
        """Return the marker pair registered under ``name`` (or the default block)."""
        key = name or self.default_block
        try:
            return self.blocks[key]
        except KeyError:
            known = ", ".join(sorted(self.blocks)) or "none"
            raise ConfigError(f"Unknown block '{key}' (configured: {known})") from None


def load_config(config_path: Path) -> MasherConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return MasherConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    encoding = _as_str(data.get("encoding")) or "utf-8"
    try:
        "".encode(encoding)
    except LookupError as exc:
        raise ConfigError(f"Unknown encoding '{encoding}'") from exc

    blocks: Dict[str, MarkerPair] = {}
    for name, block_data in _as_dict(data.get("blocks")).items():
        block = _as_dict(block_data)
        begin = _as_str(block.get("begin"))
        end = _as_str(block.get("end"))
        if begin is None or end is None:
            raise ConfigError(f"Block '{name}' must define both 'begin' and 'end'")
        try:
            blocks[str(name)] = MarkerPair(begin=begin, end=end)
        except MarkerError as exc:
            raise ConfigError(f"Block '{name}': {exc}") from exc

    if not blocks:
        blocks = {DEFAULT_BLOCK: MarkerPair()}

    default_block = _as_str(data.get("default_block"))
    if default_block is None:
        default_block = DEFAULT_BLOCK if DEFAULT_BLOCK in blocks else next(iter(blocks))
    elif default_block not in blocks:
        raise ConfigError(f"default_block '{default_block}' is not defined under blocks")

    return MasherConfig(
        encoding=encoding,
        blocks=blocks,
        default_block=default_block,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


__all__ = ["CONFIG_FILENAME", "ConfigError", "MasherConfig", "load_config"]
