"""CLI entrypoints for masher commands."""

from __future__ import annotations

import argparse
import json
import re
import sys
from pathlib import Path
from typing import Callable, Optional

from .config import CONFIG_FILENAME, ConfigError, load_config
from .logging import configure_logging
from .markers import MarkerError, MarkerPair
from .orchestrator import Orchestrator

_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\"}
_ESCAPE_RE = re.compile(r"\\([nrt\\])")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_marker_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        help="Path to the document holding the mash block.",
    )
    parser.add_argument(
        "--config",
        default=".",
        help=f"Path to {CONFIG_FILENAME} or its directory (defaults to current directory).",
    )
    parser.add_argument(
        "--block",
        help="Name of a marker pair defined under 'blocks' in the configuration.",
    )
    parser.add_argument(
        "--begin",
        help="Begin marker; overrides the configuration. Accepts \\n, \\r and \\t escapes.",
    )
    parser.add_argument(
        "--end",
        help="End marker template containing %%fingerprint%%; overrides the configuration.",
    )


def _add_payload_options(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--payload",
        help="Payload text to mash (defaults to reading standard input).",
    )
    source.add_argument(
        "--payload-file",
        type=Path,
        help="Read the payload from this file instead of standard input.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="masher",
        description="Keep generated text up to date inside hand-edited documents.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write timestamped log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    merge_parser = subparsers.add_parser(
        "merge",
        help="Insert or replace the mash block in a document.",
    )
    _add_verbose_option(merge_parser, suppress_default=True)
    _add_marker_options(merge_parser)
    _add_payload_options(merge_parser)
    merge_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview document changes without writing them.",
    )
    merge_parser.add_argument(
        "--create",
        action="store_true",
        help="Create the document when it does not exist.",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Exit with status 0 when the document holds the payload intact.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    _add_marker_options(check_parser)
    _add_payload_options(check_parser)

    locate_parser = subparsers.add_parser(
        "locate",
        help="Print the state and offsets of the document's mash block as JSON.",
    )
    _add_verbose_option(locate_parser, suppress_default=True)
    _add_marker_options(locate_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for masher commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    try:
        config = load_config(Path(args.config))
        markers = _resolve_markers(args, config.markers)
    except (ConfigError, MarkerError) as exc:
        parser.exit(1, f"{exc}\n")

    orchestrator = Orchestrator(config)

    try:
        if args.command == "merge":
            outcome = orchestrator.run_merge(
                args.path,
                _read_payload(args),
                markers,
                dry_run=bool(args.dry_run),
                create=bool(args.create),
            )
            rel_path = _relativize(outcome.path)
            if not outcome.changed:
                print(f"{rel_path} already up to date")
            elif outcome.dry_run:
                print(f"{rel_path} changes (dry-run):")
                print(outcome.diff or "(no diff)")
            else:
                print(f"{rel_path} updated")
        elif args.command == "check":
            if not orchestrator.run_check(args.path, _read_payload(args), markers):
                parser.exit(1, f"{args.path}: payload is not mashed\n")
            print(f"{args.path}: payload is mashed")
        elif args.command == "locate":
            info = orchestrator.run_locate(args.path, markers)
            print(json.dumps(info.to_dict(), indent=2))
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (FileNotFoundError, UnicodeDecodeError) as exc:
        parser.exit(1, f"{exc}\n")


def _resolve_markers(
    args: argparse.Namespace, lookup: Callable[[Optional[str]], MarkerPair]
) -> MarkerPair:
    if args.begin is None and args.end is None:
        return lookup(args.block)
    if args.begin is None or args.end is None:
        raise MarkerError("--begin and --end must be given together")
    return MarkerPair(begin=_unescape(args.begin), end=_unescape(args.end))


def _unescape(value: str) -> str:
    return _ESCAPE_RE.sub(lambda match: _ESCAPES[match.group(1)], value)


def _read_payload(args: argparse.Namespace) -> str:
    if args.payload is not None:
        return args.payload
    if args.payload_file is not None:
        with args.payload_file.open(encoding="utf-8", newline="") as handle:
            return handle.read()
    return sys.stdin.read()


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
