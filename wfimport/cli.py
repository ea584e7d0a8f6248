"""CLI entrypoints for wfimport commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from .archive import from_zip, from_zip_dirs
from .config import OUTPUT_FORMATS, ConfigError, ImportConfig, load_config
from .directory import from_directory
from .errors import ImportErrors, ImportFailure
from .logging import configure_logging, get_logger
from .parser import from_file
from .reporting import ImportResult, render_summary
from .selectors import get_selector, selector_names

logger = get_logger("cli")


def _add_common_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    def _default(value: object) -> object:
        return argparse.SUPPRESS if suppress_default else value

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=_default(False),
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=_default(False),
        help="Only print warnings and errors to stderr.",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=_default(None),
        help="Output format (defaults to the config value, then json).",
    )
    parser.add_argument(
        "--config",
        default=_default(None),
        help="Path to .wfimport.yml or the directory holding it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wfimport",
        description="Parse posts from text files, directories and zip archives.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    file_parser = subparsers.add_parser("file", help="Parse a single text or markdown file.")
    _add_common_options(file_parser, suppress_default=True)
    file_parser.add_argument("path", help="Path to the file.")

    dir_parser = subparsers.add_parser(
        "dir",
        help="Parse every file directly inside a directory.",
    )
    _add_common_options(dir_parser, suppress_default=True)
    dir_parser.add_argument("path", help="Path to the directory.")
    dir_parser.add_argument(
        "--match",
        default=None,
        help="Regular expression file names must match (defaults to all files).",
    )

    zip_parser = subparsers.add_parser("zip", help="Parse posts from a zip archive.")
    _add_common_options(zip_parser, suppress_default=True)
    zip_parser.add_argument("path", help="Path to the zip archive.")
    zip_parser.add_argument(
        "--selector",
        choices=selector_names(),
        default=None,
        help="Which archive entries become posts (defaults to the config value, then any).",
    )
    zip_parser.add_argument(
        "--grouped",
        action="store_true",
        help="Group posts into collections by directory; top-level entries are drafts.",
    )
    zip_parser.add_argument(
        "--collect-errors",
        action="store_true",
        help="Keep going past failing entries and report them at the end.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for wfimport commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    config_path = Path(args.config) if args.config else Path.cwd()
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    configure_logging(
        verbose=bool(args.verbose) or config.logging.verbose,
        quiet=bool(args.quiet) or config.logging.quiet,
        log_file=config.logging.log_file,
    )
    logger.debug("Using configuration rooted at %s", config.root)
    output_format = args.format or config.output_format

    try:
        result, errors = _run(args, config)
    except ImportFailure as exc:
        parser.exit(1, f"wfimport {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    if output_format == "summary":
        print(render_summary(args.path, result, errors), end="")
    else:
        print(json.dumps(_to_payload(result), indent=2, ensure_ascii=False))

    if errors:
        parser.exit(2, f"{errors.format()}\n")


def _run(args: argparse.Namespace, config: ImportConfig) -> tuple[ImportResult, Optional[ImportErrors]]:
    if args.command == "file":
        return [from_file(args.path)], None
    if args.command == "dir":
        pattern = args.match if args.match is not None else config.directory.pattern
        return from_directory(args.path, pattern)
    if args.command == "zip":
        selector = get_selector(args.selector or config.archive.selector)
        errors = ImportErrors() if (args.collect_errors or config.archive.collect_errors) else None
        if args.grouped or config.archive.grouped:
            result: ImportResult = from_zip_dirs(args.path, selector, errors=errors)
        else:
            result = from_zip(args.path, selector, errors=errors)
        return result, (errors or None)
    raise ValueError(f"Unknown command {args.command!r}")  # pragma: no cover - argparse enforces choices


def _to_payload(result: ImportResult) -> Any:
    if result is None:
        return []
    if isinstance(result, dict):
        return {name: [post.to_dict() for post in posts] for name, posts in result.items()}
    return [post.to_dict() for post in result]


if __name__ == "__main__":
    main(sys.argv[1:])
