"""Command-line interface for dtsdiff."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from config.loader import ConfigError, load_config, resolve_output_path
from contract.validation import validate_report
from diff.session import DiffSession
from models.diff import DiffOptions
from parse.treesitter_declarations import extract_declarations_from_text
from parse.treesitter_document import DocumentParseError
from report.utils import _write_jsonl_lines
from report.write import generate_report, summarize, write_report
from sources.local import SourceLoadError, load_source
from sources.remote import SourceFetchError
from verify.verify import verify_report


def _add_root(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        default=".",
        help="Directory holding dtsdiff.toml (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dtsdiff")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    diff_parser = subparsers.add_parser(
        "diff", help="Diff declaration files, oldest first"
    )
    _add_root(diff_parser)
    diff_parser.add_argument(
        "files",
        nargs="*",
        help=".d.ts files in version order (default: sources from config)",
    )
    diff_parser.add_argument(
        "--tag",
        action="append",
        default=None,
        help="Version label for the file at the same position (repeatable)",
    )
    diff_parser.add_argument(
        "--baseline",
        action="store_true",
        default=None,
        help="Seed timelines with every declaration of the first version",
    )
    diff_parser.add_argument(
        "--out",
        default=None,
        help="Report path (default: config output)",
    )

    symbols_parser = subparsers.add_parser(
        "symbols", help="Print the declarations extracted from one file"
    )
    symbols_parser.add_argument("file", help=".d.ts file to extract")

    validate_parser = subparsers.add_parser("validate", help="Validate a report")
    validate_parser.add_argument("report", help="Report file to validate")

    verify_parser = subparsers.add_parser(
        "verify", help="Verify a report is reproducible from the config"
    )
    _add_root(verify_parser)
    verify_parser.add_argument(
        "--report",
        default=None,
        help="Report path (default: config output)",
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _write_summary(summary: dict[str, object]) -> None:
    sys.stdout.write(
        f"{summary['item_count']} changes across {summary['version_count']} "
        f"versions, {summary['timeline_count']} timelines -> {summary['report']}\n"
    )


def _handle_diff(
    root: Path,
    files: list[str],
    tags: list[str] | None,
    baseline: bool | None,
    out: str | None,
) -> int:
    try:
        config = load_config(root)
        if baseline is not None:
            config = config.model_copy(
                update={"treat_first_version_as_baseline": baseline}
            )
        out_path = (
            Path(out).expanduser().resolve()
            if out is not None
            else resolve_output_path(root, config.output)
        )

        if not files:
            summary = generate_report(root=root, out_path=out_path, config=config)
            _write_summary(summary)
            return 0

        if tags and len(tags) != len(files):
            msg = f"got {len(tags)} --tag values for {len(files)} files"
            raise ConfigError(msg)
        labels = tags or [None] * len(files)
        sources = [load_source(f, tag) for f, tag in zip(files, labels)]

        options = DiffOptions(
            treat_first_version_as_baseline=config.treat_first_version_as_baseline
        )
        result = DiffSession(options).run(sources)
        write_report(out_path, result)
    except (
        ConfigError,
        DocumentParseError,
        SourceFetchError,
        SourceLoadError,
        OSError,
    ) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    summary = summarize(result)
    summary["report"] = str(out_path)
    _write_summary(summary)
    return 0


def _handle_symbols(file: str) -> int:
    try:
        source = load_source(file)
        declarations = extract_declarations_from_text(
            source.document_name, source.content
        )
    except (DocumentParseError, SourceLoadError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    records = [d.model_dump(mode="json", exclude={"children"}) for d in declarations]
    sys.stdout.write(_write_jsonl_lines(records).decode("utf-8"))
    return 0


def _handle_validate(report: str) -> int:
    report_path = Path(report).expanduser().resolve()
    result = validate_report(report_path)
    for warning in result.warnings:
        sys.stderr.write(f"warning: {warning.location()}: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(root: Path, report: str | None) -> int:
    try:
        if report is None:
            report_path = resolve_output_path(root, load_config(root).output)
        else:
            report_path = Path(report).expanduser().resolve()
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    try:
        result = verify_report(root=root, report_path=report_path)
    except (FileNotFoundError, IsADirectoryError) as exc:
        sys.stderr.write(f"report: {report_path}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except (
        ConfigError,
        DocumentParseError,
        SourceFetchError,
        SourceLoadError,
    ) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for name in result.mismatches:
            sys.stderr.write(f"mismatch: {name}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "diff":
        root = Path(args.root).expanduser().resolve()
        return _handle_diff(root, args.files, args.tag, args.baseline, args.out)

    if args.command == "symbols":
        return _handle_symbols(args.file)

    if args.command == "validate":
        return _handle_validate(args.report)

    if args.command == "verify":
        root = Path(args.root).expanduser().resolve()
        return _handle_verify(root, args.report)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
