"""Command-line interface for laravel-sniffs-core."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from report.runner import run_checks
from report.write import write_findings_report
from rules.config import ConfigError, load_config, resolve_base_dir, resolve_report_path
from sniffs.template_paths import (
    TemplateFound,
    TemplatePathResolver,
    UnknownNamespace,
    is_analyzable,
)

logger = logging.getLogger(__name__)


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: .)",
    )
    parser.add_argument(
        "--base-dir",
        default=None,
        help="Directory template paths are relative to (default: config or root)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sniffs")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Check PHP and Blade files")
    _add_common_paths(check_parser)
    check_parser.add_argument(
        "--report",
        default=None,
        help="Write findings as JSONL to this path (default: config report_file)",
    )

    resolve_parser = subparsers.add_parser(
        "resolve", help="Show where a template name resolves to"
    )
    resolve_parser.add_argument("template", help="Template name, e.g. 'ns::a.b'")
    _add_common_paths(resolve_parser)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_cli_dir(value: str | None) -> Path | None:
    if value is None:
        return None
    return Path(value).expanduser().resolve()


def _handle_check(root: Path, base_dir: str | None, report: str | None) -> int:
    config = load_config(root)
    result = run_checks(root, config=config, base_dir=_resolve_cli_dir(base_dir))

    for finding in result.findings:
        sys.stdout.write(
            f"{finding.location()}: {finding.severity} "
            f"[{finding.source}] {finding.message}\n"
        )

    report_path = _resolve_cli_dir(report)
    if report_path is None and config.report_file is not None:
        report_path = resolve_report_path(root, config.report_file)
    if report_path is not None:
        write_findings_report(report_path, result.findings)
        logger.debug("Wrote %d findings to %s", len(result.findings), report_path)

    sys.stderr.write(
        f"{result.files_checked} files checked: "
        f"{result.error_count} errors, {result.warning_count} warnings\n"
    )
    return 0 if result.ok else 1


def _handle_resolve(root: Path, template: str, base_dir: str | None) -> int:
    config = load_config(root).blade_templates
    resolver = TemplatePathResolver(
        base_dir=_resolve_cli_dir(base_dir) or resolve_base_dir(root, config),
        template_paths=config.template_paths,
        view_namespaces=config.view_namespaces,
        extension=config.template_extension,
    )

    if not is_analyzable(template):
        sys.stderr.write(f"skipped: '{template}' looks dynamically built\n")
        return 2

    outcome = resolver.resolve(template)
    if isinstance(outcome, UnknownNamespace):
        sys.stderr.write(f"unknown namespace: {outcome.namespace}\n")
        return 1

    for candidate in outcome.candidates:
        sys.stdout.write(f"candidate: {candidate}\n")
    if isinstance(outcome, TemplateFound):
        sys.stdout.write(f"found: {outcome.path}\n")
        return 0
    sys.stderr.write(f"not found: {template}\n")
    return 1


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    root = Path(args.root).expanduser().resolve()

    try:
        if args.command == "check":
            return _handle_check(root, args.base_dir, args.report)

        if args.command == "resolve":
            return _handle_resolve(root, args.template, args.base_dir)
    except ConfigError as exc:
        sys.stderr.write(f"config error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
