"""Run the configured sniffs over token streams, files and whole trees."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from contract.findings import CODE_INTERNAL_EXCEPTION, Finding, build_source
from parse.php_tokens import tokenize_file
from rules.config import load_config, resolve_base_dir
from scan.files import scan_sources
from sniffs.abort_message import RequireCustomAbortMessageSniff
from sniffs.arity import ArityPolicy
from sniffs.base import SourceFile
from sniffs.blade_templates import NonExistingBladeTemplateSniff
from sniffs.missing_argument import MissingOptionalArgumentSniff
from sniffs.template_paths import TemplatePathResolver

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from parse.tokens import Token, TokenKind
    from rules.config import SniffsConfig
    from sniffs.base import Sniff

logger = logging.getLogger(__name__)

INTERNAL_SNIFF_NAME = "Internal"


@dataclass
class CheckResult:
    findings: list[Finding] = field(default_factory=list)
    files_checked: int = 0

    @property
    def error_count(self) -> int:
        return sum(1 for finding in self.findings if finding.severity == "error")

    @property
    def warning_count(self) -> int:
        return sum(1 for finding in self.findings if finding.severity == "warning")

    @property
    def ok(self) -> bool:
        return self.error_count == 0


def build_sniffs(
    config: SniffsConfig,
    *,
    root: Path,
    base_dir: Path | None = None,
) -> list[Sniff]:
    """Instantiate the sniffs enabled by ``config``.

    Each call returns fresh instances, so per-file state never leaks between
    runs.
    """
    sniffs: list[Sniff] = []

    policy = ArityPolicy.from_tables(
        functions=config.missing_argument.functions,
        static_methods=config.missing_argument.static_methods,
    )
    if policy:
        sniffs.append(MissingOptionalArgumentSniff(policy))

    if config.abort_message.enabled:
        sniffs.append(RequireCustomAbortMessageSniff(config.abort_message.functions))

    blade = config.blade_templates
    if blade.enabled:
        resolver = TemplatePathResolver(
            base_dir=base_dir or resolve_base_dir(root, blade),
            template_paths=blade.template_paths,
            view_namespaces=blade.view_namespaces,
            extension=blade.template_extension,
        )
        sniffs.append(NonExistingBladeTemplateSniff(resolver))

    logger.debug("Enabled sniffs: %s", ", ".join(sniff.name for sniff in sniffs))
    return sniffs


def check_tokens(
    path: str, tokens: Sequence[Token], sniffs: Iterable[Sniff]
) -> list[Finding]:
    """Feed every token to the sniffs registered for its kind, in order."""
    listeners: dict[TokenKind, list[Sniff]] = defaultdict(list)
    for sniff in sniffs:
        for kind in sniff.register():
            listeners[kind].append(sniff)

    source_file = SourceFile(path, tokens)
    for token in tokens:
        for sniff in listeners.get(token.kind, ()):
            sniff.process(source_file, token.position)
    return source_file.findings


def _internal_finding(path: str, exc: Exception) -> Finding:
    return Finding(
        path=path,
        line=1,
        column=1,
        position=0,
        severity="error",
        source=build_source(INTERNAL_SNIFF_NAME, CODE_INTERNAL_EXCEPTION),
        code=CODE_INTERNAL_EXCEPTION,
        message=f"An error occurred while checking this file: {exc}",
    )


def check_file(
    file_path: Path, sniffs: Sequence[Sniff], *, root: Path
) -> list[Finding]:
    """Check one file; failures are reported against that file only."""
    try:
        relative_path = file_path.relative_to(root).as_posix()
    except ValueError:
        relative_path = file_path.as_posix()

    try:
        tokens = tokenize_file(file_path)
        return check_tokens(relative_path, tokens, sniffs)
    except (OSError, ValueError) as exc:
        logger.error("Failed to check %s: %s", relative_path, exc)
        return [_internal_finding(relative_path, exc)]


def run_checks(
    root: Path,
    *,
    config: SniffsConfig | None = None,
    base_dir: Path | None = None,
) -> CheckResult:
    """Check every PHP file under ``root`` with the configured sniffs."""
    if config is None:
        config = load_config(root)

    sniffs = build_sniffs(config, root=root, base_dir=base_dir)
    result = CheckResult()

    for scanned in scan_sources(
        root,
        skip_dirs=config.skip_dirs,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
        include_stubs=config.include_stubs,
    ):
        logger.debug("Checking %s (%s)", scanned.relative_path, scanned.kind.value)
        result.findings.extend(check_file(scanned.path, sniffs, root=root))
        result.files_checked += 1

    logger.info(
        "Checked %d files: %d errors, %d warnings",
        result.files_checked,
        result.error_count,
        result.warning_count,
    )
    return result


__all__ = [
    "CheckResult",
    "build_sniffs",
    "check_file",
    "check_tokens",
    "run_checks",
]
