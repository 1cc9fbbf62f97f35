"""Stable findings contract surface for laravel-sniffs-core.

Treat these exports as the authoritative boundary between the sniffs and
anything consuming their reports.
"""

from contract.findings import (
    CODE_INTERNAL_EXCEPTION,
    CODE_MISSING_OPTIONAL_ARGUMENT,
    CODE_MISSING_REQUIRED_ABORT_PARAMETER,
    CODE_TEMPLATE_NOT_FOUND,
    CODE_UNKNOWN_VIEW_NAMESPACE,
    FINDINGS_JSONL,
    FINDINGS_SCHEMA_VERSION,
    Finding,
    Severity,
    build_source,
)

__all__ = [
    "CODE_INTERNAL_EXCEPTION",
    "CODE_MISSING_OPTIONAL_ARGUMENT",
    "CODE_MISSING_REQUIRED_ABORT_PARAMETER",
    "CODE_TEMPLATE_NOT_FOUND",
    "CODE_UNKNOWN_VIEW_NAMESPACE",
    "FINDINGS_JSONL",
    "FINDINGS_SCHEMA_VERSION",
    "Finding",
    "Severity",
    "build_source",
]
