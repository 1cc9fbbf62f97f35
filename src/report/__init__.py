"""Running sniffs and writing their findings."""

from report.runner import (
    CheckResult,
    build_sniffs,
    check_file,
    check_tokens,
    run_checks,
)
from report.write import read_findings_report, write_findings_report

__all__ = [
    "CheckResult",
    "build_sniffs",
    "check_file",
    "check_tokens",
    "read_findings_report",
    "run_checks",
    "write_findings_report",
]
