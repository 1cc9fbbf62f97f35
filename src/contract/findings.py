"""Finding records reported by the sniffs.

This module defines the stable shape of the findings report.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, Field

# Findings schema version for findings.jsonl records.
FINDINGS_SCHEMA_VERSION = 1

FINDINGS_JSONL = "findings.jsonl"

Severity = Literal["error", "warning"]

# Stable machine-readable codes.
CODE_MISSING_OPTIONAL_ARGUMENT = "MissingOptionalArgument"
CODE_MISSING_REQUIRED_ABORT_PARAMETER = "MissingRequiredAbortParameter"
CODE_TEMPLATE_NOT_FOUND = "TemplateNotFound"
CODE_UNKNOWN_VIEW_NAMESPACE = "UnknownViewNamespace"
CODE_INTERNAL_EXCEPTION = "Exception"

_SOURCE_RE = re.compile(r"^[A-Za-z]+(\.[A-Za-z]+)*$")


def build_source(sniff_name: str, code: str) -> str:
    """Build the dotted ``Category.Sniff.Code`` identifier of a finding."""
    source = f"{sniff_name}.{code}"
    if not _SOURCE_RE.match(source):
        msg = f"Invalid finding source: {source!r}"
        raise ValueError(msg)
    return source


class Finding(BaseModel):
    """A single defect reported against a source file."""

    schema_version: int = Field(default=FINDINGS_SCHEMA_VERSION)
    path: str
    line: int
    column: int
    position: int = Field(description="Token position in the file's stream")
    severity: Severity
    source: str = Field(description="Dotted sniff name and code")
    code: str
    message: str

    def location(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


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
