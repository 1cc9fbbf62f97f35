"""Findings report serialization."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import orjson

from contract.findings import Finding

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


def _write_jsonl(path: Path, records: Sequence[Finding]) -> None:
    with path.open("wb") as f:
        for rec in records:
            f.write(orjson.dumps(rec.model_dump(), option=orjson.OPT_SORT_KEYS))
            f.write(b"\n")


def _load_jsonl(path: Path) -> list[dict[str, Any]]:
    """Load records from a JSONL file."""
    records: list[dict[str, Any]] = []
    with path.open(encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if line:
                record = json.loads(line)
                if isinstance(record, dict):
                    records.append(record)
    return records


def write_findings_report(path: Path, findings: Sequence[Finding]) -> None:
    """Write findings as JSONL, ordered by path then token position."""
    path.parent.mkdir(parents=True, exist_ok=True)
    ordered = sorted(findings, key=lambda finding: (finding.path, finding.position))
    _write_jsonl(path, ordered)


def read_findings_report(path: Path) -> list[Finding]:
    return [Finding.model_validate(record) for record in _load_jsonl(path)]


__all__ = ["read_findings_report", "write_findings_report"]
