"""Host-side primitives shared by every sniff."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, Protocol

from contract.findings import Finding, Severity, build_source

if TYPE_CHECKING:
    from collections.abc import Sequence

    from parse.tokens import Token, TokenKind


class Sniff(Protocol):
    """A check fed one matching token at a time, in stream order."""

    name: str

    def register(self) -> frozenset[TokenKind]: ...

    def process(self, source_file: SourceFile, position: int) -> None: ...


class SourceFile:
    """A tokenized file plus the findings reported against it."""

    def __init__(self, path: str, tokens: Sequence[Token]) -> None:
        self.path = path
        self.tokens = tokens
        self._findings: list[Finding] = []

    def add_error(
        self, sniff_name: str, code: str, message: str, position: int
    ) -> None:
        self._add("error", sniff_name, code, message, position)

    def add_warning(
        self, sniff_name: str, code: str, message: str, position: int
    ) -> None:
        self._add("warning", sniff_name, code, message, position)

    def _add(
        self,
        severity: Severity,
        sniff_name: str,
        code: str,
        message: str,
        position: int,
    ) -> None:
        if self.tokens:
            token = self.tokens[min(position, len(self.tokens) - 1)]
            line, column = token.line, token.column
        else:
            line, column = 1, 1
        self._findings.append(
            Finding(
                path=self.path,
                line=line,
                column=column,
                position=position,
                severity=severity,
                source=build_source(sniff_name, code),
                code=code,
                message=message,
            )
        )

    @property
    def findings(self) -> list[Finding]:
        """Findings in ascending token position, report order kept for ties."""
        return sorted(self._findings, key=lambda finding: finding.position)


class FileSeenSet:
    """Files already analyzed by one sniff instance during this run."""

    def __init__(self) -> None:
        self._seen: set[str] = set()

    @staticmethod
    def identity(path: str) -> str:
        return hashlib.md5(path.encode("utf-8"), usedforsecurity=False).hexdigest()

    def first_sight(self, path: str) -> bool:
        """Record ``path``; True only the first time it is seen."""
        key = self.identity(path)
        if key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.identity(path) in self._seen

    def __len__(self) -> int:
        return len(self._seen)


__all__ = ["FileSeenSet", "Sniff", "SourceFile"]
