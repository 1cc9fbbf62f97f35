"""Require an explicit message on ``abort()`` style helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.findings import CODE_MISSING_REQUIRED_ABORT_PARAMETER
from parse.arguments import argument_commas
from parse.call_targets import CallForm, find_call_site
from parse.tokens import TokenKind
from sniffs.arity import ArityPolicy, audit_call

if TYPE_CHECKING:
    from parse.call_targets import CallSite
    from sniffs.base import SourceFile

ABORT_MINIMUM_ARGUMENTS: dict[str, int] = {
    "abort": 2,
    "abort_if": 3,
    "abort_unless": 3,
}


class RequireCustomAbortMessageSniff:
    name = "Laravel.RequireCustomAbortMessage"
    CODE_MISSING_PARAMETER = CODE_MISSING_REQUIRED_ABORT_PARAMETER
    MESSAGE = (
        "Missing required parameter for “{identity}” function: {actual} "
        "parameters provided, at least {required} parameters expected"
    )

    def __init__(self, minimums: dict[str, int] | None = None) -> None:
        self.policy = ArityPolicy.from_tables(
            functions=minimums if minimums is not None else ABORT_MINIMUM_ARGUMENTS
        )
        self._callee_names = self.policy.callee_names

    def register(self) -> frozenset[TokenKind]:
        return frozenset({TokenKind.IDENTIFIER})

    def process(self, source_file: SourceFile, position: int) -> None:
        tokens = source_file.tokens
        if tokens[position].text.lower() not in self._callee_names:
            return

        call_site = find_call_site(tokens, position)
        if call_site is None or call_site.target.form is not CallForm.BARE:
            return

        if call_site.callee_name == "abort" and self._first_argument_is_response(
            source_file, call_site
        ):
            return

        violation = audit_call(call_site, self.policy)
        if violation is None:
            return

        source_file.add_error(
            self.name,
            self.CODE_MISSING_PARAMETER,
            self.MESSAGE.format(
                identity=violation.identity,
                actual=violation.actual,
                required=violation.required,
            ),
            position,
        )

    @staticmethod
    def _first_argument_is_response(
        source_file: SourceFile, call_site: CallSite
    ) -> bool:
        """``abort($response)`` and ``abort(response(...))`` take a Response."""
        tokens = source_file.tokens
        commas = argument_commas(tokens, call_site.opener, call_site.closer)
        end = commas[0] if commas else call_site.closer
        return any(
            tokens[position].kind
            in (TokenKind.VARIABLE, TokenKind.OPEN_PARENTHESIS)
            for position in range(call_site.opener + 1, end)
        )


__all__ = ["ABORT_MINIMUM_ARGUMENTS", "RequireCustomAbortMessageSniff"]
