"""Report calls that pass fewer arguments than the project requires."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract.findings import CODE_MISSING_OPTIONAL_ARGUMENT
from parse.call_targets import find_call_site
from parse.tokens import TokenKind
from sniffs.arity import ArityPolicy, audit_call

if TYPE_CHECKING:
    from sniffs.base import SourceFile


class MissingOptionalArgumentSniff:
    """Calls governed by the configured policy must pass enough arguments.

    Useful for functions whose optional arguments carry project conventions,
    e.g. ``route($name, $parameters, $absolute)`` always called with an
    explicit ``$absolute``.
    """

    name = "Functions.MissingOptionalArgument"
    CODE_MISSING_OPTIONAL_ARGUMENT = CODE_MISSING_OPTIONAL_ARGUMENT
    MESSAGE = (
        "Missing argument in {identity}() call: {actual} arguments used, "
        "at least {required} expected."
    )

    def __init__(self, policy: ArityPolicy | None = None) -> None:
        self.policy = policy if policy is not None else ArityPolicy()
        self._callee_names = self.policy.callee_names

    def register(self) -> frozenset[TokenKind]:
        return frozenset({TokenKind.IDENTIFIER})

    def process(self, source_file: SourceFile, position: int) -> None:
        tokens = source_file.tokens
        if tokens[position].text.lower() not in self._callee_names:
            return

        call_site = find_call_site(tokens, position)
        if call_site is None:
            return

        violation = audit_call(call_site, self.policy)
        if violation is None:
            return

        source_file.add_error(
            self.name,
            self.CODE_MISSING_OPTIONAL_ARGUMENT,
            self.MESSAGE.format(
                identity=violation.identity,
                actual=violation.actual,
                required=violation.required,
            ),
            position,
        )


__all__ = ["MissingOptionalArgumentSniff"]
