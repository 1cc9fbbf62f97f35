"""Call-site recognition: bare function calls, static and instance methods.

Classification is conservative. A declaration mistaken for a call would be
a false positive, so anything ambiguous is reported as "not a call" or as an
unresolvable instance call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from parse.arguments import count_arguments
from parse.grouping import find_next_effective, find_previous_effective, matching_closer
from parse.tokens import MEMBER_ACCESS_KINDS, TokenKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from parse.tokens import Token

# Keywords that turn the following name into a declaration or a non-call.
DECLARATION_KEYWORDS = (
    "function",
    "fn",
    "public",
    "protected",
    "private",
    "static",
    "abstract",
    "final",
    "readonly",
    "var",
    "const",
    "new",
    "as",
    "insteadof",
    "implements",
    "extends",
    "instanceof",
    "use",
    "class",
    "interface",
    "trait",
    "enum",
)

STATIC_SCOPE_KEYWORDS = ("self", "parent", "static")


class CallForm(str, Enum):
    BARE = "bare"
    STATIC = "static"
    INSTANCE = "instance"


@dataclass(frozen=True)
class CallTarget:
    """How a call site is invoked.

    ``qualifier`` is the type name written before ``::`` for static calls and
    is None whenever the receiver cannot be determined statically.
    """

    form: CallForm
    qualifier: str | None = None

    @property
    def resolvable(self) -> bool:
        if self.form is CallForm.BARE:
            return True
        return self.form is CallForm.STATIC and self.qualifier is not None


@dataclass(frozen=True)
class CallSite:
    callee_name: str
    name_position: int
    opener: int
    closer: int
    target: CallTarget
    argument_count: int

    @property
    def identity(self) -> str | None:
        """``name`` for bare calls, ``Type::name`` for static calls."""
        if self.target.form is CallForm.BARE:
            return self.callee_name
        if self.target.form is CallForm.STATIC and self.target.qualifier:
            return f"{self.target.qualifier}::{self.callee_name}"
        return None


def _static_qualifier(tokens: Sequence[Token], operator: int) -> str | None:
    position = find_previous_effective(tokens, operator - 1)
    if position is None:
        return None
    token = tokens[position]
    if token.kind is TokenKind.IDENTIFIER or token.is_keyword(*STATIC_SCOPE_KEYWORDS):
        return token.text
    return None


def classify_call(tokens: Sequence[Token], name_position: int) -> CallTarget | None:
    """Classify the identifier at ``name_position``; None means not a call."""
    if tokens[name_position].kind is not TokenKind.IDENTIFIER:
        return None

    next_position = find_next_effective(tokens, name_position + 1)
    if (
        next_position is None
        or tokens[next_position].kind is not TokenKind.OPEN_PARENTHESIS
    ):
        return None

    previous = find_previous_effective(tokens, name_position - 1)
    if previous is None:
        return CallTarget(CallForm.BARE)

    previous_token = tokens[previous]
    if previous_token.kind is TokenKind.DOUBLE_COLON:
        qualifier = _static_qualifier(tokens, previous)
        if qualifier is None:
            return CallTarget(CallForm.INSTANCE)
        return CallTarget(CallForm.STATIC, qualifier)

    if previous_token.kind in MEMBER_ACCESS_KINDS:
        return CallTarget(CallForm.INSTANCE)

    if previous_token.kind is TokenKind.NS_SEPARATOR:
        # A leading "\" still points to a global function; "Foo\bar" does not.
        previous = find_previous_effective(tokens, previous - 1)
        if previous is None:
            return CallTarget(CallForm.BARE)
        previous_token = tokens[previous]
        if previous_token.kind in (TokenKind.IDENTIFIER, TokenKind.NS_SEPARATOR):
            return None

    if previous_token.kind is TokenKind.OPERATOR and previous_token.text == "&":
        # function &name() returns by reference.
        before = find_previous_effective(tokens, previous - 1)
        if before is not None and tokens[before].is_keyword("function", "fn"):
            return None

    if previous_token.is_keyword(*DECLARATION_KEYWORDS):
        return None

    return CallTarget(CallForm.BARE)


def find_call_site(tokens: Sequence[Token], name_position: int) -> CallSite | None:
    """Build the call site starting at ``name_position``, if there is one.

    Returns None for non-calls and for calls whose parentheses are unbalanced.
    """
    target = classify_call(tokens, name_position)
    if target is None:
        return None

    opener = find_next_effective(tokens, name_position + 1)
    if opener is None:
        return None
    closer = tokens[opener].partner
    if closer is None:
        closer = matching_closer(tokens, opener)
    if closer is None:
        return None

    return CallSite(
        callee_name=tokens[name_position].text.lstrip("\\").lower(),
        name_position=name_position,
        opener=opener,
        closer=closer,
        target=target,
        argument_count=count_arguments(tokens, opener, closer),
    )


__all__ = [
    "DECLARATION_KEYWORDS",
    "CallForm",
    "CallSite",
    "CallTarget",
    "classify_call",
    "find_call_site",
]
