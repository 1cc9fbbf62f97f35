"""Template references in Blade directives and view helper calls.

Each directive family is one unit with a ``matches``/``extract`` pair.
Blade directive families work on the raw text of an inline HTML line; view
accessor families work on a token position. ``DirectiveExtractor`` walks a
token stream and asks every registered family in turn, so a new family only
needs to be added to the registry.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from parse.call_targets import CallForm, classify_call
from parse.grouping import find_next_effective
from parse.tokens import TokenKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from parse.tokens import Token

# Upper bound on tokens inspected past a call shape before giving up.
LOOKAHEAD_TOKENS = 10

# The literal must be the whole argument; 'a' . $b is not a name.
_QUOTED_NAME = r"""(?P<quote>['"])(?P<name>[^'"]+)(?P=quote)(?=\s*[,)\]])"""

_QUOTE_CHARACTERS = ("'", '"')


class DirectiveContractError(ValueError):
    """An extractor was called on input its family does not match."""


@dataclass(frozen=True)
class TemplateReference:
    identifier: str
    position: int
    family: str


@dataclass(frozen=True)
class DirectivePattern:
    """A Blade directive family recognised by a regular expression."""

    family: str
    pattern: re.Pattern[str]

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def extract(self, text: str) -> str:
        match = self.pattern.search(text)
        if match is None:
            msg = f"Invalid method call: {self.family} does not match {text!r}"
            raise DirectiveContractError(msg)
        return match.group("name")


def _directive(family: str, prefix: str) -> DirectivePattern:
    return DirectivePattern(family, re.compile(r"(?<!@)" + prefix + _QUOTED_NAME))


# @include, @component, @extends
INCLUDE_DIRECTIVE = _directive("include", r"@(?:include|component|extends)\(\s*")

# @includeIf($condition, 'view'), @includeWhen(...), @includeUnless(...)
CONDITIONAL_INCLUDE_DIRECTIVE = _directive(
    "conditional_include", r"@(?:includeIf|includeWhen|includeUnless)\([^,]+,\s*"
)

# @includeFirst(['view1', 'view2']), @componentFirst([...])
FIRST_INCLUDE_DIRECTIVE = _directive(
    "first_include", r"@(?:includeFirst|componentFirst)\(\s*\[\s*"
)

# @each('view.name', $items, 'item', 'empty.view')
EACH_DIRECTIVE = _directive("each", r"@each\(\s*")


TokenPredicate = Callable[["Token"], bool]


def _identifier(*names: str) -> TokenPredicate:
    lowered = {name.lower() for name in names}
    return lambda token: (
        token.kind is TokenKind.IDENTIFIER and token.text.lower() in lowered
    )


def _kind(kind: TokenKind) -> TokenPredicate:
    return lambda token: token.kind is kind


@dataclass(frozen=True)
class AccessorPattern:
    """A view helper call recognised by the shape of its leading tokens.

    ``shape`` matches successive significant tokens starting at the anchor
    and must end on the parenthesis that opens the template argument.
    """

    family: str
    shape: tuple[TokenPredicate, ...]
    bare_call: bool = False

    def _argument_opener(self, tokens: Sequence[Token], position: int) -> int | None:
        if not self.shape[0](tokens[position]):
            return None
        limit = min(position + LOOKAHEAD_TOKENS, len(tokens))
        current = position
        for predicate in self.shape[1:]:
            found = find_next_effective(tokens, current + 1, limit)
            if found is None or not predicate(tokens[found]):
                return None
            current = found
        return current

    def matches(self, tokens: Sequence[Token], position: int) -> bool:
        if self._argument_opener(tokens, position) is None:
            return False
        if self.bare_call:
            target = classify_call(tokens, position)
            return target is not None and target.form is CallForm.BARE
        return True

    def extract(self, tokens: Sequence[Token], position: int) -> str | None:
        """Return the literal template name, or None for a dynamic argument.

        Raises:
            DirectiveContractError: if the shape does not match, or no
                argument is found within the lookahead bound.
        """
        if not self.matches(tokens, position):
            msg = f"Invalid method call: {self.family} does not match at {position}"
            raise DirectiveContractError(msg)

        opener = self._argument_opener(tokens, position)
        assert opener is not None
        limit = min(opener + 1 + LOOKAHEAD_TOKENS, len(tokens))
        argument = find_next_effective(tokens, opener + 1, limit)
        if argument is None:
            msg = f"Unable to find the template name for {self.family} at {position}"
            raise DirectiveContractError(msg)

        token = tokens[argument]
        if token.kind is not TokenKind.STRING or not token.text.startswith(
            _QUOTE_CHARACTERS
        ):
            return None

        following = find_next_effective(tokens, argument + 1)
        if following is None or tokens[following].kind not in (
            TokenKind.COMMA,
            TokenKind.CLOSE_PARENTHESIS,
        ):
            return None
        return token.text[1:-1]


# view()->make('view.name')
VIEW_FACTORY_CALL = AccessorPattern(
    "view_factory",
    (
        _identifier("view"),
        _kind(TokenKind.OPEN_PARENTHESIS),
        _kind(TokenKind.CLOSE_PARENTHESIS),
        _kind(TokenKind.OBJECT_OPERATOR),
        _identifier("make"),
        _kind(TokenKind.OPEN_PARENTHESIS),
    ),
    bare_call=True,
)

# View::make('view.name'), ViewFacade::make('view.name')
VIEW_FACADE_CALL = AccessorPattern(
    "view_facade",
    (
        _identifier("View", "ViewFacade"),
        _kind(TokenKind.DOUBLE_COLON),
        _identifier("make"),
        _kind(TokenKind.OPEN_PARENTHESIS),
    ),
)

# view('view.name')
VIEW_FUNCTION_CALL = AccessorPattern(
    "view_function",
    (_identifier("view"), _kind(TokenKind.OPEN_PARENTHESIS)),
    bare_call=True,
)

DEFAULT_DIRECTIVES: tuple[DirectivePattern, ...] = (
    INCLUDE_DIRECTIVE,
    CONDITIONAL_INCLUDE_DIRECTIVE,
    FIRST_INCLUDE_DIRECTIVE,
    EACH_DIRECTIVE,
)

# Order matters: view()->make(...) must win over the plain view(...) shape.
DEFAULT_ACCESSORS: tuple[AccessorPattern, ...] = (
    VIEW_FACADE_CALL,
    VIEW_FACTORY_CALL,
    VIEW_FUNCTION_CALL,
)


class DirectiveExtractor:
    """Find template references across a whole token stream."""

    def __init__(
        self,
        directives: Sequence[DirectivePattern] = DEFAULT_DIRECTIVES,
        accessors: Sequence[AccessorPattern] = DEFAULT_ACCESSORS,
    ) -> None:
        self.directives = tuple(directives)
        self.accessors = tuple(accessors)

    def reference_at(
        self, tokens: Sequence[Token], position: int
    ) -> TemplateReference | None:
        """First family matching the token at ``position``, if any."""
        token = tokens[position]
        if token.kind is TokenKind.INLINE_HTML:
            for directive in self.directives:
                if directive.matches(token.text):
                    return TemplateReference(
                        directive.extract(token.text), position, directive.family
                    )
            return None

        if token.kind is TokenKind.IDENTIFIER:
            for accessor in self.accessors:
                if accessor.matches(tokens, position):
                    identifier = accessor.extract(tokens, position)
                    if identifier is None:
                        return None
                    return TemplateReference(identifier, position, accessor.family)
        return None

    def extract_references(self, tokens: Sequence[Token]) -> list[TemplateReference]:
        references: list[TemplateReference] = []
        for position in range(len(tokens)):
            reference = self.reference_at(tokens, position)
            if reference is not None:
                references.append(reference)
        return references


__all__ = [
    "CONDITIONAL_INCLUDE_DIRECTIVE",
    "DEFAULT_ACCESSORS",
    "DEFAULT_DIRECTIVES",
    "EACH_DIRECTIVE",
    "FIRST_INCLUDE_DIRECTIVE",
    "INCLUDE_DIRECTIVE",
    "LOOKAHEAD_TOKENS",
    "VIEW_FACADE_CALL",
    "VIEW_FACTORY_CALL",
    "VIEW_FUNCTION_CALL",
    "AccessorPattern",
    "DirectiveContractError",
    "DirectiveExtractor",
    "DirectivePattern",
    "TemplateReference",
]
