"""Token model shared by the tokenizer and every sniff."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """Closed set of token kinds produced by the tokenizer."""

    IDENTIFIER = "identifier"
    VARIABLE = "variable"
    STRING = "string"
    NUMBER = "number"
    OPEN_PARENTHESIS = "open_parenthesis"
    CLOSE_PARENTHESIS = "close_parenthesis"
    OPEN_BRACKET = "open_bracket"
    CLOSE_BRACKET = "close_bracket"
    OPEN_BRACE = "open_brace"
    CLOSE_BRACE = "close_brace"
    COMMA = "comma"
    WHITESPACE = "whitespace"
    COMMENT = "comment"
    DOUBLE_COLON = "double_colon"
    OBJECT_OPERATOR = "object_operator"
    NULLSAFE_OBJECT_OPERATOR = "nullsafe_object_operator"
    NS_SEPARATOR = "ns_separator"
    KEYWORD = "keyword"
    OPERATOR = "operator"
    OPEN_TAG = "open_tag"
    CLOSE_TAG = "close_tag"
    INLINE_HTML = "inline_html"
    OTHER = "other"


OPENER_TO_CLOSER: dict[TokenKind, TokenKind] = {
    TokenKind.OPEN_PARENTHESIS: TokenKind.CLOSE_PARENTHESIS,
    TokenKind.OPEN_BRACKET: TokenKind.CLOSE_BRACKET,
    TokenKind.OPEN_BRACE: TokenKind.CLOSE_BRACE,
}

CLOSER_TO_OPENER: dict[TokenKind, TokenKind] = {
    closer: opener for opener, closer in OPENER_TO_CLOSER.items()
}

GROUPING_KINDS = frozenset(OPENER_TO_CLOSER) | frozenset(CLOSER_TO_OPENER)

# Tokens that carry no meaning for call-shape recognition.
EMPTY_KINDS = frozenset({TokenKind.WHITESPACE, TokenKind.COMMENT})

MEMBER_ACCESS_KINDS = frozenset(
    {TokenKind.OBJECT_OPERATOR, TokenKind.NULLSAFE_OBJECT_OPERATOR}
)


@dataclass(frozen=True)
class Token:
    """A single lexeme of a tokenized PHP or Blade file.

    ``position`` is the index of the token in its stream. ``partner`` is the
    position of the matching opener/closer and is only valid for grouping
    kinds; it stays ``None`` for an unbalanced delimiter.
    """

    kind: TokenKind
    text: str
    position: int
    line: int = 1
    column: int = 1
    partner: int | None = None

    def __post_init__(self) -> None:
        if self.position < 0:
            msg = f"Token position must be non-negative, got {self.position}"
            raise ValueError(msg)
        if self.partner is not None and self.kind not in GROUPING_KINDS:
            msg = f"Only grouping tokens carry a partner, got {self.kind.value}"
            raise ValueError(msg)

    @property
    def is_empty(self) -> bool:
        return self.kind in EMPTY_KINDS

    @property
    def is_opener(self) -> bool:
        return self.kind in OPENER_TO_CLOSER

    @property
    def is_closer(self) -> bool:
        return self.kind in CLOSER_TO_OPENER

    def is_keyword(self, *words: str) -> bool:
        """Return True for a keyword token matching one of ``words``."""
        return self.kind is TokenKind.KEYWORD and self.text.lower() in words


__all__ = [
    "CLOSER_TO_OPENER",
    "EMPTY_KINDS",
    "GROUPING_KINDS",
    "MEMBER_ACCESS_KINDS",
    "OPENER_TO_CLOSER",
    "Token",
    "TokenKind",
]
