"""Tree-sitter based tokenizer for PHP and Blade files.

The syntax tree is flattened into a linear token stream: leaves become
tokens, a few composite nodes (strings, variables, comments, inline HTML)
are kept whole, and the bytes between leaves become whitespace tokens so
that the stream covers the source without gaps.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from tree_sitter import Language, Node, Parser
from tree_sitter_php import language_php

from parse.tokens import CLOSER_TO_OPENER, OPENER_TO_CLOSER, Token, TokenKind

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_PARSER: Parser | None = None

# Composite nodes emitted as a single token.
_ATOMIC_NODE_KINDS: dict[str, TokenKind] = {
    "string": TokenKind.STRING,
    "encapsed_string": TokenKind.STRING,
    "heredoc": TokenKind.STRING,
    "nowdoc": TokenKind.STRING,
    "shell_command_expression": TokenKind.STRING,
    "variable_name": TokenKind.VARIABLE,
    "comment": TokenKind.COMMENT,
    "text": TokenKind.INLINE_HTML,
    "php_tag": TokenKind.OPEN_TAG,
    "integer": TokenKind.NUMBER,
    "float": TokenKind.NUMBER,
}

_PUNCTUATION_KINDS: dict[str, TokenKind] = {
    "(": TokenKind.OPEN_PARENTHESIS,
    ")": TokenKind.CLOSE_PARENTHESIS,
    "[": TokenKind.OPEN_BRACKET,
    "]": TokenKind.CLOSE_BRACKET,
    "{": TokenKind.OPEN_BRACE,
    "}": TokenKind.CLOSE_BRACE,
    ",": TokenKind.COMMA,
    "::": TokenKind.DOUBLE_COLON,
    "->": TokenKind.OBJECT_OPERATOR,
    "?->": TokenKind.NULLSAFE_OBJECT_OPERATOR,
    "\\": TokenKind.NS_SEPARATOR,
    "?>": TokenKind.CLOSE_TAG,
}

PHP_KEYWORDS = frozenset(
    {
        "abstract", "and", "array", "as", "break", "callable", "case",
        "catch", "class", "clone", "const", "continue", "declare",
        "default", "die", "do", "echo", "else", "elseif", "empty",
        "enddeclare", "endfor", "endforeach", "endif", "endswitch",
        "endwhile", "enum", "eval", "exit", "extends", "final", "finally",
        "fn", "for", "foreach", "function", "global", "goto", "if",
        "implements", "include", "include_once", "instanceof", "insteadof",
        "interface", "isset", "list", "match", "namespace", "new", "or",
        "parent", "print", "private", "protected", "public", "readonly",
        "require", "require_once", "return", "self", "static", "switch",
        "throw", "trait", "try", "unset", "use", "var", "while", "xor",
        "yield",
    }
)  # fmt: skip

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_\x80-\uffff][A-Za-z0-9_\x80-\uffff]*$")


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with the PHP grammar."""
    global _PARSER
    if _PARSER is None:
        lang = Language(language_php())
        _PARSER = Parser(lang)

    return _PARSER


def _leaf_kind(node: Node, text: str) -> TokenKind:
    if node.type == "name":
        return TokenKind.IDENTIFIER
    if text in _PUNCTUATION_KINDS:
        return _PUNCTUATION_KINDS[text]
    if text.lower() in PHP_KEYWORDS:
        return TokenKind.KEYWORD
    if _IDENTIFIER_RE.match(text):
        return TokenKind.IDENTIFIER
    if node.type == "ERROR":
        return TokenKind.OTHER
    return TokenKind.OPERATOR


def _collect_spans(
    node: Node,
    source_bytes: bytes,
    out_spans: list[tuple[int, int, TokenKind]],
) -> None:
    if node.start_byte == node.end_byte:
        # MISSING nodes inserted by error recovery have no source text.
        return

    # Anonymous nodes such as the "string" of a cast share names with these.
    atomic_kind = _ATOMIC_NODE_KINDS.get(node.type) if node.is_named else None
    if atomic_kind is not None:
        out_spans.append((node.start_byte, node.end_byte, atomic_kind))
        return

    if node.child_count == 0:
        text = source_bytes[node.start_byte : node.end_byte].decode(
            "utf8", errors="replace"
        )
        out_spans.append((node.start_byte, node.end_byte, _leaf_kind(node, text)))
        return

    for child in node.children:
        _collect_spans(child, source_bytes, out_spans)


def _fill_gaps(
    spans: list[tuple[int, int, TokenKind]], source_length: int
) -> list[tuple[int, int, TokenKind]]:
    """Cover the whole source: bytes between leaves become whitespace."""
    filled: list[tuple[int, int, TokenKind]] = []
    cursor = 0
    for start, end, kind in sorted(spans, key=lambda span: span[0]):
        if start < cursor:
            # Overlapping leaves only happen inside error recovery.
            continue
        if start > cursor:
            filled.append((cursor, start, TokenKind.WHITESPACE))
        filled.append((start, end, kind))
        cursor = end
    if cursor < source_length:
        filled.append((cursor, source_length, TokenKind.WHITESPACE))
    return filled


def _split_pieces(
    source_bytes: bytes, spans: list[tuple[int, int, TokenKind]]
) -> list[tuple[TokenKind, str]]:
    pieces: list[tuple[TokenKind, str]] = []
    for start, end, kind in spans:
        text = source_bytes[start:end].decode("utf8", errors="replace")
        if kind is TokenKind.INLINE_HTML:
            # One token per line, so each Blade directive is matched on its own.
            pieces.extend((kind, line) for line in text.splitlines(keepends=True))
        elif kind is TokenKind.WHITESPACE and text.strip():
            pieces.append((TokenKind.OTHER, text))
        else:
            pieces.append((kind, text))
    return pieces


def _pair_delimiters(kinds: list[TokenKind]) -> dict[int, int]:
    partners: dict[int, int] = {}
    stack: list[int] = []
    for position, kind in enumerate(kinds):
        if kind in OPENER_TO_CLOSER:
            stack.append(position)
        elif kind in CLOSER_TO_OPENER:
            if stack and kinds[stack[-1]] is CLOSER_TO_OPENER[kind]:
                opener = stack.pop()
                partners[opener] = position
                partners[position] = opener
    return partners


def tokenize_php(source: str | bytes) -> list[Token]:
    """Tokenize PHP (or Blade) source into a position-indexed token stream.

    Returns:
        Tokens in stream order; ``tokens[i].position == i``. Grouping tokens
        carry the position of their matching opener/closer when balanced.
    """
    source_bytes = source.encode("utf8") if isinstance(source, str) else source
    if not source_bytes:
        return []

    tree = _get_parser().parse(source_bytes)

    spans: list[tuple[int, int, TokenKind]] = []
    _collect_spans(tree.root_node, source_bytes, spans)
    pieces = _split_pieces(source_bytes, _fill_gaps(spans, len(source_bytes)))
    partners = _pair_delimiters([kind for kind, _ in pieces])

    tokens: list[Token] = []
    line = 1
    column = 1
    for position, (kind, text) in enumerate(pieces):
        tokens.append(
            Token(
                kind=kind,
                text=text,
                position=position,
                line=line,
                column=column,
                partner=partners.get(position),
            )
        )
        newlines = text.count("\n")
        if newlines:
            line += newlines
            column = len(text) - text.rfind("\n")
        else:
            column += len(text)

    return tokens


def tokenize_file(file_path: Path) -> list[Token]:
    """Read and tokenize a file; OSError propagates to the caller."""
    tokens = tokenize_php(file_path.read_bytes())
    logger.debug("Tokenized %s into %d tokens", file_path, len(tokens))
    return tokens


__all__ = ["PHP_KEYWORDS", "tokenize_file", "tokenize_php"]
