from __future__ import annotations

from pathlib import Path

from parse.php_tokens import tokenize_file, tokenize_php
from parse.tokens import TokenKind


def _significant(source: str) -> list[tuple[TokenKind, str]]:
    return [
        (token.kind, token.text)
        for token in tokenize_php(source)
        if not token.is_empty
    ]


def test_tokens_cover_source_and_positions_are_indices() -> None:
    source = "<?php\n// note\nroute('home', [$a, 2], \\absolute());\n"

    tokens = tokenize_php(source)

    assert "".join(token.text for token in tokens) == source
    assert [token.position for token in tokens] == list(range(len(tokens)))


def test_call_shape_tokens() -> None:
    significant = _significant("<?php\nroute('home', [$a, 2]);\n")

    assert significant[0] == (TokenKind.OPEN_TAG, "<?php")
    assert (TokenKind.IDENTIFIER, "route") in significant
    assert (TokenKind.STRING, "'home'") in significant
    assert (TokenKind.VARIABLE, "$a") in significant
    assert (TokenKind.NUMBER, "2") in significant
    assert [kind for kind, _ in significant].count(TokenKind.COMMA) == 2


def test_delimiters_are_paired() -> None:
    tokens = tokenize_php("<?php\nf(a(1), [2, (3)]);\n")

    for token in tokens:
        if token.is_opener:
            assert token.partner is not None
            assert tokens[token.partner].partner == token.position
            assert tokens[token.partner].is_closer


def test_static_and_instance_operators() -> None:
    kinds = [kind for kind, _ in _significant("<?php\nView::make($x?->y()->z());\n")]

    assert TokenKind.DOUBLE_COLON in kinds
    assert TokenKind.NULLSAFE_OBJECT_OPERATOR in kinds
    assert TokenKind.OBJECT_OPERATOR in kinds


def test_keywords_and_comments() -> None:
    tokens = tokenize_php("<?php\n/* doc */\nfunction route($name) {}\n")

    assert any(token.is_keyword("function") for token in tokens)
    assert any(token.kind is TokenKind.COMMENT for token in tokens)


def test_cast_is_not_a_string_literal() -> None:
    kinds = [kind for kind, _ in _significant("<?php\n$y = (string) $x;\n")]

    assert TokenKind.STRING not in kinds


def test_blade_text_is_split_per_line() -> None:
    source = "@extends('layouts.app')\n<div>\n@include('partials.nav')\n</div>\n"

    html = [
        token.text
        for token in tokenize_php(source)
        if token.kind is TokenKind.INLINE_HTML
    ]

    assert "".join(html) == source
    assert "@extends('layouts.app')\n" in html
    assert "@include('partials.nav')\n" in html


def test_line_and_column_tracking() -> None:
    tokens = tokenize_php("<?php\n$x = 1;\n  foo();\n")

    variable = next(token for token in tokens if token.text == "$x")
    call = next(token for token in tokens if token.text == "foo")

    assert (variable.line, variable.column) == (2, 1)
    assert (call.line, call.column) == (3, 3)


def test_empty_source() -> None:
    assert tokenize_php("") == []


def test_tokenize_file(tmp_path: Path) -> None:
    path = tmp_path / "routes.php"
    path.write_text("<?php\nroute('home');\n", encoding="utf-8")

    tokens = tokenize_file(path)

    assert tokens[0].kind is TokenKind.OPEN_TAG
    assert any(token.text == "route" for token in tokens)
