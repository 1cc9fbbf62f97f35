from __future__ import annotations

import pytest
from token_helpers import lex, position_of

from parse.arguments import argument_commas, count_arguments
from parse.grouping import find_next_effective, find_previous_effective, matching_closer
from parse.tokens import Token, TokenKind


def _count(source: str) -> int:
    tokens = lex(source)
    opener = position_of(tokens, "(")
    closer = matching_closer(tokens, opener)
    assert closer is not None
    return count_arguments(tokens, opener, closer)


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("f()", 0),
        ("f( )", 0),
        ("f(/* nothing */)", 0),
        ("f(a)", 1),
        ("f(a,)", 1),
        ("f(a, )", 1),
        ("f(a,b)", 2),
        ("f(a, [b, c], d)", 3),
        ("f(a, (b, c))", 2),
        ("f(a, g(b, c), d)", 3),
        ("f(function ($x, $y) { return [$x, $y]; }, $z)", 2),
        ("f(,)", 1),
        ("f(a,,)", 2),
    ],
)
def test_count_arguments(source: str, expected: int) -> None:
    assert _count(source) == expected


def test_argument_commas_skips_nested_groups() -> None:
    tokens = lex("f(a, [b, c], d)")
    opener = position_of(tokens, "(")
    closer = matching_closer(tokens, opener)
    assert closer is not None

    commas = argument_commas(tokens, opener, closer)

    assert [tokens[position].text for position in commas] == [",", ","]
    assert commas == [position_of(tokens, ",", 0), position_of(tokens, ",", 2)]


def test_matching_closer_nested_same_family() -> None:
    tokens = lex("(a, (b), c)")

    assert matching_closer(tokens, 0) == len(tokens) - 1
    assert matching_closer(tokens, position_of(tokens, "(", 1)) == position_of(
        tokens, ")", 0
    )


def test_matching_closer_ignores_other_families() -> None:
    tokens = lex("([)")

    assert matching_closer(tokens, 0) == 2


def test_matching_closer_unbalanced_returns_none() -> None:
    tokens = lex("f(a, (b)")

    assert matching_closer(tokens, position_of(tokens, "(")) is None


def test_matching_closer_rejects_non_opener() -> None:
    tokens = lex("f(a)")

    with pytest.raises(ValueError, match="not a grouping opener"):
        matching_closer(tokens, 0)


def test_unbalanced_inner_group_stops_comma_scan() -> None:
    tokens = [
        Token(TokenKind.OPEN_PARENTHESIS, "(", 0, partner=5),
        Token(TokenKind.IDENTIFIER, "a", 1),
        Token(TokenKind.COMMA, ",", 2),
        Token(TokenKind.OPEN_BRACKET, "[", 3),
        Token(TokenKind.COMMA, ",", 4),
        Token(TokenKind.CLOSE_PARENTHESIS, ")", 5, partner=0),
    ]

    assert argument_commas(tokens, 0, 5) == [2]


def test_effective_navigation_skips_whitespace_and_comments() -> None:
    tokens = lex("a /* c */ b")

    assert find_next_effective(tokens, 1) == len(tokens) - 1
    assert find_previous_effective(tokens, len(tokens) - 2) == 0
    assert find_next_effective(tokens, 1, len(tokens) - 1) is None
    assert find_previous_effective(tokens, 3, 1) is None


def test_token_rejects_partner_on_non_grouping_kind() -> None:
    with pytest.raises(ValueError, match="grouping"):
        Token(TokenKind.COMMA, ",", 0, partner=1)


def test_token_rejects_negative_position() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        Token(TokenKind.COMMA, ",", -1)
