"""Argument counting for call sites."""

from __future__ import annotations

from typing import TYPE_CHECKING

from parse.grouping import find_next_effective, matching_closer
from parse.tokens import TokenKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from parse.tokens import Token


def _group_end(tokens: Sequence[Token], opener: int) -> int | None:
    partner = tokens[opener].partner
    if partner is not None:
        return partner
    return matching_closer(tokens, opener)


def argument_commas(tokens: Sequence[Token], opener: int, closer: int) -> list[int]:
    """Positions of the commas separating arguments between opener and closer.

    Nested groups are skipped as a whole, so commas inside nested calls,
    arrays and closures are never returned.
    """
    commas: list[int] = []
    position = opener + 1
    while position < closer:
        token = tokens[position]
        if token.is_opener:
            group_end = _group_end(tokens, position)
            if group_end is None or group_end >= closer:
                break
            position = group_end + 1
            continue
        if token.kind is TokenKind.COMMA:
            commas.append(position)
        position += 1
    return commas


def count_arguments(tokens: Sequence[Token], opener: int, closer: int) -> int:
    """Count the arguments of the call whose parentheses are opener/closer.

    A single trailing comma does not introduce an extra argument. Interior
    empty segments are not special-cased: ``f(,)`` counts one argument and
    ``f(a,,)`` counts two.
    """
    if find_next_effective(tokens, opener + 1, closer) is None:
        return 0

    commas = argument_commas(tokens, opener, closer)
    count = len(commas) + 1
    if commas and find_next_effective(tokens, commas[-1] + 1, closer) is None:
        count -= 1
    return count


__all__ = ["argument_commas", "count_arguments"]
