"""Delimiter matching and effective-token navigation over a token stream."""

from __future__ import annotations

from typing import TYPE_CHECKING

from parse.tokens import OPENER_TO_CLOSER

if TYPE_CHECKING:
    from collections.abc import Sequence

    from parse.tokens import Token


def matching_closer(tokens: Sequence[Token], opener: int) -> int | None:
    """Return the position of the closer paired with ``tokens[opener]``.

    Nested openers of the same family increase the depth, closers of that
    family decrease it; delimiters of other families are skipped. Returns
    None when the stream ends before the group is closed.

    Raises:
        ValueError: if ``tokens[opener]`` is not a grouping opener.
    """
    opener_kind = tokens[opener].kind
    closer_kind = OPENER_TO_CLOSER.get(opener_kind)
    if closer_kind is None:
        msg = f"Token at {opener} is not a grouping opener: {opener_kind.value}"
        raise ValueError(msg)

    depth = 0
    for position in range(opener, len(tokens)):
        kind = tokens[position].kind
        if kind is opener_kind:
            depth += 1
        elif kind is closer_kind:
            depth -= 1
            if depth == 0:
                return position
    return None


def find_next_effective(
    tokens: Sequence[Token], start: int, end: int | None = None
) -> int | None:
    """First position in ``[start, end)`` that is not whitespace or a comment."""
    stop = len(tokens) if end is None else min(end, len(tokens))
    for position in range(max(start, 0), stop):
        if not tokens[position].is_empty:
            return position
    return None


def find_previous_effective(
    tokens: Sequence[Token], start: int, end: int = 0
) -> int | None:
    """Last position in ``[end, start]`` that is not whitespace or a comment."""
    for position in range(min(start, len(tokens) - 1), max(end, 0) - 1, -1):
        if not tokens[position].is_empty:
            return position
    return None


__all__ = ["find_next_effective", "find_previous_effective", "matching_closer"]
