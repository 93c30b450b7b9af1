"""Quote handling for command lines."""

from __future__ import annotations

import enum


class QuoteState(enum.IntEnum):
    """Which kind of quote is open at a point in a line."""

    NONE = 0
    DOUBLE = 1
    SINGLE = 2


def quote_state(line: str, limit: int | None = None) -> QuoteState:
    """Return the quote left open after the first ``limit`` characters of ``line``.

    A quote character right after a backslash does not open or close anything.
    """
    if limit is not None and limit < 0:
        raise ValueError("limit must not be negative")
    text = line if limit is None else line[:limit]
    state = QuoteState.NONE
    previous = ""
    for ch in text:
        if previous != "\\":
            if state is QuoteState.NONE and ch == '"':
                state = QuoteState.DOUBLE
            elif state is QuoteState.NONE and ch == "'":
                state = QuoteState.SINGLE
            elif state is QuoteState.DOUBLE and ch == '"':
                state = QuoteState.NONE
            elif state is QuoteState.SINGLE and ch == "'":
                state = QuoteState.NONE
        previous = ch
    return state


def has_open_quote(line: str) -> bool:
    """Return whether ``line`` ends inside an unclosed quote."""
    return quote_state(line) is not QuoteState.NONE


def strip_single_quotes(text: str) -> str:
    """Remove single-quote pairs, keeping what they enclose unchanged.

    An opening quote with no partner is dropped and the rest kept.
    """
    pieces: list[str] = []
    rest = text
    while rest:
        before, found, after = rest.partition("'")
        pieces.append(before)
        if not found:
            break
        quoted, _, rest = after.partition("'")
        pieces.append(quoted)
    return "".join(pieces)