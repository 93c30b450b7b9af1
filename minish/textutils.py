"""String helpers: field splitting, trimming, C-style comparison and digit rendering."""

from __future__ import annotations

import string
from itertools import takewhile

_BLANKS = " \t\n\r\v\f"
_DIGITS = "0123456789abcdef"


def split_fields(text: str, sep: str) -> list[str]:
    """Split ``text`` on the single character ``sep``, dropping empty fields."""
    if len(sep) != 1:
        raise ValueError("separator must be exactly one character")
    return [field for field in text.split(sep) if field]


def trim(text: str, chars: str) -> str:
    """Remove every character found in ``chars`` from both ends of ``text``."""
    return text.strip(chars)


def parse_leading_int(text: str, limit: int | None = None) -> int:
    """Parse an optionally signed integer at the start of ``text``.

    Leading blanks are skipped. When ``limit`` is given, only digits at
    positions up to and including ``limit`` of ``text`` are read. Text with
    no digits gives 0.
    """
    body = text.lstrip(_BLANKS)
    position = len(text) - len(body)
    sign = 1
    if body[:1] in ("-", "+"):
        if body[0] == "-":
            sign = -1
        body = body[1:]
        position += 1
    if limit is not None:
        body = body[: max(limit - position + 1, 0)]
    digits = "".join(takewhile(lambda ch: ch in string.digits, body))
    return sign * int(digits) if digits else 0


def compare(left: str, right: str) -> int:
    """Compare two strings; return the code difference at the first mismatch, or 0."""
    for a, b in zip(left, right):
        if a != b:
            return ord(a) - ord(b)
    if len(left) == len(right):
        return 0
    if len(left) > len(right):
        return ord(left[len(right)])
    return -ord(right[len(left)])


def compare_prefix(left: str, right: str, n: int) -> int:
    """Compare at most the first ``n`` characters of two strings."""
    if n < 0:
        raise ValueError("n must not be negative")
    return compare(left[:n], right[:n])


def signed_digits(n: int, min_digits: int = 0, keep_sign_width: bool = True) -> str:
    """Render ``n`` in decimal, zero-padded to ``min_digits``.

    With ``keep_sign_width`` the minimum counts digits only and a minus sign
    is added on top; without it the sign takes one place of the minimum.
    """
    digits = str(abs(n))
    sign = "-" if n < 0 else ""
    width = min_digits
    if sign and not keep_sign_width:
        width -= 1
    return sign + digits.rjust(max(width, len(digits)), "0")


def unsigned_digits(n: int, min_digits: int = 0, base: int = 10) -> str:
    """Render a non-negative ``n`` in ``base`` (2 to 16, lower case), zero-padded."""
    if not 2 <= base <= 16:
        raise ValueError("base must be between 2 and 16")
    if n < 0:
        raise ValueError("n must not be negative")
    out: list[str] = []
    while True:
        n, remainder = divmod(n, base)
        out.append(_DIGITS[remainder])
        if n == 0:
            break
    digits = "".join(reversed(out))
    return digits.rjust(min_digits, "0")