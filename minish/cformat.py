"""printf-style formatting with the ``c s p d i u x X %`` conversions."""

from __future__ import annotations

import string
import sys
from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import Any, TextIO

from .textutils import signed_digits, unsigned_digits

_CONVERSIONS = frozenset("cspdiuxX%")
_SPEC_CHARS = _CONVERSIONS | frozenset(string.digits) | frozenset("*.- ")
_INT_RANGE = 1 << 32
_INT_HALF = 1 << 31
_POINTER_RANGE = 1 << 64
_NULL_TEXT = "(null)"


@dataclass
class FormatSpec:
    """A parsed conversion specification (the text after ``%``).

    ``length`` is the number of characters the specification took up;
    ``conversion`` is "" when no conversion character was found.
    """

    conversion: str = ""
    width: int = 0
    width_from_arg: bool = False
    precision: int = 0
    precision_from_arg: bool = False
    has_precision: bool = False
    left_align: bool = False
    zero_pad: bool = False
    space: bool = False
    length: int = 0


def _digit_end(text: str, start: int) -> int:
    end = start
    while end < len(text) and text[end] in string.digits:
        end += 1
    return end


def _scan(text: str, start: int) -> FormatSpec:
    spec = FormatSpec()
    pos = start
    while pos < len(text) and not spec.conversion and text[pos] in _SPEC_CHARS:
        ch = text[pos]
        width_unset = spec.width == 0 and not spec.width_from_arg
        precision_unset = spec.precision == 0 and not spec.precision_from_arg
        if ch == "0" and width_unset and not spec.left_align and precision_unset:
            spec.zero_pad = True
            pos += 1
        elif ch == "-":
            spec.left_align = True
            pos += 1
        elif ch == " ":
            spec.space = True
            pos += 1
        elif ch == ".":
            spec.has_precision = True
            pos += 1
        elif ch == "*" or ch in string.digits:
            if ch == "*":
                value, from_arg, end = 0, True, pos + 1
            else:
                end = _digit_end(text, pos)
                value, from_arg = int(text[pos:end]), False
            if spec.has_precision:
                spec.precision, spec.precision_from_arg = value, from_arg
            else:
                spec.width, spec.width_from_arg = value, from_arg
            pos = end
        else:
            spec.conversion = ch
            pos += 1
    spec.length = pos - start
    return spec


def parse_spec(text: str) -> FormatSpec:
    """Parse the flags, width, precision and conversion at the start of ``text``."""
    return _scan(text, 0)


def _take(values: Iterator[Any]) -> Any:
    try:
        return next(values)
    except StopIteration:
        raise TypeError("not enough arguments for format string") from None


def _as_int(value: Any) -> int:
    if not isinstance(value, int):
        raise TypeError(f"an integer is required, not {type(value).__name__}")
    return value


def _c_int(value: Any) -> int:
    return (_as_int(value) + _INT_HALF) % _INT_RANGE - _INT_HALF


def _c_uint(value: Any) -> int:
    return _as_int(value) % _INT_RANGE


def _pointer(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, int):
        return value % _POINTER_RANGE
    return id(value)


def _char(value: Any) -> str:
    if isinstance(value, str) and len(value) == 1:
        return value
    if isinstance(value, int):
        return chr(value % 256)
    raise TypeError("%c requires an integer or a single character")


def _resolve(spec: FormatSpec, values: Iterator[Any]) -> FormatSpec:
    """Fill in ``*`` width and precision from the argument list."""
    resolved = replace(spec)
    if resolved.width_from_arg:
        width = _c_int(_take(values))
        if width < 0:
            resolved.width = -width
            resolved.zero_pad = False
            resolved.left_align = True
        else:
            resolved.width = width
    if resolved.has_precision and resolved.precision_from_arg:
        precision = _c_int(_take(values))
        if precision < 0:
            resolved.precision = 0
            resolved.has_precision = False
        else:
            resolved.precision = precision
    return resolved


def _pad(body: str, spec: FormatSpec) -> str:
    if spec.left_align:
        return body.ljust(spec.width)
    return body.rjust(spec.width)


def _zero_fills_width(spec: FormatSpec) -> bool:
    return (
        spec.zero_pad
        and not spec.left_align
        and not spec.has_precision
        and bool(spec.width)
        and not spec.precision
    )


def _render_decimal(spec: FormatSpec, number: int) -> str:
    if spec.has_precision and not spec.precision and number == 0:
        return ""
    if _zero_fills_width(spec):
        body = signed_digits(number, spec.width, keep_sign_width=False)
        if number >= 0 and spec.space:
            body = " " + body[1:]
        return body
    body = signed_digits(number, spec.precision, keep_sign_width=True)
    if number >= 0 and spec.space:
        body = " " + body
    return body


def _render_unsigned(spec: FormatSpec, number: int, base: int) -> str:
    if spec.has_precision and not spec.precision and number == 0:
        return ""
    if _zero_fills_width(spec):
        return unsigned_digits(number, spec.width, base)
    return unsigned_digits(number, spec.precision, base)


def _render_pointer(spec: FormatSpec, address: int) -> str:
    if address == 0 and not spec.precision and spec.has_precision:
        digits = ""
    elif spec.zero_pad and not spec.precision and not spec.has_precision and spec.width:
        digits = unsigned_digits(address, spec.width, 16)
    else:
        digits = unsigned_digits(address, spec.precision, 16)
    return "0x" + digits


def _render_string(spec: FormatSpec, value: Any) -> str:
    text = _NULL_TEXT if value is None else str(value)
    if spec.has_precision and not spec.precision:
        return ""
    if spec.precision:
        return text[: spec.precision]
    return text


def _render_percent(spec: FormatSpec) -> str:
    if spec.width and spec.zero_pad:
        return "0" * (spec.width - 1) + "%"
    return "%"


def _render(spec: FormatSpec, values: Iterator[Any]) -> str:
    spec = _resolve(spec, values)
    conversion = spec.conversion
    if conversion in ("d", "i"):
        body = _render_decimal(spec, _c_int(_take(values)))
    elif conversion == "u":
        body = _render_unsigned(spec, _c_uint(_take(values)), 10)
    elif conversion in ("x", "X"):
        body = _render_unsigned(spec, _c_uint(_take(values)), 16)
        if conversion == "X":
            body = body.upper()
    elif conversion == "p":
        body = _render_pointer(spec, _pointer(_take(values)))
    elif conversion == "s":
        body = _render_string(spec, _take(values))
    elif conversion == "c":
        body = _char(_take(values))
    else:
        body = _render_percent(spec)
    return _pad(body, spec)


def cformat(template: str, *args: Any) -> str:
    """Format ``args`` into ``template`` and return the text.

    Unknown conversions print nothing and the text after them is kept;
    a lone ``%`` at the end is dropped; extra arguments are ignored.
    """
    values = iter(args)
    pieces: list[str] = []
    pos = 0
    while True:
        start = template.find("%", pos)
        if start < 0:
            pieces.append(template[pos:])
            break
        pieces.append(template[pos:start])
        spec = _scan(template, start + 1)
        if spec.conversion:
            pieces.append(_render(spec, values))
        pos = start + 1 + spec.length
    return "".join(pieces)


def cprintf(template: str, *args: Any, stream: TextIO | None = None) -> int:
    """Write the formatted text to ``stream`` (stdout by default); return its length."""
    text = cformat(template, *args)
    (sys.stdout if stream is None else stream).write(text)
    return len(text)