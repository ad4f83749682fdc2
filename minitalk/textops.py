"""Integer parsing and formatting, splitting, trimming and mapping of text.

String arguments are read up to their first NUL character, as the
rest of the package does.
"""

from __future__ import annotations

import operator
from typing import Callable, List, MutableSequence, Optional

from .cstrings import duplicate as _terminated

LONG_MAX = 9223372036854775807
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_WHITESPACE = frozenset("\t\n\v\f\r ")

__all__ = [
    "parse_int",
    "format_int",
    "count_words",
    "split",
    "trim",
    "substring",
    "join",
    "map_indexed",
    "iterate_indexed",
]


def _wrap_int32(value: int) -> int:
    """Reduce a value to a signed 32-bit integer, wrapping on overflow."""
    value &= 0xFFFFFFFF
    return value - 2**32 if value > INT_MAX else value


def _check_sep(sep: str) -> str:
    if len(sep) != 1:
        raise ValueError(f"separator must be a single character, got {sep!r}")
    return sep


def parse_int(text: str) -> int:
    """Parse a decimal integer the way the classic atoi does.

    Leading whitespace is skipped, one optional sign is read, then digits
    until the first non-digit. A magnitude beyond the 64-bit range gives
    -1 for positive input and 0 for negative input; otherwise the result
    is wrapped to a signed 32-bit integer.
    """
    body = _terminated(text)
    stripped = body.lstrip("".join(_WHITESPACE))
    sign = 1
    if stripped[:1] in ("-", "+"):
        if stripped[0] == "-":
            sign = -1
        stripped = stripped[1:]
    result = 0
    for ch in stripped:
        if not "0" <= ch <= "9":
            break
        digit = ord(ch) - ord("0")
        if result > (LONG_MAX - digit) // 10:
            return -1 if sign == 1 else 0
        result = result * 10 + digit
    return _wrap_int32(result * sign)


def format_int(n: int) -> str:
    """Decimal text of a signed 32-bit integer."""
    value = operator.index(n)
    if not INT_MIN <= value <= INT_MAX:
        raise OverflowError(f"{value} does not fit in a signed 32-bit integer")
    return str(value)


def count_words(text: str, sep: str) -> int:
    """Number of non-empty runs of characters between separators."""
    return len(split(text, sep))


def split(text: str, sep: str) -> List[str]:
    """Split text on sep, dropping the empty pieces."""
    _check_sep(sep)
    return [word for word in _terminated(text).split(sep) if word]


def trim(text: str, charset: str) -> str:
    """Remove characters in charset from both ends of text."""
    chars = _terminated(charset)
    body = _terminated(text)
    return body.strip(chars) if chars else body


def substring(text: str, start: int, length: int) -> str:
    """At most ``length`` characters of text beginning at ``start``.

    A start past the end of the text gives an empty string.
    """
    if start < 0 or length < 0:
        raise ValueError("start and length must not be negative")
    body = _terminated(text)
    if start > len(body):
        return ""
    return body[start : start + length]


def join(a: str, b: str) -> str:
    """Concatenate two strings."""
    return _terminated(a) + _terminated(b)


def map_indexed(text: str, func: Callable[[int, str], str]) -> str:
    """Build a new string from func(index, char) for every character."""
    return "".join(func(i, ch) for i, ch in enumerate(_terminated(text)))


def iterate_indexed(
    chars: MutableSequence[str], func: Callable[[int, str], Optional[str]]
) -> None:
    """Call func(index, char) on each character, up to a NUL, in place.

    When func returns a character it replaces the one at that index;
    returning None leaves it unchanged.
    """
    for i, ch in enumerate(chars):
        if ch == "\0":
            break
        replacement = func(i, ch)
        if replacement is not None:
            chars[i] = replacement