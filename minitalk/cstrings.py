"""Operations on NUL-terminated text.

Each function treats its string arguments the way a C string would be
read: everything from the first NUL character onward is ignored.
Positions are returned as indices into the text, or None where nothing
was found.
"""

from __future__ import annotations

import operator
from typing import NamedTuple, Optional, Union

CharLike = Union[int, str]

__all__ = [
    "BoundedResult",
    "length",
    "bounded_copy",
    "bounded_concat",
    "find_char",
    "rfind_char",
    "compare_prefix",
    "find_bounded",
    "duplicate",
]


class BoundedResult(NamedTuple):
    """Outcome of a size-bounded copy or concatenation.

    ``text`` is what the destination holds afterwards; ``needed`` is the
    length the full result would have had, so ``needed >= size`` signals
    truncation.
    """

    text: str
    needed: int


def _terminated(text: str) -> str:
    return text.split("\0", 1)[0]


def _char_code(c: CharLike) -> int:
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        return ord(c)
    return operator.index(c)


def _check_size(size: int) -> None:
    if size < 0:
        raise ValueError(f"size must not be negative: {size}")


def length(text: str) -> int:
    """Number of characters before the first NUL."""
    return len(_terminated(text))


def bounded_copy(src: str, size: int) -> BoundedResult:
    """Copy src into a destination of ``size`` slots, keeping room for a NUL.

    With a size of zero nothing is written. The ``needed`` field is the
    length of src.
    """
    _check_size(size)
    source = _terminated(src)
    if size == 0:
        return BoundedResult("", len(source))
    return BoundedResult(source[: size - 1], len(source))


def bounded_concat(dst: str, src: str, size: int) -> BoundedResult:
    """Append src to dst within a buffer of ``size`` slots.

    When size is not larger than dst, dst is left as it is and
    ``needed`` is the length of src plus size.
    """
    _check_size(size)
    head = _terminated(dst)
    tail = _terminated(src)
    if size <= len(head):
        return BoundedResult(head, len(tail) + size)
    room = size - 1 - len(head)
    return BoundedResult(head + tail[:room], len(head) + len(tail))


def find_char(text: str, c: CharLike) -> Optional[int]:
    """Index of the first occurrence of c; searching for NUL finds the end."""
    code = _char_code(c)
    body = _terminated(text)
    if code == 0:
        return len(body)
    index = body.find(chr(code))
    return None if index < 0 else index


def rfind_char(text: str, c: CharLike) -> Optional[int]:
    """Index of the last occurrence of c; searching for NUL finds the end."""
    code = _char_code(c)
    body = _terminated(text)
    if code == 0:
        return len(body)
    index = body.rfind(chr(code))
    return None if index < 0 else index


def compare_prefix(a: str, b: str, n: int) -> int:
    """Compare at most n characters.

    Returns 0 when they agree, otherwise the code difference of the first
    differing pair; the end of a string counts as code 0.
    """
    if n < 0:
        raise ValueError(f"count must not be negative: {n}")
    first = _terminated(a)
    second = _terminated(b)
    for i in range(n):
        x = ord(first[i]) if i < len(first) else 0
        y = ord(second[i]) if i < len(second) else 0
        if x != y or x == 0:
            return x - y
    return 0


def find_bounded(haystack: str, needle: str, limit: int) -> Optional[int]:
    """Index of needle in the first ``limit`` characters of haystack.

    An empty needle is found at index 0.
    """
    if limit < 0:
        raise ValueError(f"limit must not be negative: {limit}")
    target = _terminated(needle)
    if not target:
        return 0
    body = _terminated(haystack)
    window = body[:limit]
    index = window.find(target)
    return None if index < 0 else index


def duplicate(text: str) -> str:
    """Return a fresh copy of the text up to its first NUL."""
    return "".join(_terminated(text))