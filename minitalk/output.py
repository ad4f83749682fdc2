"""Write characters, strings and integers to a text stream."""

from __future__ import annotations

import operator
import sys
from typing import Optional, TextIO, Union

CharLike = Union[int, str]

__all__ = ["put_char", "put_str", "put_endl", "put_nbr"]


def _target(stream: Optional[TextIO]) -> TextIO:
    return sys.stdout if stream is None else stream


def put_char(c: CharLike, stream: Optional[TextIO] = None) -> None:
    """Write one character; an integer code is truncated to a byte."""
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        char = c
    else:
        char = chr(operator.index(c) & 0xFF)
    _target(stream).write(char)


def put_str(text: Optional[str], stream: Optional[TextIO] = None) -> None:
    """Write text as it is; None writes nothing."""
    if text is None:
        return
    _target(stream).write(text)


def put_endl(text: Optional[str], stream: Optional[TextIO] = None) -> None:
    """Write text followed by a newline; None writes nothing."""
    if text is None:
        return
    out = _target(stream)
    out.write(text)
    out.write("\n")


def put_nbr(n: int, stream: Optional[TextIO] = None) -> None:
    """Write an integer in decimal, with a leading minus when negative."""
    _target(stream).write(str(operator.index(n)))