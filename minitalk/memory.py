"""Byte-buffer helpers: fill, zero, allocate, copy, search and compare."""

from __future__ import annotations

from typing import Optional, Union

Buffer = Union[bytearray, memoryview]
ReadBuffer = Union[bytes, bytearray, memoryview]

SIZE_MAX = 2**64 - 1

__all__ = [
    "SIZE_MAX",
    "memset",
    "bzero",
    "calloc",
    "memcpy",
    "memmove",
    "memchr",
    "memcmp",
]


def _check_count(n: int, *buffers: ReadBuffer) -> None:
    if n < 0:
        raise ValueError(f"byte count must not be negative: {n}")
    for buf in buffers:
        if n > len(buf):
            raise ValueError(f"byte count {n} exceeds buffer length {len(buf)}")


def memset(buf: Buffer, value: int, n: int) -> Buffer:
    """Set the first n bytes of buf to value (truncated to a byte); return buf."""
    _check_count(n, buf)
    buf[:n] = bytes([value & 0xFF]) * n
    return buf


def bzero(buf: Buffer, n: int) -> None:
    """Set the first n bytes of buf to zero."""
    memset(buf, 0, n)


def calloc(nmemb: int, size: int) -> bytearray:
    """Return a zero-filled buffer of nmemb * size bytes.

    Raises OverflowError when the total would not fit in a 64-bit size.
    """
    if nmemb < 0 or size < 0:
        raise ValueError("element count and size must not be negative")
    total = nmemb * size
    if total > SIZE_MAX:
        raise OverflowError(f"{nmemb} * {size} bytes exceeds the maximum size")
    return bytearray(total)


def memcpy(dest: Buffer, src: ReadBuffer, n: int) -> Buffer:
    """Copy n bytes from src to the start of dest; return dest."""
    _check_count(n, dest, src)
    dest[:n] = bytes(src[:n])
    return dest


def memmove(dest: Buffer, src: ReadBuffer, n: int) -> Buffer:
    """Copy n bytes from src to dest, correct even when the two overlap."""
    _check_count(n, dest, src)
    # Snapshot the source first so overlapping views cannot corrupt it.
    dest[:n] = bytes(src[:n])
    return dest


def memchr(buf: ReadBuffer, value: int, n: int) -> Optional[int]:
    """Return the index of the first byte equal to value within n bytes, or None."""
    _check_count(n, buf)
    index = bytes(buf[:n]).find(value & 0xFF)
    return None if index < 0 else index


def memcmp(a: ReadBuffer, b: ReadBuffer, n: int) -> int:
    """Compare n bytes; return the difference of the first unequal pair, or 0."""
    _check_count(n, a, b)
    for x, y in zip(bytes(a[:n]), bytes(b[:n])):
        if x != y:
            return x - y
    return 0