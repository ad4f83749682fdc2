"""Bit-by-bit signal protocol shared by the sender and the receiver.

A byte travels as eight signals, most significant bit first: SIGUSR1
carries a 0 bit and SIGUSR2 a 1 bit. The receiver answers each byte
with SIGUSR1 (acknowledged) or SIGUSR2 (timed out).
"""

from __future__ import annotations

import signal
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Tuple

SIGUSR1: int = int(getattr(signal, "SIGUSR1", 10))
SIGUSR2: int = int(getattr(signal, "SIGUSR2", 12))

BITS_PER_BYTE = 8

__all__ = [
    "SIGUSR1",
    "SIGUSR2",
    "BITS_PER_BYTE",
    "Bit",
    "Reply",
    "Timing",
    "ByteReceiver",
    "encode_byte",
    "decode_bits",
    "signal_for_bit",
    "bit_for_signal",
]


class Bit(IntEnum):
    ZERO = 0
    ONE = 1


class Reply(IntEnum):
    """Signals the receiver sends back after each byte."""

    ACK = SIGUSR1
    NACK = SIGUSR2


class Timing(IntEnum):
    """Protocol delays, in microseconds."""

    BIT_RECEIVE_DELAY = 100
    SIG_RECEIVE_TIMEOUT = 250
    BIT_SEND_INTERVAL = 200
    SERVER_RESPONSE_TIMEOUT = 250 * 50

    @property
    def seconds(self) -> float:
        return self.value / 1_000_000


def signal_for_bit(bit: int) -> int:
    """The signal number that carries the given bit."""
    if bit not in (0, 1):
        raise ValueError(f"bit must be 0 or 1, got {bit!r}")
    return SIGUSR2 if bit else SIGUSR1


def bit_for_signal(signum: int) -> Bit:
    """The bit a signal number carries."""
    if signum == SIGUSR1:
        return Bit.ZERO
    if signum == SIGUSR2:
        return Bit.ONE
    raise ValueError(f"signal {signum} carries no bit")


def encode_byte(byte: int) -> Tuple[Bit, ...]:
    """The eight bits of a byte, most significant first."""
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"byte out of range: {byte}")
    return tuple(Bit((byte >> shift) & 1) for shift in reversed(range(BITS_PER_BYTE)))


def decode_bits(bits: Iterable[int]) -> int:
    """Assemble eight bits, most significant first, into a byte."""
    values = list(bits)
    if len(values) != BITS_PER_BYTE:
        raise ValueError(f"expected {BITS_PER_BYTE} bits, got {len(values)}")
    byte = 0
    for bit in values:
        if bit not in (0, 1):
            raise ValueError(f"bit must be 0 or 1, got {bit!r}")
        byte = (byte << 1) | bit
    return byte


@dataclass
class ByteReceiver:
    """Accumulates incoming bit signals into bytes.

    ``bit_count`` runs from 0 up; a byte is complete when it reaches 8.
    The counter is only reset by :meth:`reset`, so the owner decides
    when a new byte may start.
    """

    client_pid: Optional[int] = None
    bit_count: int = 0
    current_byte: int = 0

    def push(self, signum: int, sender: int) -> Optional[int]:
        """Record one bit signal from sender; return the byte once 8 bits arrived."""
        bit = bit_for_signal(signum)
        if self.bit_count == 0:
            self.current_byte = 0
        self.client_pid = sender
        self.current_byte = (self.current_byte << 1) + bit
        self.bit_count += 1
        if self.bit_count == BITS_PER_BYTE:
            return self.current_byte & 0xFF
        return None

    @property
    def complete(self) -> bool:
        return self.bit_count == BITS_PER_BYTE

    @property
    def pending(self) -> bool:
        """True while a byte has started but not yet finished."""
        return 0 < self.bit_count < BITS_PER_BYTE

    def reset(self) -> None:
        """Forget any partial byte so the next signal starts a new one."""
        self.bit_count = 0
        self.current_byte = 0