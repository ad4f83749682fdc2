"""Send a message to a server process one bit at a time over user signals.

Each byte is sent as eight signals, most significant bit first. After a
byte the client waits for the server's reply: an acknowledgement moves
on to the next byte, a negative reply makes the client send the same
byte again. Silence for longer than the response timeout is an error.
"""

from __future__ import annotations

import os
import queue
import signal
import sys
import time
from typing import List, Optional, Sequence, Union

from .output import put_str
from .protocol import SIGUSR1, SIGUSR2, Reply, Timing, encode_byte, signal_for_bit
from .textops import parse_int

__all__ = ["ClientError", "send_byte", "send_message", "main"]

_REPLY_SIGNALS = (SIGUSR1, SIGUSR2)


class ClientError(Exception):
    """The server did not answer in time."""


def _check_pid(pid: int) -> None:
    # Zero and negative ids address process groups, never a single server.
    if pid <= 0:
        raise ValueError(f"server pid must be positive, got {pid}")


def send_byte(pid: int, byte: int) -> None:
    """Signal the eight bits of byte to pid, pausing before each one."""
    _check_pid(pid)
    for bit in encode_byte(byte):
        time.sleep(Timing.BIT_SEND_INTERVAL.seconds)
        os.kill(pid, signal_for_bit(bit))


def _drain(replies: "queue.SimpleQueue[int]") -> None:
    while True:
        try:
            replies.get_nowait()
        except queue.Empty:
            return


def send_message(pid: int, message: Union[str, bytes]) -> int:
    """Send every byte of message to pid and return the number of bytes sent.

    A negative reply prints ``timeout`` on standard error and resends the
    byte. Raises ClientError when no reply arrives in time.
    """
    _check_pid(pid)
    data = (
        message.encode("utf-8", "surrogateescape")
        if isinstance(message, str)
        else bytes(message)
    )
    replies: "queue.SimpleQueue[int]" = queue.SimpleQueue()

    def on_reply(signum: int, _frame: object) -> None:
        replies.put(signum)

    previous = {signum: signal.signal(signum, on_reply) for signum in _REPLY_SIGNALS}
    try:
        for byte in data:
            while True:
                _drain(replies)
                send_byte(pid, byte)
                try:
                    reply = replies.get(timeout=Timing.SERVER_RESPONSE_TIMEOUT.seconds)
                except queue.Empty:
                    raise ClientError("server error") from None
                if reply == Reply.ACK:
                    break
                put_str("timeout\n", sys.stderr)
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, signal.SIG_DFL if handler is None else handler)
    return len(data)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: ``client <server pid> <message>``."""
    args: List[str] = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        put_str("format error\n", sys.stderr)
        return 1
    pid = parse_int(args[0])
    if pid <= 0:
        put_str("format error\n", sys.stderr)
        return 1
    try:
        send_message(pid, args[1])
    except (ClientError, OSError):
        put_str("server error\n", sys.stderr)
        return 1
    put_str("success\n", sys.stdout)
    return 0