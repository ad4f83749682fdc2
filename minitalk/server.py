"""Receive bytes sent bit by bit over user signals and print them.

The server prints its process id, then waits. Each bit signal is added
to the byte in progress; once eight bits have arrived the byte is
written out and the sender is acknowledged. A byte that stalls, or
whose bits arrive too close together, is answered with a negative reply
so the sender tries again.
"""

from __future__ import annotations

import contextlib
import os
import signal
import sys
from typing import BinaryIO, Optional, Sequence

from .output import put_char, put_nbr, put_str
from .protocol import (
    BITS_PER_BYTE,
    SIGUSR1,
    SIGUSR2,
    ByteReceiver,
    Reply,
    Timing,
)

__all__ = ["Server", "main"]

_SIGNALS = frozenset({SIGUSR1, SIGUSR2})
# A bit count no byte can finish from; it forces a negative reply.
_CORRUPT = BITS_PER_BYTE + 1


class Server:
    """Assembles bytes from bit signals and answers their senders."""

    def __init__(self, output: Optional[BinaryIO] = None) -> None:
        self.output: BinaryIO = sys.stdout.buffer if output is None else output
        self.receiver = ByteReceiver()

    def handle(self, signum: int, sender: int) -> Optional[int]:
        """Take one bit signal from sender; write and return a finished byte."""
        byte = self.receiver.push(signum, sender)
        if byte is not None:
            self.output.write(bytes([byte]))
            self.output.flush()
        return byte

    def tick(self, timed_out: bool) -> Optional[Reply]:
        """Answer the sender once a byte is complete or the line went quiet.

        A complete byte is acknowledged; an incomplete one is refused when
        ``timed_out`` is true. Either answer resets the receiver. Returns
        the reply sent, or None when it is not yet time to answer.
        """
        receiver = self.receiver
        if receiver.bit_count == 0:
            return None
        if receiver.complete:
            reply = Reply.ACK
        elif timed_out:
            reply = Reply.NACK
        else:
            return None
        if receiver.client_pid is not None:
            # A vanished sender is not the server's problem.
            with contextlib.suppress(OSError):
                os.kill(receiver.client_pid, int(reply))
        receiver.reset()
        return reply

    def _wait(self, timing: Timing) -> bool:
        info = signal.sigtimedwait(_SIGNALS, timing.seconds)
        if info is None:
            return False
        self.handle(info.si_signo, info.si_pid)
        return True

    def serve_forever(self) -> None:
        """Receive signals until interrupted.

        Needs a platform that reports the sender of a signal.
        """
        if not (hasattr(signal, "sigwaitinfo") and hasattr(signal, "sigtimedwait")):
            raise RuntimeError("this platform cannot report the sender of a signal")
        previous = signal.pthread_sigmask(signal.SIG_BLOCK, _SIGNALS)
        try:
            while True:
                receiver = self.receiver
                if not receiver.bit_count:
                    info = signal.sigwaitinfo(_SIGNALS)
                    self.handle(info.si_signo, info.si_pid)
                if self._wait(Timing.BIT_RECEIVE_DELAY) and receiver.pending:
                    receiver.bit_count = _CORRUPT
                if receiver.complete:
                    self.tick(False)
                elif not self._wait(Timing.SIG_RECEIVE_TIMEOUT):
                    self.tick(True)
        finally:
            signal.pthread_sigmask(signal.SIG_SETMASK, previous)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command entry point: print the process id and serve until interrupted."""
    put_nbr(os.getpid(), sys.stdout)
    put_char("\n", sys.stdout)
    sys.stdout.flush()
    server = Server()
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        return 0
    except RuntimeError as exc:
        put_str(f"{exc}\n", sys.stderr)
        return 1
    return 0