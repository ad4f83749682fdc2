import signal
from unittest import mock

import pytest

from minitalk.client import ClientError, main, send_byte, send_message
from minitalk.protocol import (
    SIGUSR1,
    SIGUSR2,
    ByteReceiver,
    Reply,
    Timing,
    bit_for_signal,
    decode_bits,
)


class FakeSignals:
    def __init__(self):
        self.handlers = {}

    def install(self, signum, handler):
        previous = self.handlers.get(signum, signal.SIG_DFL)
        self.handlers[signum] = handler
        return previous


class FakeServer:
    def __init__(self, registry, nacks=0):
        self.registry = registry
        self.nacks = nacks
        self.receiver = ByteReceiver()
        self.received = bytearray()
        self.signals_seen = 0

    def kill(self, pid, signum):
        self.signals_seen += 1
        byte = self.receiver.push(signum, pid)
        if byte is None:
            return
        self.receiver.reset()
        if self.nacks:
            self.nacks -= 1
            reply = Reply.NACK
        else:
            self.received.append(byte)
            reply = Reply.ACK
        self.registry.handlers[int(reply)](int(reply), None)


@pytest.fixture
def registry():
    fake = FakeSignals()
    with mock.patch("signal.signal", side_effect=fake.install), mock.patch("time.sleep"):
        yield fake


def test_send_byte_signals_most_significant_bit_first():
    with mock.patch("os.kill") as kill, mock.patch("time.sleep") as sleep:
        send_byte(4242, ord("A"))
    signals = [c.args[1] for c in kill.call_args_list]
    assert signals == [SIGUSR1, SIGUSR2, SIGUSR1, SIGUSR1, SIGUSR1, SIGUSR1, SIGUSR1, SIGUSR2]
    assert decode_bits([bit_for_signal(s) for s in signals]) == ord("A")
    assert {c.args[0] for c in kill.call_args_list} == {4242}
    assert sleep.call_args_list == [mock.call(Timing.BIT_SEND_INTERVAL.seconds)] * 8


@pytest.mark.parametrize("byte", [0, 255, 0x5A, ord("z")])
def test_send_byte_round_trips_through_decoding(byte):
    with mock.patch("os.kill") as kill, mock.patch("time.sleep"):
        send_byte(4242, byte)
    bits = [bit_for_signal(c.args[1]) for c in kill.call_args_list]
    assert decode_bits(bits) == byte


def test_send_byte_rejects_group_pid():
    with mock.patch("os.kill") as kill, mock.patch("time.sleep"):
        with pytest.raises(ValueError):
            send_byte(0, 65)
    assert kill.call_count == 0


def test_send_byte_rejects_out_of_range_byte():
    with mock.patch("os.kill") as kill, mock.patch("time.sleep"):
        with pytest.raises(ValueError):
            send_byte(4242, 256)
    assert kill.call_count == 0


def test_send_message_delivers_every_byte(registry):
    server = FakeServer(registry)
    with mock.patch("os.kill", side_effect=server.kill):
        sent = send_message(4242, "hello")
    assert sent == 5
    assert bytes(server.received) == b"hello"
    assert server.signals_seen == 40


def test_send_message_accepts_bytes(registry):
    server = FakeServer(registry)
    with mock.patch("os.kill", side_effect=server.kill):
        sent = send_message(4242, b"\x00\xff")
    assert sent == 2
    assert bytes(server.received) == b"\x00\xff"


def test_send_message_resends_after_negative_reply(registry, capsys):
    server = FakeServer(registry, nacks=1)
    with mock.patch("os.kill", side_effect=server.kill):
        sent = send_message(4242, "x")
    assert sent == 1
    assert bytes(server.received) == b"x"
    assert server.signals_seen == 16
    assert capsys.readouterr().err == "timeout\n"


def test_send_message_restores_handlers(registry):
    server = FakeServer(registry)
    with mock.patch("os.kill", side_effect=server.kill):
        sent = send_message(4242, "ok")
    assert sent == 2
    assert registry.handlers[SIGUSR1] == signal.SIG_DFL
    assert registry.handlers[SIGUSR2] == signal.SIG_DFL


def test_send_message_without_reply_raises(registry):
    with mock.patch("os.kill"):
        with pytest.raises(ClientError, match="server error"):
            send_message(4242, "a")
    assert registry.handlers[SIGUSR1] == signal.SIG_DFL


def test_send_message_empty_sends_nothing(registry):
    with mock.patch("os.kill") as kill:
        assert send_message(4242, "") == 0
    assert kill.call_count == 0


def test_main_requires_pid_and_message(capsys):
    assert main(["4242"]) == 1
    assert capsys.readouterr().err == "format error\n"


def test_main_rejects_non_positive_pid(capsys):
    with mock.patch("os.kill") as kill:
        assert main(["0", "hi"]) == 1
    assert kill.call_count == 0
    assert capsys.readouterr().err == "format error\n"


def test_main_reports_success(registry, capsys):
    server = FakeServer(registry)
    with mock.patch("os.kill", side_effect=server.kill):
        assert main(["4242", "hi"]) == 0
    assert bytes(server.received) == b"hi"
    assert capsys.readouterr().out == "success\n"


def test_main_reports_missing_server(registry, capsys):
    with mock.patch("os.kill", side_effect=ProcessLookupError):
        assert main(["4242", "hi"]) == 1
    assert capsys.readouterr().err == "server error\n"