# minitalk

Two small commands that pass a text message from one process to another.
They use nothing but the POSIX user signals. Every byte goes out as eight
signals, most significant bit first. `SIGUSR1` carries a 0 bit and `SIGUSR2`
carries a 1 bit.

After each byte the server answers. It sends `SIGUSR1` when all eight bits
arrived, and the client moves on to the next byte. It sends `SIGUSR2` when
the byte stalled or its bits came in too close together; the client then
prints `timeout` on standard error and sends the same byte again.

## Install

```
pip install .
```

## Usage

Start the server. It prints its process id, then writes every byte it
receives to standard output. Stop it with Ctrl-C:

```
minitalk-server
```

Send a message to it from another terminal:

```
minitalk-client <server-pid> "hello there"
```

The message is sent as UTF-8. The client prints `success` once every byte
has been acknowledged and exits with status 0.

It prints an error and exits with status 1 when:

- it was given fewer than two arguments, or a process id that is not a
  positive number (`format error`);
- the server gave no answer within the response timeout, or could not be
  signalled at all (`server error`).

## Library

The protocol is also available as plain Python:

- `minitalk.protocol` holds the bit encoding (`encode_byte`, `decode_bits`,
  `signal_for_bit`, `bit_for_signal`), the delays in microseconds
  (`Timing`, with a `seconds` property), the reply signals (`Reply.ACK`,
  `Reply.NACK`) and `ByteReceiver`, which puts bytes back together from
  incoming signals through `push` and `reset`.
- `minitalk.client` has `send_byte`, `send_message` (returns the number of
  bytes sent) and `ClientError`, plus the command's `main`.
- `minitalk.server` has the `Server` class: `handle` feeds it one bit
  signal, `tick` sends the acknowledgement or negative reply, and
  `serve_forever` runs the receive loop. `main` is the command.

Small helper modules come with it:

- `minitalk.chars` classifies ASCII characters and converts their case.
- `minitalk.memory` fills, zeroes, copies, searches and compares byte
  buffers.
- `minitalk.cstrings` handles NUL-terminated strings (bounded copy and
  concatenation, searching, prefix comparison).
- `minitalk.textops` parses and formats integers, and splits, trims,
  joins and maps text.
- `minitalk.output` writes characters, strings and numbers to a stream.
- `minitalk.linkedlist` provides a singly linked `LinkedList` of `Node`s.

## Limitations

The server needs a platform that reports which process sent a signal
(`signal.sigwaitinfo` and `signal.sigtimedwait`), such as Linux. Elsewhere
`serve_forever` raises `RuntimeError` and `minitalk-server` exits with
status 1. The server only prints what it receives; it keeps no history and
sends no text back.

## Tests

```
pip install .[test]
pytest
```