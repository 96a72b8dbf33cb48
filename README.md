# slowclient

A small client for the SLOW protocol, a session-based, acknowledged transport
carried over UDP. It builds and parses the 32-byte SLOW header, opens a
session with a server, sends data and waits for the acknowledgement, and
closes the session again.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

Installing the package provides one command:

```
slowclient [--host HOST] [--port PORT] [--message TEXT] [--timeout SECONDS]
```

It connects to the server, sends one message, then disconnects, logging each
step to standard output as `[INFO] ...`, `[WARN] ...` or `[ERROR] ...` lines.

- `--host`: server host name or address (a built-in server address by default)
- `--port`: server UDP port (default `7033`)
- `--message`: text to send (default `hello world`)
- `--timeout`: seconds a single receive may wait (default `0.5`); `0` waits
  forever

The command exits with status `0` when connect, send and disconnect all
succeeded, and `1` otherwise, including when the host cannot be resolved.
The same entry point is available as `python -m slowclient.cli`.

## Library use

### Packets

`slowclient.package.SlowPackage` is a dataclass holding one SLOW packet: a
16-byte session id `sid`, a 27-bit session TTL `sttl`, the flags
`flag_connect`, `flag_revive`, `flag_ack`, `flag_accept_reject` and `flag_mb`,
`seqnum`, `acknum`, `window`, the fragment id `fid` and offset `fo`, the
payload `data`, and a `type` (a `PackageType`: `CONNECT`, `SETUP`, `DATA`,
`ACK` or `RAW`, the default). The `type` is not carried on the wire.

```python
from slowclient.package import SlowPackage

packet = SlowPackage(flag_connect=True, window=256)

raw = packet.serialize()          # 32-byte header followed by the payload
again = SlowPackage.deserialize(raw)
print(again.describe())
```

All multi-byte header fields are little-endian; the TTL and the five flags
share one 32-bit word. On output each field is truncated to its wire width.
`serialize` raises `ValueError` if `sid` is not 16 bytes, and `deserialize`
raises `ValueError` for input shorter than the header.

### UDP transport

`slowclient.udp_client.UdpClient(host, port)` wraps a UDP socket aimed at one
server. `setup_connection()` resolves the host and creates the socket;
`send(data)` sends one datagram; `receive(buffer_size=1472)` waits for one
datagram and takes its sender as the server address from then on;
`set_receive_timeout(seconds, microseconds)` bounds how long `receive` waits
(zero means wait forever). Any failure, including use before
`setup_connection()` and a receive timeout, raises `UdpClientError`, a
subclass of `OSError`. `close()` closes the socket; the client is also a
context manager.

### Sessions

`slowclient.transaction.Transaction` drives a session over a client that
offers `send` and `receive`:

```python
from slowclient.udp_client import UdpClient
from slowclient.transaction import Transaction

with UdpClient("localhost", 7033) as client:
    client.setup_connection()
    client.set_receive_timeout(0, 500_000)
    with Transaction(client) as session:
        if session.connect():
            session.send_data("hello world")
            session.disconnect()
```

A background thread collects the packets the server sends; each operation
polls for its reply a fixed number of times (`retries`, default 10) with a
short pause between (`await_time`, default 0.01 s), both settable as keyword
arguments of `Transaction`.

- `connect()` sends a connect packet and waits for the setup reply. It
  returns `False` if the packet cannot be sent, no reply arrives, or the
  server rejects the session; otherwise it records the session id, sequence
  number and TTL and returns `True`.
- `send_data(data, revive=False, attempts_left=5)` sends `data` (text is
  UTF-8 encoded) and waits for an ack of its sequence number, resending while
  attempts remain. It returns `False` when not connected.
- `disconnect()` marks the session offline, sends the disconnect packet and
  returns `True` once the server acknowledges it.
- `connection_still_alive()` reports whether the TTL granted by the server
  has not yet run out, and marks the session expired if it has.

The current state is `connection_status`, a `ConnectionStatus`: `OFFLINE`,
`CONNECTING`, `CONNECTED` or `EXPIRED`.

### Logging

`slowclient.logger.log(level, msg)` prints `msg` to standard output, tagged
with a `LogLevel` (`INFO`, `WARNING` printed as `WARN`, or `ERROR`).

## Limitations

- Each call to `send_data` sends its whole payload in a single packet: there
  is no fragmentation and no sliding window, so payloads must fit one
  datagram.
- Incoming data from the server is buffered but never handed to the caller.
- The package is a client only; it provides no SLOW server.