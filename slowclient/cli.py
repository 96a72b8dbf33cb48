"""Command that runs one session against a SLOW server."""

from __future__ import annotations

import argparse
import sys

from slowclient.logger import LogLevel, log
from slowclient.transaction import Transaction
from slowclient.udp_client import UdpClient, UdpClientError

DEFAULT_HOST = "142.93.184.175"
DEFAULT_PORT = 7033


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slowclient",
        description="Connect to a SLOW server, send one message and disconnect.",
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="server host name or address")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="server UDP port")
    parser.add_argument("--message", default="hello world", help="text to send")
    parser.add_argument(
        "--timeout",
        type=float,
        default=0.5,
        help="seconds a single receive may wait; 0 waits forever",
    )
    return parser


def main(argv=None) -> int:
    """Run connect, send and disconnect; return 0 if all of them succeeded."""
    args = _parser().parse_args(argv)
    log(LogLevel.INFO, "starting application")

    client = UdpClient(args.host, args.port)
    try:
        client.setup_connection()
        if args.timeout > 0:
            seconds = int(args.timeout)
            microseconds = round((args.timeout - seconds) * 1_000_000)
            client.set_receive_timeout(seconds, microseconds)
    except UdpClientError as exc:
        log(LogLevel.ERROR, f"could not set up the client: {exc}")
        client.close()
        return 1

    ok = True
    with client, Transaction(client) as transaction:
        if not transaction.connect():
            log(LogLevel.ERROR, "connect failed. cancelling operation")
            ok = False
        if not transaction.send_data(args.message):
            log(LogLevel.ERROR, "data sending failed. cancelling operation")
            ok = False
        if not transaction.disconnect():
            log(LogLevel.ERROR, "disconnect failed. cancelling operation")
            ok = False
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())