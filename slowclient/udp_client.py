"""A small UDP client bound to a single remote server."""

from __future__ import annotations

import socket

from slowclient.logger import LogLevel, log

MAX_DATAGRAM = 1472


class UdpClientError(OSError):
    """Raised when the client is unusable or a socket operation fails."""


class UdpClient:
    """Sends datagrams to and receives datagrams from one server."""

    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = port
        self._sock: socket.socket | None = None
        self._address: tuple[str, int] | None = None

    @property
    def is_connected(self) -> bool:
        return self._sock is not None and self._address is not None

    def setup_connection(self) -> None:
        """Resolve the server and open the socket."""
        try:
            ip = socket.gethostbyname(self.host)
        except OSError as exc:
            raise UdpClientError(f"host not found: {self.host}") from exc
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as exc:
            raise UdpClientError("failed to create socket") from exc
        self.close()
        self._sock = sock
        self._address = (ip, self.port)
        log(LogLevel.INFO, f"UDP connection configured for {self.host}:{self.port}")

    def _require_socket(self) -> socket.socket:
        if self._sock is None or self._address is None:
            raise UdpClientError("socket not connected")
        return self._sock

    def set_receive_timeout(self, seconds: int, microseconds: int) -> None:
        """Bound how long receive waits; zero means wait forever."""
        sock = self._require_socket()
        total = seconds + microseconds / 1_000_000
        if total < 0:
            raise UdpClientError("timeout must not be negative")
        sock.settimeout(total if total > 0 else None)

    def send(self, data: bytes) -> None:
        """Send one datagram to the server."""
        sock = self._require_socket()
        try:
            sock.sendto(bytes(data), self._address)
        except OSError as exc:
            raise UdpClientError("failed to send data") from exc

    def receive(self, buffer_size: int = MAX_DATAGRAM) -> bytes:
        """Wait for one datagram; the sender becomes the new server address."""
        sock = self._require_socket()
        try:
            payload, sender = sock.recvfrom(buffer_size)
        except OSError as exc:
            raise UdpClientError("failed to receive data (or timeout)") from exc
        self._address = sender
        return payload

    def close(self) -> None:
        """Close the socket if it is open."""
        if self._sock is not None:
            self._sock.close()
        self._sock = None
        self._address = None

    def __enter__(self) -> UdpClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()