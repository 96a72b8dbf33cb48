"""Session handling for the SLOW protocol: connect, send data, disconnect."""

from __future__ import annotations

import itertools
import threading
import time
from enum import Enum

from slowclient.logger import LogLevel, log
from slowclient.package import SID_SIZE, STTL_MASK, PackageType, SlowPackage
from slowclient.udp_client import UdpClientError

N_RETRIES = 10
AWAIT_TIME = 0.01
SEND_ATTEMPTS = 5
DEFAULT_ATTEMPTS = 5
WINDOW = 256


class ConnectionStatus(Enum):
    """State of the session with the server."""

    OFFLINE = 0
    CONNECTED = 1
    EXPIRED = 2
    CONNECTING = 3


class Transaction:
    """Drives one session over a client that offers ``send`` and ``receive``.

    A background thread collects every packet the server sends into a buffer;
    the session operations poll that buffer for the reply they expect.
    """

    def __init__(self, client, *, retries: int = N_RETRIES, await_time: float = AWAIT_TIME) -> None:
        if client is None:
            log(LogLevel.ERROR, "client is null")
            raise ValueError("client must not be None")
        self._client = client
        self._retries = retries
        self._await_time = await_time

        self._status_lock = threading.Lock()
        self._status = ConnectionStatus.OFFLINE

        self._buffer: list[SlowPackage] = []
        self._buffer_lock = threading.Lock()
        self._listening = threading.Event()
        self._listener: threading.Thread | None = None

        self._session_sid = bytes(SID_SIZE)
        self._seqnum = 0
        self._sttl = 0
        self._expiration: float | None = None

    @property
    def connection_status(self) -> ConnectionStatus:
        with self._status_lock:
            return self._status

    def _set_status(self, status: ConnectionStatus) -> None:
        with self._status_lock:
            self._status = status

    def __enter__(self) -> Transaction:
        return self

    def __exit__(self, *exc_info) -> None:
        self._listening.clear()
        listener = self._listener
        if listener is not None and listener is not threading.current_thread():
            listener.join(timeout=1.0)

    def _session_active(self) -> bool:
        return self._expiration is not None and time.monotonic() < self._expiration

    def connection_still_alive(self) -> bool:
        """True while the session lifetime granted by the server has not run out."""
        if self._session_active():
            return True
        log(LogLevel.WARNING, "SESSION EXPIRED")
        self._set_status(ConnectionStatus.EXPIRED)
        return False

    def connect(self) -> bool:
        """Send a connect packet and wait for the setup; True if accepted."""
        log(LogLevel.INFO, "requesting connection")

        if self.connection_status is ConnectionStatus.CONNECTED and self._session_active():
            log(LogLevel.INFO, "connection already established. Skipping..")
            return True

        self._set_status(ConnectionStatus.CONNECTING)
        self._start_listener()

        request = SlowPackage(flag_connect=True, window=WINDOW)
        if not self._send_with_retries(request.serialize()):
            log(LogLevel.ERROR, "error sending connect package. Cancelling")
            self._go_offline()
            return False
        log(LogLevel.INFO, "connect package sent successfully")

        setup = self._await(PackageType.SETUP, 0)
        if setup is None:
            log(LogLevel.ERROR, "did not receive any setup msg from server")
            self._go_offline()
            return False

        if not setup.flag_accept_reject:
            log(LogLevel.WARNING, "connection rejected by server")
            self._go_offline()
            return False

        log(LogLevel.INFO, "received setup response from server. Connection accepted")
        self._session_sid = bytes(setup.sid)
        self._seqnum = setup.seqnum
        self._sttl = setup.sttl
        self._expiration = time.monotonic() + (setup.sttl & STTL_MASK) / 1000
        self._set_status(ConnectionStatus.CONNECTED)
        return True

    def send_data(self, data, revive: bool = False, attempts_left: int = DEFAULT_ATTEMPTS) -> bool:
        """Send ``data`` and wait for its ack, resending up to ``attempts_left`` times."""
        payload = data.encode() if isinstance(data, str) else bytes(data)

        for remaining in itertools.count(attempts_left, -1):
            log(LogLevel.INFO, f"sending data: '{data}'. Attempts left: {remaining}")

            if self.connection_status is not ConnectionStatus.CONNECTED:
                log(LogLevel.ERROR, "failed to send data: not connected.")
                return False

            seqnum = self._seqnum
            package = SlowPackage(
                sid=self._session_sid,
                sttl=self._sttl,
                flag_revive=revive,
                seqnum=seqnum,
                window=WINDOW,
                data=payload,
            )
            if not self._send_with_retries(package.serialize()):
                log(LogLevel.ERROR, "could not send data package. Cancelling")
                return False

            ack = self._await(PackageType.ACK, seqnum)
            if ack is not None:
                log(LogLevel.INFO, "ack received for data. Data successfully sent")
                self._seqnum = ack.seqnum
                return True

            if remaining <= 0:
                log(LogLevel.ERROR, "attempts exhausted. No ack received from server. Giving up")
                return False
            log(
                LogLevel.ERROR,
                f"did not receive ack from server. Retrying..  Attempts left: {remaining}",
            )
        return False

    def disconnect(self) -> bool:
        """Ask the server to end the session; True once it acknowledges."""
        log(LogLevel.INFO, "requesting disconnect")
        self._set_status(ConnectionStatus.OFFLINE)

        seqnum = self._seqnum
        package = SlowPackage(
            sid=self._session_sid,
            sttl=self._sttl,
            flag_ack=True,
            flag_connect=True,
            flag_revive=True,
            acknum=0,
            seqnum=seqnum,
        )
        try:
            self._client.send(package.serialize())
        except UdpClientError as exc:
            log(LogLevel.ERROR, f"could not send disconnect package: {exc}")
            self._listening.clear()
            return False

        response = self._await(PackageType.ACK, seqnum)
        self._listening.clear()
        if response is None:
            log(LogLevel.ERROR, "did not receive any ack from server")
            return False

        log(LogLevel.INFO, "ack received. Successfully disconnected")
        return True

    def _go_offline(self) -> None:
        self._set_status(ConnectionStatus.OFFLINE)
        self._listening.clear()

    def _send_with_retries(self, payload: bytes) -> bool:
        for _ in range(SEND_ATTEMPTS):
            try:
                self._client.send(payload)
            except UdpClientError:
                continue
            return True
        return False

    def _take(self, kind: PackageType, acknum: int) -> SlowPackage | None:
        """Remove and return the first buffered packet of ``kind`` acknowledging ``acknum``."""
        with self._buffer_lock:
            for index, package in enumerate(self._buffer):
                if package.acknum == acknum and package.type is kind:
                    del self._buffer[index]
                    return package
        return None

    def _await(self, kind: PackageType, acknum: int) -> SlowPackage | None:
        for _ in range(self._retries):
            package = self._take(kind, acknum)
            if package is not None:
                return package
            time.sleep(self._await_time)
        return None

    def _classify(self, package: SlowPackage) -> PackageType:
        if self.connection_status is ConnectionStatus.CONNECTING:
            return PackageType.SETUP
        if package.flag_ack:
            return PackageType.ACK
        return PackageType.DATA

    def _start_listener(self) -> None:
        self._listening.set()
        if self._listener is None or not self._listener.is_alive():
            self._listener = threading.Thread(target=self._listen, daemon=True)
            self._listener.start()

    def _listen(self) -> None:
        log(LogLevel.INFO, "listening to incoming messages from server..")
        while self._listening.is_set():
            try:
                raw = self._client.receive()
            except UdpClientError:
                time.sleep(self._await_time)
                continue
            try:
                package = SlowPackage.deserialize(raw)
            except ValueError as exc:
                log(LogLevel.WARNING, f"discarding malformed package: {exc}")
                continue
            log(LogLevel.INFO, "received a package from server")
            package.type = self._classify(package)
            with self._buffer_lock:
                self._buffer.append(package)
        log(LogLevel.WARNING, "status is not connected. not listening to messages from server anymore.")
        log(LogLevel.WARNING, f"status: {self.connection_status.name}")