"""Connection to the match server: pairing, opponent commands and outgoing moves."""

from __future__ import annotations

import logging
import socket
import threading
from collections import deque

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 11113
READ_CHUNK = 128
PAIRED_PREFIX = "!"
OPPONENT_LEFT_PREFIX = "?"


def _close(sock: socket.socket) -> None:
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError:
        pass
    sock.close()


class NetworkClient:
    """Talks to the match server and keeps the lobby's pairing state.

    Incoming messages land in ``inbox`` and outgoing ones are taken from
    ``outbox``; pass a battle's command queues to wire the two together.
    """

    def __init__(
        self,
        inbox: deque[str] | None = None,
        outbox: deque[str] | None = None,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: float = 5.0,
    ) -> None:
        self.inbox: deque[str] = inbox if inbox is not None else deque()
        self.outbox: deque[str] = outbox if outbox is not None else deque()
        self.host = host
        self.port = port
        self.timeout = timeout
        self.pairing = False
        self.pair_successfully = False
        self._socket: socket.socket | None = None
        self._lock = threading.Lock()

    @property
    def connected(self) -> bool:
        """Whether a connection to the server is open."""
        return self._socket is not None

    def connect(self) -> None:
        """Open the connection and start reading from the server in the background."""
        self.pairing = True
        try:
            sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError as exc:
            logger.error("Connect failed: %s", exc)
            raise
        sock.settimeout(None)
        with self._lock:
            self._socket = sock
        logger.info("Connected successfully")
        threading.Thread(target=self._read_loop, args=(sock,), daemon=True).start()

    def disconnect(self) -> None:
        """Close the connection if it is open."""
        with self._lock:
            sock, self._socket = self._socket, None
        if sock is not None:
            _close(sock)
        logger.info("Disconnected")

    def _read_loop(self, sock: socket.socket) -> None:
        while True:
            try:
                chunk = sock.recv(READ_CHUNK)
            except OSError as exc:
                if self._socket is sock:
                    logger.error("Read failed: %s", exc)
                return
            if not chunk:
                if self._socket is sock:
                    logger.error("Read failed: connection closed by server")
                return
            self.handle_data(chunk)
            if self._socket is not sock:
                return

    def handle_data(self, data: bytes | str) -> None:
        """Act on one message from the server."""
        text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
        if not text:
            return
        if text.startswith(PAIRED_PREFIX):
            self.pair_successfully = True
            return
        if text.startswith(OPPONENT_LEFT_PREFIX):
            with self._lock:
                sock, self._socket = self._socket, None
            if sock is not None:
                _close(sock)
        self.inbox.append(text)

    def write_pending(self) -> str | None:
        """Send the oldest queued message; returns it, or None when nothing was sent."""
        if not self.outbox:
            return None
        message = self.outbox.popleft()
        logger.debug("Writing to server: %s", message)
        sock = self._socket
        try:
            if sock is None:
                raise OSError("not connected")
            sock.sendall(message.encode("utf-8"))
        except OSError as exc:
            logger.error("Write failed: %s", exc)
            return None
        logger.debug("Sent: %s", message)
        return message