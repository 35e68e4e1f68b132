"""
gpsd client implementation using sockets.

Speaks the gpsd JSON protocol: a WATCH request turns on streaming, after which
the daemon sends one JSON object per line (VERSION, DEVICES, WATCH, TPV,
SKY, ...).
"""
import json
import logging
import select
import socket
from typing import Optional

from gpssnmp.data_models import GpsdReport
from gpssnmp.errors import ConnectionFailure, TransportFailure

logger = logging.getLogger(__name__)

# gpsd never emits a JSON object longer than this
GPS_JSON_RESPONSE_MAX = 8192


class GpsdClient:
    """
    Session with a running gpsd.

    Attributes:
        host (str): gpsd host name or address
        port (int): gpsd TCP port
        timeout (float): connect/send timeout in seconds
        sock (socket.socket): active connection, None when closed
    """

    def __init__(self, host: str = "localhost", port: int = 2947, timeout: float = 10.0):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.sock: Optional[socket.socket] = None
        self._buf = b""

    def connect(self) -> socket.socket:
        """
        Establish the TCP connection to gpsd.

        Raises:
            ConnectionFailure: name resolution failed or the daemon is unreachable
        """
        try:
            self.sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError as e:
            self.sock = None
            raise ConnectionFailure(self.host, self.port, str(e)) from e
        self._buf = b""
        logger.info("Connected to gpsd %s:%s", self.host, self.port)
        return self.sock

    def stream(self, device: Optional[str] = None) -> None:
        """
        Ask gpsd to stream JSON reports, optionally for a single device.
        """
        watch = {"enable": True, "json": True}
        if device:
            watch["device"] = device
        self._send("?WATCH=" + json.dumps(watch, separators=(",", ":")) + ";\n")

    def waiting(self, timeout: float) -> bool:
        """
        Return True when a report can be read without blocking.

        Blocks up to `timeout` seconds for the socket to become readable.
        """
        if b"\n" in self._buf:
            return True
        sock = self._require_socket()
        try:
            readable, _, _ = select.select([sock], [], [], max(0.0, timeout))
        except (OSError, ValueError) as e:
            raise TransportFailure(str(e)) from e
        return bool(readable)

    def read(self) -> GpsdReport:
        """
        Read and decode the next report.

        Returns an empty report (klass None) when only part of a line has
        arrived so far, or when the line is not a JSON object.

        Raises:
            TransportFailure: gpsd closed the connection or the socket failed
        """
        if b"\n" not in self._buf:
            sock = self._require_socket()
            try:
                chunk = sock.recv(4096)
            except OSError as e:
                raise TransportFailure(str(e)) from e
            if not chunk:
                raise TransportFailure("connection closed by gpsd")
            self._buf += chunk

        if b"\n" not in self._buf:
            if len(self._buf) > GPS_JSON_RESPONSE_MAX:
                raise TransportFailure(f"response exceeds {GPS_JSON_RESPONSE_MAX} bytes")
            return GpsdReport(klass=None)

        line, _, self._buf = self._buf.partition(b"\n")
        return self._decode(line)

    def close(self):
        """Close the session. Safe to call more than once."""
        if self.sock is None:
            return
        try:
            self.sock.sendall(b'?WATCH={"enable":false};\n')
        except OSError as e:
            logger.debug("WATCH disable failed: %s", e)
        self.sock.close()
        self.sock = None
        self._buf = b""
        logger.info("gpsd connection closed")

    def __enter__(self):
        if self.sock is None:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _require_socket(self) -> socket.socket:
        if self.sock is None:
            raise TransportFailure("not connected")
        return self.sock

    def _send(self, text: str) -> None:
        sock = self._require_socket()
        logger.debug("-> %s", text.strip())
        try:
            sock.sendall(text.encode("ascii"))
        except OSError as e:
            raise TransportFailure(str(e)) from e

    @staticmethod
    def _decode(line: bytes) -> GpsdReport:
        text = line.decode("utf-8", errors="ignore").strip()
        if not text:
            return GpsdReport(klass=None)
        try:
            obj = json.loads(text)
        except ValueError:
            logger.debug("Ignoring undecodable line: %r", text[:80])
            return GpsdReport(klass=None)
        if not isinstance(obj, dict):
            return GpsdReport(klass=None)
        return GpsdReport.from_json(obj)
