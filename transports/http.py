"""Plaintext HTTP/1.1 POST over a raw TCP socket.

The request is framed by hand and the response is read line by line until the
peer closes the connection or stays silent for ``read_timeout`` seconds. Only
the status line is interpreted; headers and body are logged for diagnostics.
There is no TLS support, so HTTPS endpoints are attempted in plaintext and
flagged with a ``TlsUnsupported`` warning.
"""

from __future__ import annotations

import logging
import re
import socket
from typing import Callable, Iterator, List, Optional, Tuple

from models.records import PROTOCOL_HTTP
from models.schemas import DecomposedURL, ErrorKind, TransmissionResult

logger = logging.getLogger(__name__)

SocketFactory = Callable[[Tuple[str, int], float], socket.socket]

DEFAULT_READ_TIMEOUT = 5.0
DEFAULT_USER_AGENT = "DataLogger-Agent/0.1"
_TLS_PORT = 443
_STATUS_PREFIX = "HTTP/"
_LEADING_DIGITS = re.compile(r"\d+")


def build_request(
    url: DecomposedURL,
    payload: str,
    auth_token: Optional[str] = None,
    user_agent: str = DEFAULT_USER_AGENT,
) -> bytes:
    body = payload.encode("utf-8")
    lines = [
        f"POST {url.path} HTTP/1.1",
        f"Host: {url.host}",
        f"User-Agent: {user_agent}",
        "Accept: application/json",
        "Content-Type: application/json",
    ]
    if auth_token:
        lines.append(f"Authorization: Basic {auth_token}")
    lines.append(f"Content-Length: {len(body)}")
    lines.append("Connection: close")
    head = "\r\n".join(lines) + "\r\n\r\n"
    return head.encode("utf-8") + body


def parse_status_line(line: str) -> int:
    """Status code from ``HTTP/1.1 200 OK``; 0 when the line is not a status line."""
    if not line.startswith(_STATUS_PREFIX):
        return 0
    space = line.find(" ")
    if space == -1:
        return 0
    match = _LEADING_DIGITS.match(line[space + 1:space + 4])
    return int(match.group(0)) if match else 0


def classify_status(status_code: int, warnings: Optional[List[ErrorKind]] = None) -> TransmissionResult:
    if 200 <= status_code < 300:
        return TransmissionResult(
            success=True,
            protocol=PROTOCOL_HTTP,
            status_code=status_code,
            warnings=list(warnings or []),
        )
    kind = ErrorKind.not_found if status_code == 404 else ErrorKind.server_or_auth_error
    return TransmissionResult.failure(PROTOCOL_HTTP, kind, status_code=status_code, warnings=warnings)


class HttpTransport:
    """Sends one JSON payload per call and reports the parsed status."""

    def __init__(
        self,
        socket_factory: SocketFactory = socket.create_connection,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._socket_factory = socket_factory
        self.read_timeout = read_timeout
        self.user_agent = user_agent

    def send(
        self,
        url: DecomposedURL,
        payload: str,
        auth_token: Optional[str] = None,
    ) -> TransmissionResult:
        context = {"protocol": PROTOCOL_HTTP, "host": url.host, "port": url.port}
        warnings: List[ErrorKind] = []
        tls_expected = url.port == _TLS_PORT or url.scheme.lower() == "https"
        if tls_expected:
            warnings.append(ErrorKind.tls_unsupported)

        logger.info("Connecting to %s (port %d)", url.host, url.port, extra=context)
        logger.info("Payload: %s", payload, extra=context)
        try:
            sock = self._socket_factory((url.host, url.port), self.read_timeout)
        except (OSError, UnicodeError) as exc:
            logger.error("Connection failed: %s", exc, extra=context)
            if tls_expected:
                logger.warning(
                    "Endpoint expects TLS, which this transport does not support; "
                    "make sure the server accepts plain HTTP.",
                    extra=context,
                )
            return TransmissionResult.failure(
                PROTOCOL_HTTP, ErrorKind.connect_failed, warnings=warnings
            )

        status_code = 0
        try:
            logger.info("TCP connection established, sending request", extra=context)
            if tls_expected:
                logger.warning(
                    "Connected to a TLS port without TLS support; expect status 0 "
                    "or a dropped connection.",
                    extra=context,
                )
            sock.settimeout(self.read_timeout)
            sock.sendall(build_request(url, payload, auth_token, self.user_agent))

            first_line = True
            for line in self._read_lines(sock):
                if first_line:
                    status_code = parse_status_line(line)
                    first_line = False
                logger.debug("< %s", line, extra=context)
        except OSError as exc:
            logger.error("Connection error after connect: %s", exc, extra=context)
        finally:
            sock.close()

        result = classify_status(status_code, warnings)
        self._log_result(result, context)
        return result

    def _read_lines(self, sock: socket.socket) -> Iterator[str]:
        buffer = b""
        while True:
            try:
                chunk = sock.recv(4096)
            except socket.timeout:
                logger.debug("No response bytes for %.1fs, closing", self.read_timeout)
                break
            if not chunk:
                break
            buffer += chunk
            while b"\n" in buffer:
                raw, buffer = buffer.split(b"\n", 1)
                yield raw.decode("utf-8", errors="replace").strip()
        if buffer:
            yield buffer.decode("utf-8", errors="replace").strip()

    @staticmethod
    def _log_result(result: TransmissionResult, context: dict) -> None:
        extra = {**context, "status_code": result.status_code}
        if result.success:
            logger.info("Data accepted (status %d)", result.status_code, extra=extra)
        elif result.error_kind is ErrorKind.not_found:
            logger.error(
                "404 Not Found; the API path is missing on this port, the server "
                "likely requires HTTPS (port 443).",
                extra=extra,
            )
        else:
            logger.error(
                "Server error or authentication failed (status %d)",
                result.status_code,
                extra=extra,
            )
