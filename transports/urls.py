"""Endpoint string decomposition."""

from __future__ import annotations

import re

from models.schemas import DecomposedURL

_LEADING_DIGITS = re.compile(r"\d+")
_MAX_PORT = 65535


class MalformedURL(ValueError):
    """Raised when no host segment can be isolated from an endpoint string."""


def _parse_port(suffix: str) -> int:
    match = _LEADING_DIGITS.match(suffix.strip())
    if match is None:
        return 0
    port = int(match.group(0))
    return port if port <= _MAX_PORT else 0


def decompose_url(raw: str) -> DecomposedURL:
    """Split ``raw`` into scheme, host, port and path.

    No scheme means ``http``. No path means ``/``. Without an explicit port
    the scheme decides: ``https`` maps to 443, anything else to 80. A port
    suffix without leading digits yields port 0.
    """
    target = raw.strip()

    scheme = "http"
    offset = 0
    scheme_end = target.find("://")
    if scheme_end != -1:
        scheme = target[:scheme_end]
        offset = scheme_end + 3

    path_start = target.find("/", offset)
    if path_start != -1:
        host = target[offset:path_start]
        path = target[path_start:]
    else:
        host = target[offset:]
        path = "/"

    port_sep = host.find(":")
    if port_sep != -1:
        port = _parse_port(host[port_sep + 1:])
        host = host[:port_sep]
    elif scheme.lower() == "https":
        port = 443
    else:
        port = 80

    if not host:
        raise MalformedURL(f"No host segment in endpoint {raw!r}.")

    return DecomposedURL(scheme=scheme, host=host, port=port, path=path)
