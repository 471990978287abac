"""Basic-Auth credential encoding."""

from __future__ import annotations

import base64
from typing import Optional


def encode_credentials(username: str, password: str) -> str:
    """Return the RFC 4648 base64 form of ``username:password``."""
    raw = f"{username}:{password}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def basic_auth_token(username: str, password: str) -> Optional[str]:
    """Token for an ``Authorization: Basic`` header, or ``None`` for anonymous sends."""
    if not username or not password:
        return None
    return encode_credentials(username, password)
