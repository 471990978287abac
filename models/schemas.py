"""Pydantic value types produced by the transport layer."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    """Failure and warning categories for a single send attempt."""

    malformed_url = "MalformedURL"
    connect_failed = "ConnectFailed"
    tls_unsupported = "TlsUnsupported"
    not_found = "NotFound"
    server_or_auth_error = "ServerOrAuthError"
    unknown_protocol = "UnknownProtocol"
    link_down = "LinkDown"


class DecomposedURL(BaseModel):
    """Endpoint pieces needed to open a socket and frame a request."""

    scheme: str
    host: str = Field(..., min_length=1)
    port: int = Field(..., ge=0, le=65535, description="0 when the port suffix is not numeric.")
    path: str = "/"


class TransmissionResult(BaseModel):
    """Outcome of one send attempt; logged and then discarded."""

    success: bool
    protocol: str
    status_code: Optional[int] = None
    error_kind: Optional[ErrorKind] = None
    warnings: List[ErrorKind] = Field(default_factory=list)

    @classmethod
    def failure(
        cls,
        protocol: str,
        error_kind: ErrorKind,
        status_code: Optional[int] = None,
        warnings: Optional[List[ErrorKind]] = None,
    ) -> "TransmissionResult":
        return cls(
            success=False,
            protocol=protocol,
            status_code=status_code,
            error_kind=error_kind,
            warnings=list(warnings or []),
        )
