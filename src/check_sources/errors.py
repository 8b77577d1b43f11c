# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy, exception helpers and process exit codes."""

from __future__ import annotations

import asyncio
import socket
import ssl
from enum import Enum, IntEnum


class ExitCode(IntEnum):
    OK = 0
    FAILURE = 1
    USAGE = 2


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    PROXY_ERROR = "PROXY_ERROR"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class CheckSourcesError(Exception):
    """Base class for errors raised before or around a run."""


class InvalidConfigError(CheckSourcesError, ValueError):
    """A configuration value is out of range or malformed."""


class MissingDependencyError(CheckSourcesError):
    """A required external library is not installed."""


def _is_dns_failure(exc: BaseException) -> bool:
    # httpx wraps socket.gaierror in ConnectError; walk the cause chain.
    seen = 0
    current: BaseException | None = exc
    while current is not None and seen < 8:
        if isinstance(current, (socket.gaierror, socket.herror)):
            return True
        current = current.__cause__ or current.__context__
        seen += 1
    message = str(exc).lower()
    return "name or service not known" in message or "nodename nor servname" in message or "getaddrinfo" in message


def categorize_exception(exc: Exception) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    import httpx

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.ProxyError):
        return ErrorCategory.PROXY_ERROR

    if isinstance(exc, (ssl.SSLError, ssl.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError)):
        if _is_dns_failure(exc):
            return ErrorCategory.DNS_ERROR
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (TimeoutError, asyncio.TimeoutError, socket.timeout)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | str | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "No response before the timeout",
        ErrorCategory.PROXY_ERROR: "Proxy refused or failed the request",
        ErrorCategory.SSL_ERROR: "TLS handshake failed",
        ErrorCategory.CONNECTION_ERROR: "Connection refused or reset",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Network error during probe",
    }
    if category is None:
        return ""
    try:
        return mapping[ErrorCategory(category)]
    except ValueError:
        return "Network error during probe"


__all__ = [
    "CheckSourcesError",
    "ErrorCategory",
    "ExitCode",
    "InvalidConfigError",
    "MissingDependencyError",
    "categorize_exception",
    "error_category_to_reason",
]
