# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
check-sources package entrypoint.

Connectivity pre-flight checks: HEAD requests against the package repositories
and third-party services a deployment depends on, over HTTP and HTTPS,
optionally through a forward proxy. HTTP behavior is abstracted behind an
injectable client interface, and results are modeled with typed dataclasses.
"""

from .config import OutputFormat, RunConfig, load_run_config
from .errors import ErrorCategory, ExitCode
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    RetryConfig,
    StubHttpClient,
    create_default_http_client,
)
from .log import setup_logging
from .models import ProbeOutcome, ProbeResult, RunSummary, classify_status
from .runtime import SourceChecker
from .scan import ProtocolRunner, Reporter, SourceProber
from .sources import HTTP_SOURCES, HTTPS_SOURCES, SOURCES, Protocol
from .version import __version__

__all__ = [
    "ErrorCategory",
    "ExitCode",
    "HTTPS_SOURCES",
    "HTTP_SOURCES",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "OutputFormat",
    "ProbeOutcome",
    "ProbeResult",
    "Protocol",
    "ProtocolRunner",
    "Reporter",
    "RetryConfig",
    "RunConfig",
    "RunSummary",
    "SOURCES",
    "SourceChecker",
    "SourceProber",
    "StubHttpClient",
    "classify_status",
    "create_default_http_client",
    "load_run_config",
    "setup_logging",
    "__version__",
]
