# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for check-sources."""

from ..http.models import Headers, HttpRequest, HttpResponse, RetryConfig
from .probe import ProbeOutcome, ProbeResult, classify_status
from .summary import RunSummary

__all__ = [
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "ProbeOutcome",
    "ProbeResult",
    "RetryConfig",
    "RunSummary",
    "classify_status",
]
