# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used by the prober."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..config import RETRY_DELAY, RunConfig

Headers = dict[str, str]


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "HEAD"
    headers: Headers | None = None
    timeout: float | None = None


@dataclass
class HttpResponse:
    """
    Normalized HTTP response.

    `ok` means a status line was received; `status_code` is then set. Transport
    failures carry `error_category` instead.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    url: str | None = None
    error_category: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)


@dataclass
class RetryConfig:
    """Retry policy for HTTP requests derived from RunConfig."""

    max_attempts: int = 2
    backoff_factor: float = 1.0
    initial_delay: float = RETRY_DELAY

    @classmethod
    def from_config(cls, config: RunConfig) -> RetryConfig:
        """Build a retry config from the run configuration."""
        return cls(max_attempts=max(1, config.max_retries))
