# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-source prober: one HEAD request (with retries) against one host."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ..config import RunConfig, load_run_config
from ..errors import ErrorCategory, error_category_to_reason
from ..http.client import HttpClient, create_default_http_client
from ..http.models import HttpRequest, HttpResponse, RetryConfig
from ..http.retry import send_with_retries
from ..models import ProbeOutcome, ProbeResult, classify_status
from ..sources import Protocol, build_url

logger = logging.getLogger(__name__)


def status_token(response: HttpResponse) -> str:
    """Numeric status code as text, or the failure category of the last attempt."""
    if response.status_code is not None:
        return str(response.status_code)
    return response.error_category or ErrorCategory.TIMEOUT.value


class SourceProber:
    """Checks whether `protocol://host` answers with an HTTP status line."""

    def __init__(
        self,
        http_client: HttpClient | None = None,
        config: RunConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or load_run_config()
        self.http_client = http_client or create_default_http_client(self.config)
        self.retry_config = RetryConfig.from_config(self.config)
        self._clock = clock

    def probe(self, protocol: Protocol | str, host: str) -> ProbeResult:
        url = build_url(protocol, host)
        logger.info("Checking: %s", url)

        request = HttpRequest(
            url=url,
            method="HEAD",
            headers={"User-Agent": self.config.user_agent},
            timeout=self.config.timeout,
        )
        response = send_with_retries(
            self.http_client,
            request,
            retry_config=self.retry_config,
            clock=self._clock,
        )

        code = status_token(response)
        outcome = classify_status(code)
        if outcome is ProbeOutcome.FAILED:
            reason = error_category_to_reason(response.error_category) or f"HTTP {code}"
            logger.info(
                "Failed: %s [%s] %s after %d attempt(s)",
                url,
                code,
                reason,
                response.meta.get("attempts", 0),
            )

        # Elapsed covers the answering attempt only, not earlier retries or sleeps.
        return ProbeResult(
            url=url,
            outcome=outcome,
            status_code=code,
            elapsed=response.meta.get("elapsed") if response.status_code is not None else None,
        )

    def __call__(self, protocol: Protocol | str, host: str) -> ProbeResult:
        return self.probe(protocol, host)
