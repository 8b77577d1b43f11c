# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry helper for HttpClient implementations."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ..config import load_run_config
from ..errors import ErrorCategory, categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse, RetryConfig

logger = logging.getLogger(__name__)


def build_default_retry_config() -> RetryConfig:
    """Create a RetryConfig from environment-backed RunConfig."""
    return RetryConfig.from_config(load_run_config())


def send_with_retries(
    client: HttpClient,
    request: HttpRequest,
    *,
    retry_config: RetryConfig | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> HttpResponse:
    """
    Execute a request, retrying transport failures with a fixed delay.

    Any response carrying a status code ends the loop, whatever the code. The
    returned response carries `meta["attempts"]` and `meta["elapsed"]`, the
    duration of the final attempt alone (retry sleeps excluded).
    """
    cfg = retry_config or build_default_retry_config()

    attempt = 0
    delay = cfg.initial_delay
    last_response: HttpResponse | None = None

    while attempt < cfg.max_attempts:
        if attempt:
            logger.info("Retry attempt %d for %s", attempt, request.url)
        started = clock()
        try:
            response = client.request(request)
        except Exception as exc:  # noqa: BLE001
            response = HttpResponse(
                ok=False,
                url=request.url,
                error_category=categorize_exception(exc).value,
                error_message=str(exc),
                error_type=exc.__class__.__name__,
            )
        response.meta["elapsed"] = clock() - started
        attempt += 1
        response.meta["attempts"] = attempt
        last_response = response

        if response.status_code is not None or attempt >= cfg.max_attempts:
            break
        time.sleep(delay)
        delay *= cfg.backoff_factor

    if last_response is not None:
        return last_response

    return HttpResponse(
        ok=False,
        url=request.url,
        error_category=ErrorCategory.TIMEOUT.value,
        error_message="No attempts allowed",
        meta={"attempts": 0},
    )
