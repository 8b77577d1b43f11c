# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient implementations for tests and dry runs."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import replace

from ..errors import ErrorCategory
from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests.

    Each URL maps to one response, or to a sequence consumed one per request
    (the last entry repeats). Unknown URLs fail with CONNECTION_ERROR.
    """

    def __init__(self, responses: dict[str, HttpResponse | Sequence[HttpResponse]] | None = None):
        self._responses: dict[str, list[HttpResponse]] = {}
        self._calls: dict[str, int] = {}
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []
        self.closed = False
        for url, response in (responses or {}).items():
            self.add(url, response)

    def add(self, url: str, response: HttpResponse | Sequence[HttpResponse]) -> None:
        if isinstance(response, HttpResponse):
            self._responses[url] = [response]
        else:
            self._responses[url] = list(response)

    def calls_for(self, url: str) -> int:
        with self._lock:
            return self._calls.get(url, 0)

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
            index = self._calls.get(request.url, 0)
            self._calls[request.url] = index + 1
            queued = self._responses.get(request.url)
        if not queued:
            return HttpResponse(
                ok=False,
                url=request.url,
                error_category=ErrorCategory.CONNECTION_ERROR.value,
                error_message="No stubbed response configured",
            )
        response = queued[min(index, len(queued) - 1)]
        return replace(response, url=response.url or request.url, meta=dict(response.meta))

    def close(self) -> None:
        self.closed = True


def status_response(code: int) -> HttpResponse:
    """A response that received a status line with `code`."""
    return HttpResponse(ok=True, status_code=code)


def error_response(category: ErrorCategory | str, message: str = "") -> HttpResponse:
    """A transport failure of the given category."""
    return HttpResponse(ok=False, error_category=ErrorCategory(category).value, error_message=message or None)


__all__ = ["StubHttpClient", "error_response", "status_response"]
