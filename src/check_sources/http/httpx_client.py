# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import asyncio

import httpx

from ..config import CONNECT_TIMEOUT, RunConfig, load_run_config
from ..errors import ErrorCategory, categorize_exception
from .client import HttpClient
from .models import HttpRequest, HttpResponse


def build_timeout(timeout: float) -> httpx.Timeout:
    return httpx.Timeout(timeout, connect=min(CONNECT_TIMEOUT, timeout))


class HttpxClient(HttpClient):
    """
    Synchronous facade over a per-request httpx.AsyncClient.

    httpx timeouts apply to each connect/read/write step; the whole attempt is
    additionally bounded by `asyncio.wait_for`, so a server trickling bytes
    cannot outlive the configured timeout. Each request gets a fresh client,
    so probes never share a socket.

    TLS verification is disabled and redirects are not followed: any status line
    proves reachability. An explicit proxy from the config wins; otherwise httpx
    honours the ambient http_proxy/https_proxy variables.
    """

    def __init__(self, config: RunConfig | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config or load_run_config()
        self._transport = transport

    def _build_client(self, timeout: float) -> httpx.AsyncClient:
        options = {
            "follow_redirects": False,
            "timeout": build_timeout(timeout),
            "verify": False,
            "limits": httpx.Limits(max_connections=None, max_keepalive_connections=0),
        }
        if self._transport is not None:
            return httpx.AsyncClient(transport=self._transport, trust_env=False, **options)
        return httpx.AsyncClient(proxy=self.config.proxy_url, trust_env=True, **options)

    async def _send(self, request: HttpRequest, headers: dict[str, str], timeout: float) -> HttpResponse:
        async with self._build_client(timeout) as client:
            try:
                resp = await asyncio.wait_for(
                    client.request(request.method, request.url, headers=headers),
                    timeout=timeout,
                )
            except asyncio.TimeoutError:
                return HttpResponse(
                    ok=False,
                    url=request.url,
                    error_category=ErrorCategory.TIMEOUT.value,
                    error_message=f"No response within {timeout:g}s",
                    error_type="TimeoutError",
                )
        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=dict(resp.headers),
            url=str(resp.url),
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.config.user_agent)
        timeout = request.timeout if request.timeout is not None else self.config.timeout

        try:
            return asyncio.run(self._send(request, headers, timeout))
        except Exception as exc:  # noqa: BLE001
            category = categorize_exception(exc)
            return HttpResponse(
                ok=False,
                url=request.url,
                error_category=category.value,
                error_message=str(exc),
                error_type=type(exc).__name__,
            )

    def close(self) -> None:
        return None
