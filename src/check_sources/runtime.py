# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade that checks every registered source under both protocols."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from contextlib import suppress
from typing import TextIO

from .config import RunConfig, load_run_config
from .http.client import HttpClient, create_default_http_client
from .models import ProbeResult, RunSummary
from .scan.prober import SourceProber
from .scan.report import Reporter
from .scan.runner import ProtocolRunner
from .sources import SOURCES, Protocol, sources_for

logger = logging.getLogger(__name__)


class SourceChecker:
    """
    Convenience wrapper that wires one HTTP client through prober, runner and reporter.

    Every call to `run()` starts from an empty RunSummary.
    """

    def __init__(
        self,
        config: RunConfig | None = None,
        *,
        http_client: HttpClient | None = None,
        stream: TextIO | None = None,
        sources: Mapping[Protocol, Sequence[str]] | None = None,
        color: bool | None = None,
    ):
        self.config = config or load_run_config()
        self.http_client = http_client or create_default_http_client(self.config)
        self.sources = sources if sources is not None else SOURCES
        self.prober = SourceProber(self.http_client, self.config)
        self.runner = ProtocolRunner(self.prober, parallel=self.config.parallel)
        self.reporter = Reporter(self.config.output_format, stream=stream, color=color)

    def run(self) -> RunSummary:
        summary = RunSummary()

        def handle(result: ProbeResult) -> None:
            self.reporter.report(result)
            summary.record(result)

        if self.config.proxy_url:
            self.reporter.notice(f"Checking sources against {self.config.proxy_url} proxy.")
            logger.info("Using proxy %s", self.config.proxy_url)

        self.reporter.start()
        for protocol in Protocol:
            hosts = sources_for(protocol, self.sources)
            if not hosts:
                continue
            self.reporter.section(protocol)
            self.runner.run(protocol, hosts, on_result=handle)

        logger.info("Checked %d sources: %d ok, %d failed", summary.total, summary.success_count, summary.failure_count)
        self.reporter.summary(summary)
        return summary

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> SourceChecker:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
