# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run the prober over every host of one protocol, sequentially or concurrently."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

from ..errors import ErrorCategory
from ..models import ProbeOutcome, ProbeResult
from ..sources import Protocol, build_url
from .prober import SourceProber

logger = logging.getLogger(__name__)

ResultCallback = Callable[[ProbeResult], None]


class ProtocolRunner:
    """
    Drives a SourceProber over a host list.

    Sequential mode keeps list order. Parallel mode starts one probe per host
    before waiting on any of them and hands results over in arrival order;
    `on_result` is always invoked from the calling thread.
    """

    def __init__(self, prober: SourceProber, *, parallel: bool = False):
        self.prober = prober
        self.parallel = parallel

    def run(
        self,
        protocol: Protocol | str,
        sources: Iterable[str],
        on_result: ResultCallback | None = None,
    ) -> list[ProbeResult]:
        protocol = Protocol(protocol)
        hosts = list(sources)
        if not hosts:
            return []
        if self.parallel:
            return self._run_parallel(protocol, hosts, on_result)
        return self._run_sequential(protocol, hosts, on_result)

    def _run_sequential(
        self,
        protocol: Protocol,
        hosts: list[str],
        on_result: ResultCallback | None,
    ) -> list[ProbeResult]:
        results: list[ProbeResult] = []
        for host in hosts:
            result = self._probe_safely(protocol, host)
            results.append(result)
            if on_result is not None:
                on_result(result)
        return results

    def _run_parallel(
        self,
        protocol: Protocol,
        hosts: list[str],
        on_result: ResultCallback | None,
    ) -> list[ProbeResult]:
        results: list[ProbeResult] = []
        with ThreadPoolExecutor(max_workers=len(hosts), thread_name_prefix=f"probe-{protocol.value}") as pool:
            futures = {pool.submit(self._probe_safely, protocol, host): host for host in hosts}
            for future in as_completed(futures):
                result = future.result()
                results.append(result)
                if on_result is not None:
                    on_result(result)
        return results

    def _probe_safely(self, protocol: Protocol, host: str) -> ProbeResult:
        try:
            return self.prober.probe(protocol, host)
        except Exception:  # noqa: BLE001
            logger.exception("Probe for %s raised unexpectedly", host)
            return ProbeResult(
                url=build_url(protocol, host),
                outcome=ProbeOutcome.FAILED,
                status_code=ErrorCategory.UNKNOWN_ERROR.value,
            )
