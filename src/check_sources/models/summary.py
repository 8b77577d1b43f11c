# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run-level aggregation of probe results."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from ..errors import ExitCode
from .probe import ProbeResult


@dataclass
class RunSummary:
    """
    Counts and ordered results for one run.

    `record()` may be called from several threads; the counters and the result
    list are updated together under one lock.
    """

    success_count: int = 0
    failure_count: int = 0
    results: list[ProbeResult] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    def record(self, result: ProbeResult) -> None:
        with self._lock:
            self.results.append(result)
            if result.ok:
                self.success_count += 1
            else:
                self.failure_count += 1

    @property
    def total(self) -> int:
        return self.success_count + self.failure_count

    @property
    def failed_results(self) -> list[ProbeResult]:
        with self._lock:
            return [result for result in self.results if not result.ok]

    @property
    def exit_code(self) -> ExitCode:
        return ExitCode.OK if self.failure_count == 0 else ExitCode.FAILURE
