# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe result models and the reachability classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

UNAVAILABLE = "N/A"

# 400/404/405 still prove an HTTP server answered on the other end.
ACCEPTED_CLIENT_ERRORS = frozenset({400, 404, 405})


class ProbeOutcome(str, Enum):
    OK = "OK"
    FAILED = "FAILED"


def classify_status(code: int | str | None) -> ProbeOutcome:
    """Return OK for 2xx, 3xx, 400, 404 and 405; FAILED for anything else."""
    try:
        numeric = int(str(code))
    except (TypeError, ValueError):
        return ProbeOutcome.FAILED
    if 200 <= numeric <= 399 or numeric in ACCEPTED_CLIENT_ERRORS:
        return ProbeOutcome.OK
    return ProbeOutcome.FAILED


@dataclass(frozen=True)
class ProbeResult:
    url: str
    outcome: ProbeOutcome
    status_code: str
    elapsed: float | None = None

    @property
    def ok(self) -> bool:
        return self.outcome == ProbeOutcome.OK

    @property
    def response_time(self) -> str:
        if self.elapsed is None:
            return UNAVAILABLE
        return f"{self.elapsed:.3f}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "status": ProbeOutcome(self.outcome).value,
            "code": self.status_code,
            "response_time": self.response_time,
        }
