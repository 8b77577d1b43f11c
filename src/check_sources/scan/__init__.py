# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probing, fan-out and reporting for source checks."""

from .prober import SourceProber, status_token
from .report import Reporter, format_result
from .runner import ProtocolRunner

__all__ = ["ProtocolRunner", "Reporter", "SourceProber", "format_result", "status_token"]
