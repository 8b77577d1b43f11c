# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Render probe results and the run summary as text, JSON lines or CSV."""

from __future__ import annotations

import csv
import io
import json
import sys
from typing import TextIO

from ..config import OutputFormat
from ..models import ProbeResult, RunSummary
from ..sources import Protocol

GREEN = "\033[0;32m"
RED = "\033[0;31m"
YELLOW = "\033[0;33m"
BLUE = "\033[0;34m"
RESET = "\033[0m"

URL_COLUMN_WIDTH = 50
CSV_HEADER = "URL,Status,Code,ResponseTime"
SECTION_WIDTH = 72


def _paint(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{RESET}" if enabled else text


def format_text(result: ProbeResult, *, color: bool = False) -> str:
    if result.ok:
        tag = _paint(f"[{result.status_code}] OK ({result.response_time}s)", GREEN, color)
    else:
        tag = _paint(f"[{result.status_code}] FAILED", RED, color)
    return f"{result.url:<{URL_COLUMN_WIDTH}} {tag}"


def format_json(result: ProbeResult) -> str:
    return json.dumps(result.to_dict())


def format_csv(result: ProbeResult) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="")
    writer.writerow([result.url, result.to_dict()["status"], result.status_code, result.response_time])
    return buffer.getvalue()


def format_result(result: ProbeResult, output_format: OutputFormat | str, *, color: bool = False) -> str:
    fmt = OutputFormat(output_format)
    if fmt is OutputFormat.JSON:
        return format_json(result)
    if fmt is OutputFormat.CSV:
        return format_csv(result)
    return format_text(result, color=color)


def format_section(protocol: Protocol | str) -> str:
    title = f"[ Checking {Protocol(protocol).value.upper()} sources ]"
    return title + "-" * max(0, SECTION_WIDTH - len(title))


class Reporter:
    """
    Writes one line per probe result to `stream`.

    Only text mode prints section headers and the closing summary; JSON and
    CSV output stay machine-readable with one record per line.
    """

    def __init__(
        self,
        output_format: OutputFormat | str = OutputFormat.TEXT,
        *,
        stream: TextIO | None = None,
        color: bool | None = None,
    ):
        self.output_format = OutputFormat(output_format)
        self.stream = stream if stream is not None else sys.stdout
        if color is None:
            isatty = getattr(self.stream, "isatty", None)
            color = bool(isatty and isatty())
        self.color = color

    @property
    def is_text(self) -> bool:
        return self.output_format is OutputFormat.TEXT

    def _write(self, line: str = "") -> None:
        self.stream.write(line + "\n")
        self.stream.flush()

    def start(self) -> None:
        if self.output_format is OutputFormat.CSV:
            self._write(CSV_HEADER)

    def section(self, protocol: Protocol | str) -> None:
        if self.is_text:
            self._write()
            self._write(format_section(protocol))

    def report(self, result: ProbeResult) -> None:
        self._write(format_result(result, self.output_format, color=self.color))

    def notice(self, message: str) -> None:
        """Free-form text line; suppressed outside text mode."""
        if self.is_text:
            self._write(message)

    def summary(self, summary: RunSummary) -> None:
        if not self.is_text:
            return
        self._write()
        self._write(_paint("=== SUMMARY ===", BLUE, self.color))
        self._write(f"Total sources checked: {summary.total}")
        self._write(_paint(f"Successful: {summary.success_count}", GREEN, self.color))
        self._write(_paint(f"Failed: {summary.failure_count}", RED, self.color))

        failed = summary.failed_results
        if failed:
            self._write()
            self._write(_paint("Failed sources:", YELLOW, self.color))
            for result in failed:
                self._write(f"  {result.url} [{result.status_code}]")
