# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for check-sources."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidConfigError
from .version import __version__

DEFAULT_USER_AGENT = f"check_sources/{__version__}"
DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRIES = 2
CONNECT_TIMEOUT = 5.0
RETRY_DELAY = 1.0

# Used with fullmatch; a trailing newline is not accepted.
PROXY_URL_RE = re.compile(r"https?://[^/\s]+:[0-9]+/?")


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    CSV = "csv"


def is_valid_proxy_url(value: str | None) -> bool:
    return bool(value) and PROXY_URL_RE.fullmatch(str(value)) is not None


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _format_env(name: str, default: OutputFormat) -> OutputFormat:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return OutputFormat(value.strip().lower())
    except ValueError:
        return default


@dataclass(frozen=True)
class RunConfig:
    """Settings for one run; read-only once built."""

    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_RETRIES
    parallel: bool = False
    output_format: OutputFormat = OutputFormat.TEXT
    log_file: str | None = None
    user_agent: str = DEFAULT_USER_AGENT
    proxy_url: str | None = None
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise InvalidConfigError(f"timeout must be greater than 0, got {self.timeout!r}")
        if self.max_retries < 1:
            raise InvalidConfigError(f"retries must be at least 1, got {self.max_retries!r}")
        try:
            object.__setattr__(self, "output_format", OutputFormat(self.output_format))
        except ValueError:
            raise InvalidConfigError(f"unknown output format: {self.output_format!r}") from None
        if self.proxy_url is not None and not is_valid_proxy_url(self.proxy_url):
            raise InvalidConfigError(f"Invalid proxy URL format: {self.proxy_url}")

    @property
    def connect_timeout(self) -> float:
        return min(CONNECT_TIMEOUT, self.timeout)

    @classmethod
    def from_env(cls) -> RunConfig:
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("CHECK_SOURCES_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        max_retries = _int_env("CHECK_SOURCES_RETRIES", cls.max_retries)
        if max_retries < 1:
            max_retries = cls.max_retries
        return cls(
            timeout=timeout,
            max_retries=max_retries,
            parallel=_bool_env("CHECK_SOURCES_PARALLEL", cls.parallel),
            output_format=_format_env("CHECK_SOURCES_FORMAT", cls.output_format),
            log_file=os.getenv("CHECK_SOURCES_LOG_FILE") or None,
            user_agent=os.getenv("CHECK_SOURCES_USER_AGENT", cls.user_agent),
        )


def load_run_config() -> RunConfig:
    """Load run settings from environment with sensible defaults."""
    return RunConfig.from_env()
