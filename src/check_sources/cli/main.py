from __future__ import annotations

"""
check-sources, connectivity pre-flight checks for infrastructure deployments.
Copyright (C) 2025  Theori Inc.

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as published
by the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

"""check-sources CLI."""

import argparse
import dataclasses
import importlib.util
import logging
import sys
from typing import NoReturn

from ..config import PROXY_URL_RE, OutputFormat, RunConfig, load_run_config
from ..errors import ExitCode, MissingDependencyError
from ..log import setup_logging
from ..runtime import SourceChecker
from ..version import __version__

logger = logging.getLogger(__name__)

REQUIRED_MODULES = ("httpx",)

DESCRIPTION = (
    "Checks access to Canonical package repositories as well as any third party "
    "resources required by infrastructure deployment."
)
EPILOG = (
    "exit codes: 0 all sources reachable, 1 at least one source failed, "
    "2 invalid arguments or missing dependency"
)


class _HelpOnErrorParser(argparse.ArgumentParser):
    """Print the full help, not just usage, before bailing out on bad input."""

    def error(self, message: str) -> NoReturn:
        self.print_help(sys.stderr)
        self.exit(ExitCode.USAGE, f"\nERROR: {message}\n")


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from None
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return parsed


def _proxy_url(value: str) -> str:
    if not PROXY_URL_RE.fullmatch(value):
        raise argparse.ArgumentTypeError(
            f"Invalid proxy URL format: {value} (expected http://host:port or https://host:port)"
        )
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = _HelpOnErrorParser(prog="check-sources", description=DESCRIPTION, epilog=EPILOG)
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-V", "--verbose", action="store_true", help="Log each check and retry to stderr")
    parser.add_argument("-t", "--timeout", type=_positive_int, metavar="SECONDS", help="Per-request timeout (default: 10)")
    parser.add_argument("-r", "--retries", type=_positive_int, metavar="COUNT", help="Attempts per source (default: 2)")
    parser.add_argument("-p", "--parallel", action="store_true", default=None, help="Check all sources of a protocol concurrently")
    parser.add_argument(
        "-f",
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        help="Output format (default: text)",
    )
    parser.add_argument("-l", "--log", metavar="FILE", help="Append timestamped log lines to FILE")
    parser.add_argument("-u", "--user-agent", metavar="STRING", help="User-Agent header to send")
    parser.add_argument("proxy", nargs="?", type=_proxy_url, help="Forward proxy, e.g. http://proxy.example:3128")
    return parser


def build_config(args: argparse.Namespace, base: RunConfig | None = None) -> RunConfig:
    """Layer CLI flags over the environment-backed defaults."""
    config = base or load_run_config()
    overrides = {
        "timeout": float(args.timeout) if args.timeout is not None else None,
        "max_retries": args.retries,
        "parallel": args.parallel,
        "output_format": OutputFormat(args.format) if args.format else None,
        "log_file": args.log,
        "user_agent": args.user_agent,
        "proxy_url": args.proxy,
        "verbose": args.verbose or None,
    }
    return dataclasses.replace(config, **{key: value for key, value in overrides.items() if value is not None})


def check_dependencies() -> None:
    missing = [name for name in REQUIRED_MODULES if importlib.util.find_spec(name) is None]
    if missing:
        raise MissingDependencyError(f"Missing required dependencies: {', '.join(missing)}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        check_dependencies()
    except MissingDependencyError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        print("Please install the missing dependencies and try again.", file=sys.stderr)
        return ExitCode.USAGE

    config = build_config(args)

    try:
        setup_logging(verbose=config.verbose, log_file=config.log_file)
    except OSError as exc:
        print(f"ERROR: cannot open log file {config.log_file}: {exc}", file=sys.stderr)
        return ExitCode.FAILURE

    try:
        with SourceChecker(config) as checker:
            summary = checker.run()
    except Exception:  # noqa: BLE001
        logger.exception("Source check aborted")
        return ExitCode.FAILURE

    return int(summary.exit_code)


if __name__ == "__main__":
    raise SystemExit(main())
