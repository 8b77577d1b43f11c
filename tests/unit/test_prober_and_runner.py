# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import threading
import time

import pytest

from check_sources.config import RunConfig
from check_sources.errors import ErrorCategory
from check_sources.http import HttpResponse, StubHttpClient, error_response, status_response
from check_sources.models import ProbeOutcome, ProbeResult, RunSummary, classify_status
from check_sources.scan.prober import SourceProber, status_token
from check_sources.scan.runner import ProtocolRunner
from check_sources.sources import HTTP_SOURCES, HTTPS_SOURCES, SOURCES, Protocol, build_url, sources_for


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr(time, "sleep", lambda _: None)


class FakeClock:
    def __init__(self, *ticks):
        self._ticks = list(ticks)

    def __call__(self) -> float:
        return self._ticks.pop(0)


@pytest.mark.parametrize("code", [200, 204, 301, 302, 399, 400, 404, 405, "200"])
def test_classify_status_reachable_codes(code):
    assert classify_status(code) is ProbeOutcome.OK


@pytest.mark.parametrize("code", [401, 403, 418, 500, 503, 199, "TIMEOUT", "CONNECTION_ERROR", None, ""])
def test_classify_status_failed_codes(code):
    assert classify_status(code) is ProbeOutcome.FAILED


def test_registry_lookup_by_protocol():
    assert sources_for(Protocol.HTTP) == HTTP_SOURCES
    assert sources_for("https") == HTTPS_SOURCES
    assert set(SOURCES) == {Protocol.HTTP, Protocol.HTTPS}
    assert "contracts.canonical.com" in HTTPS_SOURCES
    assert "contracts.canonical.com" not in HTTP_SOURCES
    assert "launchpad.net" in HTTP_SOURCES and "launchpad.net" in HTTPS_SOURCES
    assert build_url(Protocol.HTTPS, "launchpad.net") == "https://launchpad.net"


def test_status_token_prefers_code_then_category():
    assert status_token(status_response(404)) == "404"
    assert status_token(error_response(ErrorCategory.DNS_ERROR)) == "DNS_ERROR"
    assert status_token(HttpResponse(ok=False)) == "TIMEOUT"


def test_probe_success_reports_elapsed_and_user_agent():
    stub = StubHttpClient({"http://example.com": status_response(200)})
    prober = SourceProber(stub, RunConfig(user_agent="Probe/1.0"), clock=FakeClock(10.0, 10.25))

    result = prober.probe(Protocol.HTTP, "example.com")

    assert result == ProbeResult(url="http://example.com", outcome=ProbeOutcome.OK, status_code="200", elapsed=0.25)
    assert result.response_time == "0.250"
    request = stub.requests[0]
    assert request.method == "HEAD"
    assert request.headers["User-Agent"] == "Probe/1.0"
    assert request.timeout == 10


def test_probe_server_error_is_failed_without_retry():
    stub = StubHttpClient({"https://example.com": status_response(503)})
    result = SourceProber(stub, RunConfig(max_retries=3)).probe("https", "example.com")
    assert result.outcome is ProbeOutcome.FAILED
    assert result.status_code == "503"
    assert stub.calls_for("https://example.com") == 1


@pytest.mark.parametrize("retries", [2, 3, 5])
def test_probe_uses_last_attempt_after_timeouts(retries):
    url = "http://example.com"
    responses = [error_response(ErrorCategory.TIMEOUT)] * (retries - 1) + [status_response(200)]
    stub = StubHttpClient({url: responses})

    result = SourceProber(stub, RunConfig(max_retries=retries)).probe(Protocol.HTTP, "example.com")

    assert result.outcome is ProbeOutcome.OK
    assert result.status_code == "200"
    assert stub.calls_for(url) == retries


def test_elapsed_excludes_earlier_attempts():
    url = "http://example.com"
    stub = StubHttpClient({url: [error_response(ErrorCategory.TIMEOUT), status_response(302)]})
    prober = SourceProber(stub, RunConfig(max_retries=2), clock=FakeClock(0.0, 10.0, 11.0, 11.5))

    result = prober.probe(Protocol.HTTP, "example.com")

    assert result.status_code == "302"
    assert result.elapsed == pytest.approx(0.5)
    assert result.response_time == "0.500"


def test_failure_log_names_attempts(caplog):
    stub = StubHttpClient({"https://example.com": error_response(ErrorCategory.DNS_ERROR)})
    with caplog.at_level("INFO", logger="check_sources"):
        SourceProber(stub, RunConfig(max_retries=3)).probe(Protocol.HTTPS, "example.com")
    messages = [record.getMessage() for record in caplog.records]
    assert "Failed: https://example.com [DNS_ERROR] DNS resolution failure after 3 attempt(s)" in messages


def test_probe_connection_refused_exhausts_retries():
    url = "http://example.com"
    stub = StubHttpClient({url: error_response(ErrorCategory.CONNECTION_ERROR, "Connection refused")})

    result = SourceProber(stub, RunConfig(max_retries=2)).probe(Protocol.HTTP, "example.com")

    assert result.outcome is ProbeOutcome.FAILED
    assert result.status_code == "CONNECTION_ERROR"
    assert result.elapsed is None
    assert result.response_time == "N/A"
    assert stub.calls_for(url) == 2


def test_probe_never_raises_on_client_exceptions():
    class ExplodingClient:
        calls = 0

        def request(self, request):  # noqa: ARG002
            ExplodingClient.calls += 1
            raise RuntimeError("socket exploded")

    result = SourceProber(ExplodingClient(), RunConfig(max_retries=2)).probe(Protocol.HTTPS, "example.com")
    assert result.outcome is ProbeOutcome.FAILED
    assert result.status_code == "UNKNOWN_ERROR"
    assert ExplodingClient.calls == 2


def test_probe_logs_checking_line(caplog):
    stub = StubHttpClient({"http://example.com": status_response(200)})
    with caplog.at_level("INFO", logger="check_sources"):
        SourceProber(stub, RunConfig()).probe(Protocol.HTTP, "example.com")
    assert "Checking: http://example.com" in [record.getMessage() for record in caplog.records]


def _stub_for(hosts, protocol="http", failing=()):
    stub = StubHttpClient()
    for host in hosts:
        url = f"{protocol}://{host}"
        stub.add(url, error_response(ErrorCategory.CONNECTION_ERROR) if host in failing else status_response(200))
    return stub


def test_sequential_runner_keeps_list_order():
    hosts = ["a.example", "b.example", "c.example"]
    stub = _stub_for(hosts, failing={"b.example"})
    seen = []
    runner = ProtocolRunner(SourceProber(stub, RunConfig()), parallel=False)

    results = runner.run(Protocol.HTTP, hosts, on_result=seen.append)

    assert [r.url for r in results] == ["http://a.example", "http://b.example", "http://c.example"]
    assert seen == results
    assert [r.outcome for r in results] == [ProbeOutcome.OK, ProbeOutcome.FAILED, ProbeOutcome.OK]


def test_parallel_runner_probes_every_host_once():
    hosts = [f"host{i}.example" for i in range(12)]
    stub = _stub_for(hosts, protocol="https", failing={"host3.example", "host7.example"})
    summary = RunSummary()
    runner = ProtocolRunner(SourceProber(stub, RunConfig()), parallel=True)

    results = runner.run(Protocol.HTTPS, hosts, on_result=summary.record)

    assert sorted(r.url for r in results) == sorted(f"https://{h}" for h in hosts)
    assert all(stub.calls_for(f"https://{h}") == 1 for h in hosts)
    assert summary.success_count == 10
    assert summary.failure_count == 2
    assert summary.total == len(hosts)


def test_parallel_runner_starts_all_probes_before_waiting():
    hosts = ["a.example", "b.example", "c.example", "d.example"]
    barrier = threading.Barrier(len(hosts), timeout=5)

    class BarrierProber:
        def probe(self, protocol, host):
            barrier.wait()
            return ProbeResult(url=build_url(protocol, host), outcome=ProbeOutcome.OK, status_code="200", elapsed=0.0)

    results = ProtocolRunner(BarrierProber(), parallel=True).run(Protocol.HTTP, hosts)
    assert len(results) == len(hosts)


def test_runner_converts_unexpected_prober_errors():
    class BrokenProber:
        def probe(self, protocol, host):  # noqa: ARG002
            raise ValueError("bad host")

    for parallel in (False, True):
        results = ProtocolRunner(BrokenProber(), parallel=parallel).run(Protocol.HTTP, ["x.example"])
        assert results == [ProbeResult(url="http://x.example", outcome=ProbeOutcome.FAILED, status_code="UNKNOWN_ERROR")]


def test_runner_with_no_sources_returns_empty():
    assert ProtocolRunner(SourceProber(StubHttpClient(), RunConfig()), parallel=True).run(Protocol.HTTP, []) == []


def test_run_summary_concurrent_records_are_not_lost():
    summary = RunSummary()
    ok = ProbeResult(url="http://a", outcome=ProbeOutcome.OK, status_code="200", elapsed=0.1)
    failed = ProbeResult(url="http://b", outcome=ProbeOutcome.FAILED, status_code="TIMEOUT")

    def worker():
        for _ in range(500):
            summary.record(ok)
            summary.record(failed)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert summary.success_count == 4000
    assert summary.failure_count == 4000
    assert len(summary.results) == summary.total == 8000
    assert int(summary.exit_code) == 1
