import httpx
import pytest

from upstream_stub import OPENF1, result
from utils import openf1_client
from utils.errors import UpstreamFetchError

RESULTS = f"{OPENF1}/session_result"


def test_no_results_found_is_an_empty_list(upstream):
    assert upstream.run(openf1_client.fetch_session_results, session_key=1) == []


def test_results_are_validated(upstream):
    upstream.add(RESULTS, params={"session_key": 1}, json=[result(1, 1), result(44, None, dnf=True)])

    results = upstream.run(openf1_client.fetch_session_results, session_key=1)
    assert [(r.driver_number, r.position, r.dnf) for r in results] == [(1, 1, False), (44, None, True)]


@pytest.mark.parametrize("route", [
    {"status_code": 500, "json": {"error": "internal"}},
    {"error": httpx.ConnectError},
    {"content": b"<html>gateway timeout</html>"},
    {"json": {"detail": "unexpected object"}},
    {"json": [{"driver_number": "not-a-number", "session_key": 1}]},
])
def test_upstream_failures_become_upstream_fetch_error(upstream, route):
    upstream.add(RESULTS, **route)
    with pytest.raises(UpstreamFetchError) as excinfo:
        upstream.run(openf1_client.fetch_session_results, session_key=1)
    assert excinfo.value.url.endswith("/session_result")


def test_session_name_filter_is_optional(upstream):
    upstream.run(openf1_client.fetch_sessions, year=2025)
    upstream.run(openf1_client.fetch_sessions, year=2025, session_name="Race")

    first, second = upstream.requests
    assert "session_name" not in first.url.params
    assert second.url.params["session_name"] == "Race"


def test_driver_number_filter(upstream):
    upstream.run(openf1_client.fetch_drivers, session_key=9, driver_number=44)
    assert upstream.requests[0].url.params["driver_number"] == "44"
