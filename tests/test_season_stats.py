from datetime import datetime, timezone

import httpx

from upstream_stub import OPENF1, driver, position, result, session
from utils.rate_limiter import FixedDelayLimiter
from utils.season_stats import (
    constructor_wins,
    driver_race_positions,
    driver_season_stats,
    grid_positions,
)
from upstream_pydantic_models.f1_position import F1PositionSample

SESSIONS = f"{OPENF1}/sessions"
RESULTS = f"{OPENF1}/session_result"
DRIVERS = f"{OPENF1}/drivers"
POSITIONS = f"{OPENF1}/position"

RACE_SESSIONS = {"year": 2025, "session_name": "Race"}


def _register_season(upstream):
    # Upstream order is not chronological on purpose
    upstream.add(SESSIONS, params=RACE_SESSIONS, json=[
        session(3, "Imola", "2025-05-18T13:00:00+00:00"),
        session(1, "Bahrain", "2025-04-13T15:00:00+00:00"),
        session(2, "Miami", "2025-05-04T20:00:00+00:00"),
        session(5, "Jeddah", "2025-04-20T17:00:00+00:00"),
        session(4, "Monaco", "2025-06-08T13:00:00+00:00"),
    ])

    upstream.add(RESULTS, params={"session_key": 1}, json=[
        result(1, 1, session_key=1),
        result(44, 2, session_key=1),
        result(16, None, session_key=1, dnf=True),
    ])
    upstream.add(DRIVERS, params={"session_key": 1, "driver_number": 1},
                 json=[driver(1, "VER", team="Team A", session_key=1)])
    upstream.add(DRIVERS, params={"session_key": 1}, json=[
        driver(1, "VER", team="Team A", session_key=1),
        driver(44, "HAM", team="Team B", session_key=1),
        driver(16, "LEC", team="Team B", session_key=1),
    ])
    upstream.add(POSITIONS, params={"session_key": 1}, json=[
        position(1, 1, "2025-04-13T15:40:00+00:00", session_key=1),
        position(1, 2, "2025-04-13T14:03:00+00:00", session_key=1),
        position(44, 1, "2025-04-13T14:03:00+00:00", session_key=1),
        position(16, None, "2025-04-13T14:02:00+00:00", session_key=1),
        position(16, 3, "2025-04-13T14:03:00+00:00", session_key=1),
    ])

    # Miami: results endpoint is down, everything else would answer
    upstream.add(RESULTS, params={"session_key": 2}, status_code=500, json={"error": "boom"})
    upstream.add(DRIVERS, params={"session_key": 2}, json=[driver(4, "NOR", session_key=2)])
    upstream.add(POSITIONS, params={"session_key": 2}, json=[])

    # Jeddah: no classification published
    upstream.add(RESULTS, params={"session_key": 5}, json=[])
    upstream.add(DRIVERS, params={"session_key": 5}, json=[driver(4, "NOR", session_key=5)])

    upstream.add(RESULTS, params={"session_key": 3}, json=[
        result(1, 2, session_key=3),
        result(44, None, session_key=3, dsq=True),
        result(12, 1, session_key=3),
        result(99, 3, session_key=3),
    ])
    upstream.add(DRIVERS, params={"session_key": 3, "driver_number": 12},
                 json=[driver(12, "ANT", team="Team B", session_key=3)])
    upstream.add(DRIVERS, params={"session_key": 3}, json=[
        driver(1, "VER", team="Team A", session_key=3),
        driver(44, "HAM", team="Team B", session_key=3),
        driver(12, "ANT", team="Team B", session_key=3),
    ])
    upstream.add(POSITIONS, params={"session_key": 3}, json=[
        position(1, 1, "2025-05-18T13:03:00+00:00", session_key=3),
        position(44, 5, "2025-05-18T13:03:00+00:00", session_key=3),
    ])


def test_grid_positions_take_earliest_valid_sample():
    samples = [
        F1PositionSample(**position(1, 1, "2025-04-13T15:40:00+00:00")),
        F1PositionSample(**position(1, 2, "2025-04-13T14:03:00+00:00")),
        F1PositionSample(**position(16, None, "2025-04-13T14:02:00+00:00")),
        F1PositionSample(**position(16, 3, "2025-04-13T14:03:00+00:00")),
    ]
    assert grid_positions(samples) == {1: 2, 16: 3}


def test_driver_season_stats(upstream, now, no_delay):
    _register_season(upstream)

    data = upstream.run(driver_season_stats, now=now, limiter=no_delay)

    assert data.season == 2025
    by_acronym = {s.driver_acronym: s for s in data.stats}
    assert [s.driver_acronym for s in data.stats] == ["ANT", "HAM", "LEC", "VER"]

    assert by_acronym["VER"].total_races == 2
    assert by_acronym["VER"].dnf_count == 0
    assert by_acronym["VER"].average_grid_position == 1.5

    assert by_acronym["HAM"].total_races == 2
    assert by_acronym["HAM"].dnf_count == 1
    assert by_acronym["HAM"].average_grid_position == 3.0

    assert by_acronym["LEC"].total_races == 1
    assert by_acronym["LEC"].dnf_count == 1

    assert by_acronym["ANT"].total_races == 1
    assert by_acronym["ANT"].average_grid_position is None


def test_failed_session_is_skipped_not_fatal(upstream, now, no_delay):
    _register_season(upstream)

    data = upstream.run(driver_season_stats, now=now, limiter=no_delay)

    # NOR only appears in the sessions that failed or had no results
    assert "NOR" not in {s.driver_acronym for s in data.stats}
    # Imola comes after the failing Miami session upstream and is still counted
    assert {s.driver_acronym: s.total_races for s in data.stats}["VER"] == 2


def test_limiter_paces_every_completed_session(upstream, now):
    _register_season(upstream)
    limiter = FixedDelayLimiter(0)

    upstream.run(driver_season_stats, now=now, limiter=limiter)
    assert limiter.calls == 4


def test_driver_season_stats_without_completed_races(upstream, no_delay):
    preseason = datetime(2025, 2, 1, tzinfo=timezone.utc)
    _register_season(upstream)

    data = upstream.run(driver_season_stats, now=preseason, limiter=no_delay)
    assert data.season == 2025
    assert data.stats == []


def test_constructor_wins_team_wins_both(upstream, now, no_delay):
    upstream.add(SESSIONS, params=RACE_SESSIONS, json=[
        session(1, "Bahrain", "2025-04-13T15:00:00+00:00"),
        session(2, "Miami", "2025-05-04T20:00:00+00:00"),
    ])
    for key, winner in ((1, 1), (2, 81)):
        upstream.add(RESULTS, params={"session_key": key}, json=[
            result(4, 2, session_key=key),
            result(winner, 1, session_key=key),
        ])
        upstream.add(DRIVERS, params={"session_key": key, "driver_number": winner},
                     json=[driver(winner, "WIN", team="Team A", session_key=key)])

    data = upstream.run(constructor_wins, now=now, limiter=no_delay)
    assert [(w.team, w.wins) for w in data.wins] == [("Team A", 2)]
    assert data.wins[0].team_color == "000000"


def test_constructor_wins_sorted_and_tolerant(upstream, now, no_delay):
    _register_season(upstream)

    data = upstream.run(constructor_wins, now=now, limiter=no_delay)

    # Bahrain -> Team A, Imola -> Team B; Miami failed and Jeddah had no winner
    assert sorted((w.team, w.wins) for w in data.wins) == [("Team A", 1), ("Team B", 1)]


def test_constructor_wins_orders_by_win_count(upstream, now, no_delay):
    upstream.add(SESSIONS, params=RACE_SESSIONS, json=[
        session(1, "Bahrain", "2025-04-13T15:00:00+00:00"),
        session(2, "Miami", "2025-05-04T20:00:00+00:00"),
        session(3, "Imola", "2025-05-18T13:00:00+00:00"),
    ])
    winners = {1: ("LEC", "Ferrari"), 2: ("NOR", "McLaren"), 3: ("PIA", "McLaren")}
    for key, (acronym, team) in winners.items():
        upstream.add(RESULTS, params={"session_key": key}, json=[result(key * 10, 1, session_key=key)])
        upstream.add(DRIVERS, params={"session_key": key, "driver_number": key * 10},
                     json=[driver(key * 10, acronym, team=team, session_key=key)])

    data = upstream.run(constructor_wins, now=now, limiter=no_delay)
    assert [(w.team, w.wins, w.team_color) for w in data.wins] == [
        ("McLaren", 2, "FF8000"),
        ("Ferrari", 1, "E80020"),
    ]


def test_driver_race_positions_alignment(upstream, now, no_delay):
    _register_season(upstream)

    data = upstream.run(driver_race_positions, now=now, limiter=no_delay)

    assert data.races == ["Bahrain", "Imola"]
    positions = {d.driver_acronym: d.positions for d in data.drivers}
    assert positions == {
        "VER": [1, 2],
        "HAM": [2, None],
        "LEC": [None, None],
        "ANT": [None, 1],
    }
    for entry in data.drivers:
        assert len(entry.positions) == len(data.races)


def test_driver_race_positions_failed_first_race_does_not_shift(upstream, now, no_delay):
    upstream.add(SESSIONS, params=RACE_SESSIONS, json=[
        session(1, "Bahrain", "2025-04-13T15:00:00+00:00"),
        session(2, "Miami", "2025-05-04T20:00:00+00:00"),
    ])
    upstream.add(RESULTS, params={"session_key": 1}, error=httpx.ConnectError)
    upstream.add(RESULTS, params={"session_key": 2}, json=[result(1, 1, session_key=2)])
    upstream.add(DRIVERS, params={"session_key": 2}, json=[driver(1, "VER", session_key=2)])

    data = upstream.run(driver_race_positions, now=now, limiter=no_delay)
    assert data.races == ["Miami"]
    assert data.drivers[0].positions == [1]


def test_season_calls_do_not_share_state(upstream, now, no_delay):
    _register_season(upstream)
    first = upstream.run(driver_race_positions, now=now, limiter=no_delay)
    second = upstream.run(driver_race_positions, now=now, limiter=FixedDelayLimiter(0))
    assert first == second


def test_roster_entries_without_acronym_are_left_out(upstream, now, no_delay):
    unnamed = driver(7, "XXX", session_key=1)
    unnamed.update(full_name=None, name_acronym=None)
    upstream.add(SESSIONS, params=RACE_SESSIONS, json=[session(1, "Bahrain", "2025-04-13T15:00:00+00:00")])
    upstream.add(RESULTS, params={"session_key": 1}, json=[
        result(1, 1, session_key=1),
        result(7, 2, session_key=1),
    ])
    upstream.add(DRIVERS, params={"session_key": 1}, json=[driver(1, "VER", session_key=1), unnamed])

    stats = upstream.run(driver_season_stats, now=now, limiter=no_delay)
    assert [s.driver_acronym for s in stats.stats] == ["VER"]

    trend = upstream.run(driver_race_positions, now=now, limiter=no_delay)
    assert [(d.driver_acronym, d.positions) for d in trend.drivers] == [("VER", [1])]
