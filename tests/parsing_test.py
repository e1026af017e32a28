import pytest

from f1hub.core.errors import MalformedPayloadError
from f1hub.services import parsing
from tests.factories import (
    constructor_standings_payload,
    driver_standings_payload,
    empty_results_payload,
    result_row,
    results_payload,
)


def test_last_race_rows_are_normalized():
    race = parsing.parse_last_race(results_payload(round_no=5))
    assert race.season == 2026
    assert race.round == 5
    assert race.race_name == "Miami Grand Prix"
    assert race.circuit == "Miami International Autodrome"
    assert len(race.results) == 20

    winner = race.results[0]
    assert winner.position == 1 and isinstance(winner.position, int)
    assert winner.driver_code == "VER"
    assert winner.driver_name == "Max Verstappen"
    assert winner.constructor == "Red Bull"
    assert winner.grid == 20
    assert winner.laps == 57
    assert winner.points == 25.0
    assert winner.time == "1:31:44.742"
    assert winner.fastest_lap == "1:32.608"


def test_retired_rows_have_no_time():
    race = parsing.parse_last_race(results_payload())
    dnf = race.results[-1]
    assert dnf.status == "Retired"
    assert dnf.time is None
    assert dnf.fastest_lap is None
    assert all(isinstance(r.position, int) for r in race.results)


def test_empty_race_table_means_nothing_new():
    assert parsing.parse_last_race(empty_results_payload()) is None


def test_missing_envelope_is_malformed():
    with pytest.raises(MalformedPayloadError) as exc:
        parsing.parse_last_race({"unexpected": True})
    assert exc.value.source == "results"


def test_non_numeric_points_is_malformed():
    row = result_row(1, "VER", "Max", "Verstappen", "Red Bull")
    row["points"] = "lots"
    with pytest.raises(MalformedPayloadError):
        parsing.parse_last_race(results_payload(rows=[row]))


def test_driver_standings():
    doc = parsing.parse_driver_standings(driver_standings_payload(round_no=5))
    assert doc.round == 5
    assert doc.standings[0].driver_name == "Max Verstappen"
    assert doc.standings[0].constructor == "Red Bull"
    assert doc.standings[0].wins == 1
    assert doc.standings[0].points == 100.0


def test_driver_without_constructor_gets_placeholder():
    payload = driver_standings_payload()
    payload["MRData"]["StandingsTable"]["StandingsLists"][0]["DriverStandings"][0]["Constructors"] = []
    doc = parsing.parse_driver_standings(payload)
    assert doc.standings[0].constructor == "—"


def test_constructor_standings():
    doc = parsing.parse_constructor_standings(constructor_standings_payload(round_no=4))
    assert doc.round == 4
    assert [e.name for e in doc.standings] == ["McLaren", "Ferrari", "Red Bull", "Mercedes"]
    assert doc.standings[0].wins == 3


def test_no_standings_lists():
    payload = {"MRData": {"StandingsTable": {"season": "2026", "StandingsLists": []}}}
    assert parsing.parse_driver_standings(payload) is None
    assert parsing.parse_constructor_standings(payload) is None
