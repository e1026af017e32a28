"""Turn raw Jolpica/Ergast JSON into fixed-shape records.

Nothing outside this module reads provider payloads directly. Required
fields that are missing, or numeric fields that do not parse, raise
MalformedPayloadError naming the source; optional fields default to None.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError

from f1hub.core.errors import MalformedPayloadError
from f1hub.schemas.documents import (
    ConstructorStanding,
    ConstructorStandingsDoc,
    DriverStanding,
    DriverStandingsDoc,
    RaceResultDoc,
    ResultRow,
)

RESULTS = "results"
DRIVER_STANDINGS = "driverStandings"
CONSTRUCTOR_STANDINGS = "constructorStandings"


def _require(obj: Any, key: str, source: str, where: str) -> Any:
    if not isinstance(obj, dict) or obj.get(key) is None:
        raise MalformedPayloadError(source, f"missing {where}.{key}")
    return obj[key]


def _opt(obj: Any, *path: str) -> Optional[Any]:
    for key in path:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def _int(val: Any, source: str, field: str) -> int:
    try:
        return int(val)
    except (TypeError, ValueError):
        raise MalformedPayloadError(source, f"{field} is not an integer: {val!r}")


def _float(val: Any, source: str, field: str) -> float:
    try:
        return float(val)
    except (TypeError, ValueError):
        raise MalformedPayloadError(source, f"{field} is not a number: {val!r}")


def _build(model, source: str, **fields):
    try:
        return model(**fields)
    except ValidationError as e:
        raise MalformedPayloadError(source, str(e))


def _full_name(driver: dict, source: str) -> str:
    given = _require(driver, "givenName", source, "Driver")
    family = _require(driver, "familyName", source, "Driver")
    return f"{given} {family}"


def _table(payload: Any, table: str, source: str) -> dict:
    mr = _require(payload, "MRData", source, "payload")
    return _require(mr, table, source, "MRData")


def parse_last_race(payload: Any) -> Optional[RaceResultDoc]:
    """Results of the single race in a ``/last/results/`` response, or None if empty."""
    source = RESULTS
    races = _require(_table(payload, "RaceTable", source), "Races", source, "RaceTable")
    if not races:
        return None
    race = races[0]

    rows = []
    for r in race.get("Results") or []:
        driver = _require(r, "Driver", source, "Result")
        constructor = _require(r, "Constructor", source, "Result")
        rows.append(_build(
            ResultRow, source,
            position=_int(_require(r, "position", source, "Result"), source, "position"),
            driver_code=driver.get("code"),
            driver_name=_full_name(driver, source),
            constructor=_require(constructor, "name", source, "Constructor"),
            grid=_int(r.get("grid", 0), source, "grid"),
            laps=_int(r.get("laps", 0), source, "laps"),
            status=r.get("status"),
            points=_float(r.get("points", 0), source, "points"),
            time=_opt(r, "Time", "time"),
            fastest_lap=_opt(r, "FastestLap", "Time", "time"),
        ))

    return _build(
        RaceResultDoc, source,
        season=_int(_require(race, "season", source, "Race"), source, "season"),
        round=_int(_require(race, "round", source, "Race"), source, "round"),
        race_name=_require(race, "raceName", source, "Race"),
        date=race.get("date"),
        circuit=_opt(race, "Circuit", "circuitName"),
        results=rows,
    )


def _first_standings_list(payload: Any, source: str) -> Optional[dict]:
    table = _table(payload, "StandingsTable", source)
    lists = table.get("StandingsLists") or []
    return lists[0] if lists else None


def parse_driver_standings(payload: Any) -> Optional[DriverStandingsDoc]:
    source = DRIVER_STANDINGS
    lst = _first_standings_list(payload, source)
    if lst is None:
        return None

    entries = []
    for s in lst.get("DriverStandings") or []:
        driver = _require(s, "Driver", source, "DriverStanding")
        constructors = s.get("Constructors") or []
        entries.append(_build(
            DriverStanding, source,
            position=_int(_require(s, "position", source, "DriverStanding"), source, "position"),
            driver_code=driver.get("code"),
            driver_name=_full_name(driver, source),
            nationality=driver.get("nationality"),
            constructor=(constructors[0].get("name") if constructors else None) or "—",
            points=_float(s.get("points", 0), source, "points"),
            wins=_int(s.get("wins", 0), source, "wins"),
        ))

    return _build(
        DriverStandingsDoc, source,
        season=_int(_require(lst, "season", source, "StandingsList"), source, "season"),
        round=_int(_require(lst, "round", source, "StandingsList"), source, "round"),
        standings=entries,
    )


def parse_constructor_standings(payload: Any) -> Optional[ConstructorStandingsDoc]:
    source = CONSTRUCTOR_STANDINGS
    lst = _first_standings_list(payload, source)
    if lst is None:
        return None

    entries = []
    for s in lst.get("ConstructorStandings") or []:
        constructor = _require(s, "Constructor", source, "ConstructorStanding")
        entries.append(_build(
            ConstructorStanding, source,
            position=_int(_require(s, "position", source, "ConstructorStanding"), source, "position"),
            name=_require(constructor, "name", source, "Constructor"),
            nationality=constructor.get("nationality"),
            points=_float(s.get("points", 0), source, "points"),
            wins=_int(s.get("wins", 0), source, "wins"),
        ))

    return _build(
        ConstructorStandingsDoc, source,
        season=_int(_require(lst, "season", source, "StandingsList"), source, "season"),
        round=_int(_require(lst, "round", source, "StandingsList"), source, "round"),
        standings=entries,
    )
