from typing import List, Optional

from pydantic import BaseModel


class ResultRow(BaseModel):
    position: int
    driver_code: Optional[str] = None
    driver_name: str
    constructor: str
    grid: int
    laps: int
    status: Optional[str] = None
    points: float
    time: Optional[str] = None
    fastest_lap: Optional[str] = None


class RaceResultDoc(BaseModel):
    season: int
    round: int
    race_name: str
    date: Optional[str] = None
    circuit: Optional[str] = None
    results: List[ResultRow]


class DriverStanding(BaseModel):
    position: int
    driver_code: Optional[str] = None
    driver_name: str
    nationality: Optional[str] = None
    constructor: str
    points: float
    wins: int


class ConstructorStanding(BaseModel):
    position: int
    name: str
    nationality: Optional[str] = None
    points: float
    wins: int


class DriverStandingsDoc(BaseModel):
    season: int
    round: int
    standings: List[DriverStanding]


class ConstructorStandingsDoc(BaseModel):
    season: int
    round: int
    standings: List[ConstructorStanding]
