from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from f1hub.schemas.documents import ConstructorStanding, DriverStanding, ResultRow


class Team(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    base: Optional[str] = None
    color: Optional[str] = None


class Driver(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    number: int
    nationality: Optional[str] = None
    team_id: Optional[str] = None
    team_color: Optional[str] = None
    photo_url: Optional[str] = None


class Race(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    round: int
    name: str
    circuit: Optional[str] = None
    country: Optional[str] = None
    date: date


class RaceResult(BaseModel):
    id: str
    season: int
    round: int
    race_name: str
    date: Optional[str] = None
    circuit: Optional[str] = None
    results: List[ResultRow]
    updated_at: datetime


class DriverStandings(BaseModel):
    id: str
    season: int
    round: int
    standings: List[DriverStanding]
    updated_at: datetime


class ConstructorStandings(BaseModel):
    id: str
    season: int
    round: int
    standings: List[ConstructorStanding]
    updated_at: datetime
