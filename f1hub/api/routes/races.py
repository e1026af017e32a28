from typing import List, Union

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from f1hub.api.deps import get_context, get_db
from f1hub.core.context import AppContext
from f1hub.core.errors import InvalidKeyError
from f1hub.models import f1
from f1hub.schemas.races import ConstructorStandings, Driver, DriverStandings, Race, RaceResult, Team
from f1hub.services.keys import ResultKey

router = APIRouter()


@router.get("/drivers", response_model=List[Driver])
def drivers(db: Session = Depends(get_db)):
    return db.query(f1.Driver).order_by(f1.Driver.number).all()


@router.get("/teams", response_model=List[Team])
def teams(db: Session = Depends(get_db)):
    return db.query(f1.Team).order_by(f1.Team.name).all()


@router.get("/races", response_model=List[Race])
def races(db: Session = Depends(get_db)):
    return db.query(f1.Race).order_by(f1.Race.round).all()


@router.get("/races/{race_id}", response_model=Race)
def race(race_id: str, db: Session = Depends(get_db)):
    row = db.get(f1.Race, race_id)
    if row is None:
        raise HTTPException(404, f"Race '{race_id}' not found")
    return row


@router.get("/results", response_model=List[RaceResult])
def results(ctx: AppContext = Depends(get_context)):
    return ctx.store.list("results")


@router.get("/results/{key}", response_model=RaceResult)
def result(key: str, ctx: AppContext = Depends(get_context)):
    try:
        canonical = ResultKey.decode(key).encode()
    except InvalidKeyError as e:
        raise HTTPException(422, str(e))
    doc = ctx.store.get("results", canonical)
    if doc is None:
        raise HTTPException(404, f"No results for {canonical}")
    return doc


@router.get("/standings/{kind}", response_model=Union[DriverStandings, ConstructorStandings])
def standings(kind: str, ctx: AppContext = Depends(get_context)):
    if kind not in ("drivers", "constructors"):
        raise HTTPException(404, f"Unknown standings '{kind}'")
    doc = ctx.store.get("standings", kind)
    if doc is None:
        raise HTTPException(404, f"No {kind} standings synced yet")
    return doc
