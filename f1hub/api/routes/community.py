from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from f1hub.api.deps import get_context, get_db, require_user
from f1hub.core.context import AppContext
from f1hub.schemas.community import Comment, CommentIn, Prediction, PredictionIn
from f1hub.services import community as community_service
from f1hub.services.identity import VerifiedUser

router = APIRouter()


@router.get("/races/{race_id}/comments", response_model=List[Comment])
def race_comments(race_id: str, db: Session = Depends(get_db)):
    return community_service.list_comments(db, race_id)


@router.post("/races/{race_id}/comments", response_model=Comment, status_code=201)
def post_comment(
    race_id: str,
    body: CommentIn,
    user: VerifiedUser = Depends(require_user),
    db: Session = Depends(get_db),
    ctx: AppContext = Depends(get_context),
):
    try:
        return community_service.add_comment(db, ctx.feed, race_id, user, body.text)
    except community_service.RaceNotFound:
        raise HTTPException(404, f"Race '{race_id}' not found")


@router.post("/races/{race_id}/predictions", response_model=Prediction, status_code=201)
def post_prediction(
    race_id: str,
    body: PredictionIn,
    user: VerifiedUser = Depends(require_user),
    db: Session = Depends(get_db),
):
    if not body.predicted_winner.strip():
        raise HTTPException(422, "predictedWinner must not be blank")
    try:
        return community_service.add_prediction(db, race_id, user, body.predicted_winner)
    except community_service.RaceNotFound:
        raise HTTPException(404, f"Race '{race_id}' not found")


@router.get("/races/{race_id}/predictions/me", response_model=Prediction)
def my_race_prediction(
    race_id: str,
    user: VerifiedUser = Depends(require_user),
    db: Session = Depends(get_db),
):
    pred = community_service.prediction_for_race(db, user.uid, race_id)
    if pred is None:
        raise HTTPException(404, "No prediction for this race")
    return pred


@router.get("/users/me/predictions", response_model=List[Prediction])
def my_predictions(user: VerifiedUser = Depends(require_user), db: Session = Depends(get_db)):
    return community_service.list_predictions(db, user.uid)
