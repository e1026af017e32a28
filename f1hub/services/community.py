"""Comments and race-winner predictions.

Author fields always come from the verified caller, never from the request.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from f1hub.models.f1 import Comment, Prediction, Race, UserProfile
from f1hub.services.feed import CommentFeed
from f1hub.services.identity import VerifiedUser

logger = logging.getLogger(__name__)


class RaceNotFound(LookupError):
    pass


def _comment_dict(c: Comment) -> dict:
    return {
        "id": c.id,
        "race_id": c.race_id,
        "user_id": c.user_id,
        "display_name": c.display_name,
        "photo_url": c.photo_url,
        "text": c.text,
        "created_at": c.created_at,
    }


def _prediction_dict(p: Prediction) -> dict:
    return {
        "id": p.id,
        "user_id": p.user_id,
        "display_name": p.display_name,
        "race_id": p.race_id,
        "race_name": p.race_name,
        "predicted_winner": p.predicted_winner,
        "created_at": p.created_at,
    }


def _get_race(db: Session, race_id: str) -> Race:
    race = db.get(Race, race_id)
    if race is None:
        raise RaceNotFound(race_id)
    return race


def _author(db: Session, user: VerifiedUser):
    # the stored profile wins over token claims so renames show up everywhere
    profile = db.get(UserProfile, user.uid)
    if profile is not None:
        return profile.display_name or user.display_name, profile.photo_url or user.photo_url
    return user.display_name, user.photo_url


def list_comments(db: Session, race_id: str) -> List[dict]:
    rows = (
        db.query(Comment)
        .filter(Comment.race_id == race_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )
    return [_comment_dict(c) for c in rows]


def add_comment(db: Session, feed: CommentFeed, race_id: str, user: VerifiedUser, text: str) -> dict:
    _get_race(db, race_id)
    display_name, photo_url = _author(db, user)
    comment = Comment(
        race_id=race_id,
        user_id=user.uid,
        display_name=display_name,
        photo_url=photo_url,
        text=text,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info("Comment %s added to race %s by %s", comment.id, race_id, user.uid)

    feed.publish(race_id, list_comments(db, race_id))
    return _comment_dict(comment)


def add_prediction(db: Session, race_id: str, user: VerifiedUser, predicted_winner: str) -> dict:
    race = _get_race(db, race_id)
    display_name, _ = _author(db, user)
    pred = Prediction(
        user_id=user.uid,
        display_name=display_name,
        race_id=race.id,
        race_name=race.name,
        predicted_winner=predicted_winner.strip(),
    )
    db.add(pred)
    db.commit()
    db.refresh(pred)
    return _prediction_dict(pred)


def list_predictions(db: Session, user_id: str) -> List[dict]:
    rows = (
        db.query(Prediction)
        .filter(Prediction.user_id == user_id)
        .order_by(Prediction.created_at.desc(), Prediction.id.desc())
        .all()
    )
    return [_prediction_dict(p) for p in rows]


def prediction_for_race(db: Session, user_id: str, race_id: str) -> Optional[dict]:
    """The user's pick for a race. Re-submissions add rows; the first one counts."""
    pred = (
        db.query(Prediction)
        .filter(Prediction.user_id == user_id, Prediction.race_id == race_id)
        .order_by(Prediction.created_at.asc(), Prediction.id.asc())
        .first()
    )
    return _prediction_dict(pred) if pred else None
