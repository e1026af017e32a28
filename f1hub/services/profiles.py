from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from f1hub.models.f1 import Driver, UserProfile
from f1hub.services.identity import VerifiedUser

logger = logging.getLogger(__name__)


class UnknownDriver(LookupError):
    pass


def _profile_dict(p: UserProfile) -> dict:
    return {
        "id": p.id,
        "display_name": p.display_name,
        "email": p.email,
        "photo_url": p.photo_url,
        "created_at": p.created_at,
        "favourite_driver_id": p.favourite_driver_id,
    }


def ensure_profile(db: Session, user: VerifiedUser) -> dict:
    """Create the profile on first sign-in; an existing one is left as is."""
    profile = db.get(UserProfile, user.uid)
    if profile is None:
        profile = UserProfile(
            id=user.uid,
            display_name=user.display_name,
            email=user.email,
            photo_url=user.photo_url,
            chat_facts=[],
            chat_recent=[],
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)
        logger.info("Created profile for %s", user.uid)
    return _profile_dict(profile)


def get_profile(db: Session, uid: str) -> Optional[dict]:
    profile = db.get(UserProfile, uid)
    return _profile_dict(profile) if profile else None


def set_favourite_driver(db: Session, user: VerifiedUser, driver_id: Optional[str]) -> dict:
    if driver_id is not None and db.get(Driver, driver_id) is None:
        raise UnknownDriver(driver_id)
    ensure_profile(db, user)
    profile = db.get(UserProfile, user.uid)
    profile.favourite_driver_id = driver_id
    db.commit()
    db.refresh(profile)
    return _profile_dict(profile)


def merge_facts(existing: List[str], new: List[str]) -> List[str]:
    """Concatenate, dropping case-insensitive duplicates and keeping the first spelling."""
    seen = set()
    out = []
    for fact in list(existing) + list(new):
        fact = fact.strip()
        if not fact or fact.lower() in seen:
            continue
        seen.add(fact.lower())
        out.append(fact)
    return out


def get_chat_memory(db: Session, uid: str) -> dict:
    profile = db.get(UserProfile, uid)
    if profile is None:
        return {"facts": [], "recent_messages": []}
    return {"facts": list(profile.chat_facts or []), "recent_messages": list(profile.chat_recent or [])}


def save_chat_memory(db: Session, user: VerifiedUser, facts: List[str], recent: List[dict],
                     max_messages: int = 20) -> dict:
    ensure_profile(db, user)
    profile = db.get(UserProfile, user.uid)
    profile.chat_facts = merge_facts(profile.chat_facts or [], facts)
    profile.chat_recent = list(recent)[-max_messages:] if max_messages > 0 else []
    db.commit()
    db.refresh(profile)
    return {"facts": list(profile.chat_facts), "recent_messages": list(profile.chat_recent)}
