from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from f1hub.api.deps import get_context, get_db, require_user
from f1hub.core.context import AppContext
from f1hub.schemas.community import ChatMemory, Profile, ProfileUpdate
from f1hub.services import profiles as profile_service
from f1hub.services.identity import VerifiedUser

router = APIRouter()


@router.post("/me", response_model=Profile)
def sign_in(user: VerifiedUser = Depends(require_user), db: Session = Depends(get_db)):
    return profile_service.ensure_profile(db, user)


@router.get("/me", response_model=Profile)
def me(user: VerifiedUser = Depends(require_user), db: Session = Depends(get_db)):
    profile = profile_service.get_profile(db, user.uid)
    if profile is None:
        raise HTTPException(404, "Profile not created yet")
    return profile


@router.patch("/me", response_model=Profile)
def update_me(body: ProfileUpdate, user: VerifiedUser = Depends(require_user),
              db: Session = Depends(get_db)):
    try:
        return profile_service.set_favourite_driver(db, user, body.favourite_driver)
    except profile_service.UnknownDriver:
        raise HTTPException(422, f"Unknown driver '{body.favourite_driver}'")


@router.get("/me/chat-memory", response_model=ChatMemory)
def chat_memory(user: VerifiedUser = Depends(require_user), db: Session = Depends(get_db)):
    return profile_service.get_chat_memory(db, user.uid)


@router.put("/me/chat-memory", response_model=ChatMemory)
def save_chat_memory(
    body: ChatMemory,
    user: VerifiedUser = Depends(require_user),
    db: Session = Depends(get_db),
    ctx: AppContext = Depends(get_context),
):
    return profile_service.save_chat_memory(
        db,
        user,
        body.facts,
        [m.model_dump() for m in body.recent_messages],
        max_messages=ctx.settings.memory_max_messages,
    )
