from fastapi import APIRouter, Depends, HTTPException

from f1hub.api.deps import get_context, require_user
from f1hub.core.context import AppContext
from f1hub.schemas.chat import ChatRequest, ChatResponse
from f1hub.services.chat import ChatService
from f1hub.services.identity import VerifiedUser

router = APIRouter()


@router.post("/askF1Expert", response_model=ChatResponse)
def ask_f1_expert(
    body: ChatRequest,
    user: VerifiedUser = Depends(require_user),
    ctx: AppContext = Depends(get_context),
):
    if len(body.messages) > ctx.settings.chat_max_turns:
        raise HTTPException(422, f"At most {ctx.settings.chat_max_turns} messages per request")
    service = ChatService(ctx.model, ctx.store, ctx.settings.season, ctx.settings.chat_max_sources)
    return service.ask(body)
