from typing import Iterator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from f1hub.core.context import AppContext
from f1hub.services.identity import VerifiedUser, parse_bearer


def get_context(request: Request) -> AppContext:
    return request.app.state.ctx


# Dependency for FastAPI
def get_db(ctx: AppContext = Depends(get_context)) -> Iterator[Session]:
    db = ctx.session_factory()
    try:
        yield db
    finally:
        db.close()


def require_user(
    authorization: Optional[str] = Header(None),
    ctx: AppContext = Depends(get_context),
) -> VerifiedUser:
    # AuthError from either step is turned into a 401 by the app's handler
    token = parse_bearer(authorization)
    return ctx.verifier.verify(token)
