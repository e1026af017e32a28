import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from f1hub.api.routes import chat, community, health, races, users
from f1hub.core.config import Settings
from f1hub.core.context import AppContext, build_context
from f1hub.core.errors import AuthError, ModelServiceError
from f1hub.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(ctx: Optional[AppContext] = None) -> FastAPI:
    if ctx is None:
        settings = Settings()
        configure_logging(settings.log_level)
        ctx = build_context(settings)

    app = FastAPI(title="F1 2026 Hub API", version="0.1.0")
    app.state.ctx = ctx

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ctx.settings.allowed_origins,
        allow_methods=["GET", "POST", "PUT", "PATCH"],
        allow_headers=["Authorization", "Content-Type"],
    )

    @app.exception_handler(AuthError)
    def auth_failed(request: Request, exc: AuthError):
        return JSONResponse(status_code=401, content={"detail": str(exc)},
                            headers={"WWW-Authenticate": "Bearer"})

    @app.exception_handler(ModelServiceError)
    def model_failed(request: Request, exc: ModelServiceError):
        logger.error("askF1Expert upstream failure: %s", exc)
        return JSONResponse(status_code=502,
                            content={"detail": "The F1 Expert is unavailable right now, please try again."})

    # Routers
    app.include_router(health.router, tags=["system"])
    app.include_router(races.router, tags=["races"])
    app.include_router(community.router, tags=["community"])
    app.include_router(users.router, prefix="/users", tags=["users"])
    app.include_router(chat.router, prefix="/api", tags=["chat"])

    @app.get("/", include_in_schema=False)
    def root():
        return {"message": "F1 2026 Hub API - see /docs"}

    return app
