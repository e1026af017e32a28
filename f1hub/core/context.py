from dataclasses import dataclass, field

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from f1hub.core.config import Settings
from f1hub.db.session import create_tables, make_engine, make_session_factory
from f1hub.db.store import DocumentStore
from f1hub.services.feed import CommentFeed
from f1hub.services.gemini import GeminiClient
from f1hub.services.identity import IdentityVerifier
from f1hub.services.jolpica import ResultsProvider


@dataclass
class AppContext:
    """Everything a request or a sync cycle needs, built once at startup."""

    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    store: DocumentStore
    provider: ResultsProvider
    model: GeminiClient
    verifier: IdentityVerifier
    feed: CommentFeed = field(default_factory=CommentFeed)


def build_context(settings: Settings) -> AppContext:
    engine = make_engine(settings.database_url)
    if settings.env == "dev":
        create_tables(engine)
    session_factory = make_session_factory(engine)
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        store=DocumentStore(session_factory),
        provider=ResultsProvider(settings.ergast_url, timeout=settings.fetch_timeout),
        model=GeminiClient(
            settings.gemini_api_key,
            settings.gemini_model,
            base_url=settings.gemini_url,
            timeout=settings.model_timeout,
        ),
        verifier=IdentityVerifier(settings.identity_api_key, base_url=settings.identity_url),
    )
