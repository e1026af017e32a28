# f1hub/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


def make_engine(database_url: str) -> Engine:
    kwargs = {"future": True, "echo": False}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every checkout sees an empty db
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables(engine: Engine) -> None:
    """Create missing tables directly; deployed databases go through Alembic instead."""
    import f1hub.models.f1  # noqa: F401  registers the models on Base

    from f1hub.db.base import Base
    Base.metadata.create_all(engine)
