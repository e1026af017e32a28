import pytest
from fastapi.testclient import TestClient

from f1hub.core.config import Settings
from f1hub.core.context import build_context
from f1hub.main import create_app
from tests.factories import FakeModel, FakeProvider, FakeVerifier, seed_reference


@pytest.fixture
def settings():
    return Settings(
        env="dev",
        database_url="sqlite://",
        season=2026,
        fetch_timeout=1.0,
        allowed_origins=["https://f1-2026-hub.web.app"],
        chat_max_sources=3,
        _env_file=None,
    )


@pytest.fixture
def ctx(settings):
    context = build_context(settings)
    context.provider = FakeProvider()
    context.model = FakeModel()
    context.verifier = FakeVerifier()
    with context.session_factory() as session:
        seed_reference(session)
    yield context
    context.engine.dispose()


@pytest.fixture
def client(ctx):
    return TestClient(create_app(ctx))


@pytest.fixture
def alice():
    return {"Authorization": "Bearer token-alice"}


@pytest.fixture
def bob():
    return {"Authorization": "Bearer token-bob"}
