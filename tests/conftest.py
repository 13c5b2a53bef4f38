import httpx
import pytest

from book_catalog.app import create_app
from book_catalog.config import Settings
from book_catalog.db import build_engine
from book_catalog.store import CatalogStore


@pytest.fixture()
def settings(tmp_path):
    return Settings(database_url=f"sqlite:///{tmp_path / 'books.db'}")


@pytest.fixture()
def store(settings):
    engine = build_engine(settings.database_url)
    store = CatalogStore(engine)
    store.initialize()
    yield store
    engine.dispose()


@pytest.fixture()
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture()
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
