# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.errors import StoreUnavailable
from app.core.store import SqlTicketStore, TicketStore
from app.main import create_app


class UnreachableStore(TicketStore):
    key = "tickets"

    def get_tickets(self):
        raise StoreUnavailable("Store unavailable: connection refused")

    def save_tickets(self, tickets):
        raise StoreUnavailable("Store unavailable: connection refused")

    def ping(self):
        raise StoreUnavailable("Store unavailable: connection refused")


def _settings() -> Settings:
    return Settings(STORE_URL="sqlite://", _env_file=None)


@pytest.fixture
def store():
    s = SqlTicketStore("sqlite://")
    yield s
    s.close()


@pytest.fixture
def client(store):
    app = create_app(_settings(), store=store)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def broken_client():
    app = create_app(_settings(), store=UnreachableStore())
    with TestClient(app) as c:
        yield c
