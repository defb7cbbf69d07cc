# tests/test_store.py
import json
from unittest.mock import MagicMock

import pytest
import redis

from app.core.errors import StoreError, StoreUnavailable
from app.core.store import RedisTicketStore, SqlTicketStore, create_store

TICKETS = [
    {"id": 1, "title": "A", "status": "open", "created_at": "2024-01-01T00:00:00.000Z"},
    {"id": 2, "title": "B", "status": "closed", "created_at": "2024-01-02T00:00:00.000Z"},
]


def test_sql_store_absent_key_is_empty(store):
    assert store.get_tickets() == []


def test_sql_store_overwrites_whole_collection(store):
    store.save_tickets(TICKETS)
    assert store.get_tickets() == TICKETS

    store.save_tickets(TICKETS[:1])
    assert store.get_tickets() == TICKETS[:1]


def test_sql_store_keys_are_independent(tmp_path):
    url = f"sqlite:///{tmp_path / 'kv.db'}"
    tickets = SqlTicketStore(url, key="tickets")
    archive = SqlTicketStore(url, key="archive")

    tickets.save_tickets(TICKETS)
    assert archive.get_tickets() == []
    assert tickets.get_tickets() == TICKETS

    tickets.close()
    archive.close()


def test_sql_store_rejects_non_array_value(store):
    from app.core.database import KeyValueEntry

    store.ping()
    with store.SessionLocal() as db:
        db.add(KeyValueEntry(key="tickets", value='{"id": 1}'))
        db.commit()
    with pytest.raises(StoreError):
        store.get_tickets()


def test_sql_store_unreachable_database():
    s = SqlTicketStore("sqlite:////nonexistent-dir/for/sure/tickets.db")
    with pytest.raises(StoreUnavailable):
        s.get_tickets()
    with pytest.raises(StoreUnavailable):
        s.ping()


def test_redis_store_get_and_set():
    client = MagicMock()
    client.get.return_value = None
    s = RedisTicketStore(client, key="tickets")

    assert s.get_tickets() == []
    client.get.assert_called_once_with("tickets")

    s.save_tickets(TICKETS)
    key, payload = client.set.call_args.args
    assert key == "tickets"
    assert json.loads(payload) == TICKETS

    client.get.return_value = payload
    assert s.get_tickets() == TICKETS


def test_redis_store_wraps_connection_errors():
    client = MagicMock()
    client.get.side_effect = redis.exceptions.ConnectionError("connection refused")
    client.set.side_effect = redis.exceptions.TimeoutError("timed out")
    client.ping.side_effect = redis.exceptions.ConnectionError("connection refused")
    s = RedisTicketStore(client)

    with pytest.raises(StoreUnavailable):
        s.get_tickets()
    with pytest.raises(StoreUnavailable):
        s.save_tickets(TICKETS)
    with pytest.raises(StoreUnavailable):
        s.ping()


def test_redis_store_wraps_other_errors_and_bad_json():
    client = MagicMock()
    client.get.side_effect = redis.exceptions.ResponseError("WRONGTYPE")
    s = RedisTicketStore(client)
    with pytest.raises(StoreError) as exc_info:
        s.get_tickets()
    assert not isinstance(exc_info.value, StoreUnavailable)

    client.get.side_effect = None
    client.get.return_value = "not json"
    with pytest.raises(StoreError):
        s.get_tickets()


def test_create_store_picks_backend_by_scheme():
    r = create_store("redis://localhost:6379/0", key="desk")
    assert isinstance(r, RedisTicketStore)
    assert r.key == "desk"
    r.close()

    s = create_store("sqlite://")
    assert isinstance(s, SqlTicketStore)
    assert s.key == "tickets"
    s.close()
