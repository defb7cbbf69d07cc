# app/core/store.py
"""
Key-value persistence for the ticket collection.

The whole collection lives under one key as a JSON array. ``get_tickets``
returns the decoded list (``[]`` when the key is absent) and ``save_tickets``
overwrites the key with a single write. There is no concurrency token: two
callers doing get-modify-save at the same time can lose one of the updates.
"""
import json
import logging
from contextlib import contextmanager
from typing import Any, Iterator

import redis
from fastapi import Request
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import Base, KeyValueEntry, make_engine, make_session_factory
from app.core.errors import StoreError, StoreUnavailable

logger = logging.getLogger(__name__)

REDIS_SCHEMES = ("redis://", "rediss://", "unix://")


def _decode(raw: str | bytes | None) -> list[dict[str, Any]]:
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise StoreError(f"Stored ticket collection is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise StoreError("Stored ticket collection is not a JSON array")
    return data


def _encode(tickets: list[dict[str, Any]]) -> str:
    return json.dumps(tickets, separators=(",", ":"))


class TicketStore:
    """Base interface of a ticket collection store."""

    key: str

    def get_tickets(self) -> list[dict[str, Any]]:
        raise NotImplementedError

    def save_tickets(self, tickets: list[dict[str, Any]]) -> None:
        raise NotImplementedError

    def ping(self) -> bool:
        raise NotImplementedError

    def close(self) -> None:
        pass

    @property
    def backend(self) -> str:
        return type(self).__name__


class RedisTicketStore(TicketStore):
    """Collection stored with GET/SET under one Redis key."""

    def __init__(self, client: redis.Redis, key: str = "tickets"):
        self.client = client
        self.key = key

    @classmethod
    def from_url(cls, url: str, key: str = "tickets") -> "RedisTicketStore":
        return cls(redis.Redis.from_url(url, decode_responses=True), key)

    @contextmanager
    def _errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as exc:
            logger.error("Redis unavailable while %s: %s", action, exc)
            raise StoreUnavailable(f"Store unavailable: {exc}") from exc
        except redis.exceptions.RedisError as exc:
            logger.error("Redis error while %s: %s", action, exc)
            raise StoreError(f"Store error: {exc}") from exc

    def get_tickets(self) -> list[dict[str, Any]]:
        with self._errors("reading tickets"):
            raw = self.client.get(self.key)
        return _decode(raw)

    def save_tickets(self, tickets: list[dict[str, Any]]) -> None:
        payload = _encode(tickets)
        with self._errors("saving tickets"):
            self.client.set(self.key, payload)

    def ping(self) -> bool:
        with self._errors("connecting"):
            return bool(self.client.ping())

    def close(self) -> None:
        self.client.close()


class SqlTicketStore(TicketStore):
    """Collection stored as one row of the ``kv_store`` table."""

    def __init__(self, url: str, key: str = "tickets"):
        self.url = url
        self.key = key
        self.engine = make_engine(url)
        self.SessionLocal = make_session_factory(self.engine)
        self._schema_ready = False

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        try:
            if not self._schema_ready:
                Base.metadata.create_all(bind=self.engine)
                self._schema_ready = True
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()
        except OperationalError as exc:
            logger.error("Database unavailable while %s: %s", action, exc)
            raise StoreUnavailable(f"Store unavailable: {exc.orig or exc}") from exc
        except SQLAlchemyError as exc:
            logger.error("Database error while %s: %s", action, exc)
            raise StoreError(f"Store error: {exc}") from exc

    def get_tickets(self) -> list[dict[str, Any]]:
        with self._session("reading tickets") as db:
            entry = db.get(KeyValueEntry, self.key)
            raw = entry.value if entry is not None else None
        return _decode(raw)

    def save_tickets(self, tickets: list[dict[str, Any]]) -> None:
        payload = _encode(tickets)
        with self._session("saving tickets") as db:
            db.merge(KeyValueEntry(key=self.key, value=payload))
            db.commit()

    def ping(self) -> bool:
        with self._session("connecting") as db:
            db.connection()
        return True

    def close(self) -> None:
        self.engine.dispose()


def create_store(url: str, key: str = "tickets") -> TicketStore:
    if url.startswith(REDIS_SCHEMES):
        return RedisTicketStore.from_url(url, key)
    return SqlTicketStore(url, key)


# Common store dependency
def get_store(request: Request) -> TicketStore:
    return request.app.state.store


__all__ = [
    "TicketStore",
    "RedisTicketStore",
    "SqlTicketStore",
    "create_store",
    "get_store",
]
