from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from effortlog import create_app
from effortlog.core.config import Settings
from effortlog.db.session import Base, build_engine, build_session_factory
from effortlog.models.user import User
from effortlog.services.passport import PassportLookup

PASSPORT_URL = "http://passport.test/info"

PEOPLE = {
    ("1234", "567890"): {
        "surname": "Ivanov",
        "name": "Ivan",
        "patronymic": "Ivanovich",
        "address": "Moscow, Lenina 5",
    },
    ("4321", "098765"): {
        "surname": "Petrova",
        "name": "Anna",
        "address": "Kazan, Baumana 12",
    },
}


@pytest.fixture()
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def db_session(engine):
    session = build_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db_session):
    counter = {"n": 0}

    def _make(**fields) -> User:
        counter["n"] += 1
        data = {
            "surname": "Smith",
            "name": "John",
            "patronymic": None,
            "address": "Main St 1",
            "passport_number": f"00{counter['n']:02d} {counter['n']:06d}",
        }
        data.update(fields)
        user = User(**data)
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture()
def passport_calls():
    return []


@pytest.fixture()
def passport_lookup(passport_calls):
    def handler(request: httpx.Request) -> httpx.Response:
        passport_calls.append(dict(request.url.params))
        key = (request.url.params.get("passportSerie"), request.url.params.get("passportNumber"))
        if key not in PEOPLE:
            return httpx.Response(404, text="not found")
        return httpx.Response(200, json=PEOPLE[key])

    lookup = PassportLookup(PASSPORT_URL, transport=httpx.MockTransport(handler))
    try:
        yield lookup
    finally:
        lookup.close()


@pytest.fixture()
def client(engine, passport_lookup):
    settings = Settings(DB_URL="sqlite://", PASSPORT_API_URL=PASSPORT_URL)
    app = create_app(settings, engine=engine, passport_lookup=passport_lookup)
    with TestClient(app) as test_client:
        yield test_client
