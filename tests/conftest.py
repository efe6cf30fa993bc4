# tests/conftest.py

import asyncio

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from barbershop import config
from barbershop.auth import get_data_source, get_management_token, get_provider_domain
from barbershop.context import CallerContext, CallerIdentity
from barbershop.data import BookingDataSource
from barbershop.db import init_db, make_engine
from barbershop.main import app
from barbershop.schemas import AppointmentCreate, BarberCreate


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'barbershop-test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return BookingDataSource(engine)


@pytest.fixture
def run():
    return asyncio.run


@pytest.fixture
def make_barber(store, run):
    def make(email="jane@example.com", first="Jane", last="Doe", **extra):
        data = BarberCreate.model_validate({"email": email, "name": {"first": first, "last": last}, **extra})
        return run(store.create_barber(data))

    return make


@pytest.fixture
def make_appointment(store, run):
    def make(barber_id, time, **extra):
        payload = {
            "barberID": barber_id,
            "name": {"first": "Carl", "last": "Client"},
            "email": "carl@example.com",
            "phoneNumber": "+1 555 0100",
            "duration": 30,
            "serviceName": "HAIRCUT",
            "time": time,
            **extra,
        }
        return run(store.create_appointment(AppointmentCreate.model_validate(payload)))

    return make


@pytest.fixture
def context(store):
    def make(email=None, permissions=(), user_id="auth0|123", **extra):
        user = None
        if email is not None or permissions:
            user = CallerIdentity(email=email, id=user_id, permissions=list(permissions))
        return CallerContext(data=store, user=user, **extra)

    return make


@pytest.fixture
def token():
    def make(email="jane@example.com", permissions=(), sub="auth0|123"):
        claims = {"sub": sub, config.AUTH_EMAIL_CLAIM: email, "permissions": list(permissions)}
        return jwt.encode(claims, config.SECRET_KEY, algorithm=config.ALGORITHM)

    return make


@pytest.fixture
def client(store):
    app.dependency_overrides[get_data_source] = lambda: store
    app.dependency_overrides[get_management_token] = lambda: None
    app.dependency_overrides[get_provider_domain] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()
