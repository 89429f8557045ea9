"""
Pytest configuration and fixtures for the SWIFT code service tests.
"""

import os

import pytest

# Set test environment before the app modules read settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from core.database import create_db_and_tables, get_session
from models import SwiftCode
from services.normalizer import derive_is_headquarter
from services.swift_code_store import SwiftCodeStore


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session in a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def store(session):
    return SwiftCodeStore(session)


def make_record(code, country_iso2="PL", country_name="POLAND", bank_name="TEST BANK", address="MAIN STREET 1"):
    return SwiftCode(
        swift_code=code,
        bank_name=bank_name,
        address=address,
        country_iso2=country_iso2,
        country_name=country_name,
        is_headquarter=derive_is_headquarter(code),
    )


@pytest.fixture
def seeded_store(store):
    """An institution with two branches, plus one unrelated headquarters."""
    store.replace_all([
        make_record("AAAABBCCXXX", bank_name="ALPHA BANK"),
        make_record("AAAABBCC111", bank_name="ALPHA BANK", address="BRANCH ROAD 1"),
        make_record("AAAABBCC222", bank_name="ALPHA BANK", address="BRANCH ROAD 2"),
        make_record("ZZZZYYCCXXX", country_iso2="US", country_name="UNITED STATES", bank_name="ZULU BANK"),
    ])
    return store


@pytest.fixture
def test_client(engine):
    """Test client with the request session bound to the test engine."""
    from fastapi.testclient import TestClient

    from main import app

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def record_factory():
    return make_record
