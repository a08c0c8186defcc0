"""Shared test fixtures: an isolated SQLite database per test and a TestClient bound to it."""

import os
import tempfile

# Keep the application's own engine and upload directory away from the working tree
_TMP = tempfile.mkdtemp(prefix="orders-crm-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP, "app.db")
os.environ["UPLOAD_DIR"] = os.path.join(_TMP, "uploads")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from config import settings
from database import Base, get_db
from main import app


@pytest.fixture
def engine(tmp_path):
    """File-backed SQLite so several threads can share it."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'orders.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def upload_dir():
    return settings.upload_dir


def order_payload(**overrides):
    """A typical order body; `items` and header fields can be overridden."""
    payload = {
        "client": "Acme Sportswear",
        "status": "new",
        "currency": "USD",
        "payment_terms": "50/50",
        "planned_start": "2026-10-20",
        "planned_end": "2026-11-15",
        "actual_ship": "",
        "logistics": "DHL Express",
        "discount_percent": 0,
        "extra_costs": 0,
        "wedrive_folder": "orders/acme",
        "attachments": ["/uploads/1-front.jpg"],
        "items": [
            {"product": "Hoodie", "sku": "HD-01", "color": "black", "size": "L",
             "quantity": 10, "cost": 4, "price": 10, "discount_percent": 0, "note": "embroidery"},
        ],
    }
    payload.update(overrides)
    return payload
