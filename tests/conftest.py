import os
import tempfile
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

os.environ["ENVIRONMENT"] = "development"
os.environ["DATABASE_URL"] = "sqlite://"

import storefront.models  # noqa: F401
from storefront.db.base_class import Base
from storefront.db.session import get_db
from storefront.main import app
from storefront.services.cart_storage import InMemoryCartStorage


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    db_file = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    db_file.close()

    engine = create_engine(
        f"sqlite:///{db_file.name}",
        connect_args={"check_same_thread": False},
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
        os.unlink(db_file.name)


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.state.limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def storage_backend() -> dict:
    """Shared dict standing in for the browser's local storage."""
    return {}


@pytest.fixture()
def storage(storage_backend: dict) -> InMemoryCartStorage:
    return InMemoryCartStorage("cart", backend=storage_backend)


@pytest.fixture()
def shirt() -> dict:
    return {
        "id": 1,
        "name": "Kemeja Batik",
        "price": 10000,
        "image": "/img/kemeja.jpg",
        "category": "Pria",
        "isNew": True,
        "sizes": ["S", "M", "L"],
        "colors": ["Biru", "Merah"],
    }


@pytest.fixture()
def tote_bag() -> dict:
    return {
        "id": 2,
        "name": "Tote Bag",
        "price": 5000,
        "category": "Aksesoris",
        "isNew": False,
        "sizes": [],
        "colors": [],
    }
