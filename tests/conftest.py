"""Pytest configuration and fixtures"""
import os
from decimal import Decimal

import pytest

# Set test environment variables before bazar reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from bazar.data.database import Base
from bazar.data.models import ProductModel, UserModel
from bazar.repos.product_repo import ProductRepo
from bazar.repos.user_repo import UserRepo
from bazar.services.storage import LocalStorage


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    return UserRepo(db).create_user(UserModel(id=1, name="Test User"))


@pytest.fixture
def products(db):
    """Three catalog products."""
    items = [
        ProductModel(name="Keyboard", slug="keyboard", price=Decimal("199.99")),
        ProductModel(name="Mouse", slug="mouse", price=Decimal("49.50")),
        ProductModel(name="Monitor", slug="monitor", price=Decimal("899.00")),
    ]
    repo = ProductRepo(db)
    return [repo.create_product(p) for p in items]


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path)


@pytest.fixture
def make_chunk(tmp_path):
    """Create a chunk file with a given mtime."""

    def _make(name: str, mtime: float, namespace: str = "chunks") -> str:
        path = tmp_path / namespace / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"chunk")
        os.utime(path, (mtime, mtime))
        return f"{namespace}/{name}"

    return _make
