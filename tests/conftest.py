"""
Pytest configuration and fixtures.

Every test gets its own in-memory SQLite database and page cache.
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from dashboard.cache import PageCache
from dashboard.db.engine import init_db, make_engine
from dashboard.db.schema import customers, invoices


DELBA_ID = "3958dc9e-712f-4377-85e9-fec4b6a6442a"
LEE_ID = "3958dc9e-742f-4377-85e9-fec4b6a6442a"


@pytest.fixture
def engine():
    """Fresh in-memory database with the schema created."""
    engine = make_engine("sqlite:///:memory:")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def broken_engine():
    """Database without any tables: every statement fails."""
    engine = make_engine("sqlite:///:memory:")
    yield engine
    engine.dispose()


@pytest.fixture
def cache():
    return PageCache()


def seed_rows(engine):
    """Two customers and one invoice."""
    with engine.begin() as conn:
        conn.execute(
            customers.insert(),
            [
                {"id": DELBA_ID, "name": "Delba de Oliveira",
                 "email": "delba@oliveira.com", "image_url": "/customers/delba-de-oliveira.png"},
                {"id": LEE_ID, "name": "Lee Robinson",
                 "email": "lee@robinson.com", "image_url": ""},
            ],
        )
        conn.execute(
            invoices.insert().values(
                id="inv-1",
                customer_id=DELBA_ID,
                amount=15795,
                status="pending",
                date=date(2022, 12, 6),
            )
        )


@pytest.fixture
def seeded(engine):
    seed_rows(engine)
    return engine


@pytest.fixture
def file_engine(tmp_path):
    """Seeded file-backed database: each thread gets its own connection."""
    engine = make_engine(f"sqlite:///{tmp_path / 'dashboard.sqlite'}")
    init_db(engine)
    seed_rows(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def client(engine, cache):
    """Test client whose app uses the test database and cache."""
    from dashboard.api.deps import cache_dep, engine_dep
    from dashboard.main import create_app

    app = create_app(create_schema=False)
    app.dependency_overrides[engine_dep] = lambda: engine
    app.dependency_overrides[cache_dep] = lambda: cache
    return TestClient(app)
