"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the
real books. Tables are created before and dropped after every
test. Service tests mostly work on in-memory Books built from
the sample data and never need the database at all.
"""

import os

# Settings are read at import time; retries must not sleep in tests.
os.environ.setdefault("EXTRACTION_INITIAL_DELAY", "0")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ledger_engine.main import app
from ledger_engine.models.base import Base, get_db
from ledger_engine.schemas.masters import CompanyDetails
from ledger_engine.seed import sample_registry
from ledger_engine.services.books_service import Books, sample_books
from ledger_engine.services.registry_service import EntityRegistry
from ledger_engine.services.voucher_service import VoucherStore


TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    The get_db dependency is overridden so the app uses the
    test session instead of the real database.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample():
    """The sample books, in memory."""
    return sample_books()


@pytest.fixture
def registry():
    """Sample masters with no vouchers."""
    return sample_registry()


@pytest.fixture
def empty_books(registry):
    """Sample masters and an empty voucher store."""
    return Books(registry, VoucherStore())


@pytest.fixture
def bare_books():
    """
    A Tamil Nadu company with only the system ledgers, for tests
    that spell out every master they use.
    """
    company = CompanyDetails(name="Test Traders", state="Tamil Nadu")
    return Books(EntityRegistry(company=company), VoucherStore())
