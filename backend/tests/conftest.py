"""Pytest configuration and fixtures."""
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import Base, Database


@pytest.fixture(scope="session")
def settings():
    """Test settings."""
    return Settings(
        database_url="sqlite:///:memory:",
        debug=True,
        root_domain="localhost:3000",
        protocol="http",
    )


@pytest.fixture(scope="function")
def database(settings):
    """Fresh in-memory database per test."""
    database = Database.from_settings(settings)
    database.init()

    yield database

    Base.metadata.drop_all(bind=database.engine)
    database.dispose()


@pytest.fixture(scope="function")
def db_session(database):
    """Create a test database session."""
    session = database.session()

    yield session

    session.close()


@pytest.fixture
def sample_tenant(db_session):
    """Create a sample tenant."""
    from app.services.tenants import TenantRegistry

    return TenantRegistry(db_session).create("acme", "🚀")


@pytest.fixture
def sample_scope(db_session, sample_tenant):
    """Scope for the ``users`` collection of the sample tenant."""
    from app.services.collections import CollectionRegistry
    from app.services.documents import DocumentScope

    collection = CollectionRegistry(db_session).create(sample_tenant, "users")
    return DocumentScope(tenant=sample_tenant, collection=collection)


@pytest.fixture
def client(settings):
    """API client whose requests come in on the ``acme`` subdomain."""
    from app.main import create_app

    app = create_app(settings)
    with TestClient(app, base_url="http://acme.localhost:3000") as client:
        yield client


@pytest.fixture
def acme(client):
    """Provision the ``acme`` tenant through the admin API."""
    response = client.post("/admin/tenants", json={"name": "acme", "icon": "🚀"})
    assert response.status_code == 201
    return response.json()
