# conftest.py

import os
import tempfile

import pytest

# Set testing environment BEFORE importing app so app.py selects TestingConfig
os.environ["FLASK_ENV"] = "testing"

# Now import app and other modules after environment is set
from app import create_app  # noqa: E402
from config import TestingConfig  # noqa: E402
from inkind_app.models import (  # noqa: E402
    Individual,
    Ministry,
    Organization,
    Permission,
    Role,
    RolePermission,
    User,
    db,
)


def _remove_sqlite_files(path):
    for candidate in (path, f"{path}-wal", f"{path}-shm"):
        try:
            if os.path.exists(candidate):
                os.unlink(candidate)
        except OSError:
            pass


@pytest.fixture(scope="function")
def app():
    """Create and configure a test Flask application with an isolated database"""
    import uuid

    # Create a unique temporary database file for each test
    db_fd, temp_db = tempfile.mkstemp(suffix=f"_{uuid.uuid4().hex[:8]}.db")

    try:
        flask_app = create_app(
            TestingConfig,
            SQLALCHEMY_DATABASE_URI=f"sqlite:///{temp_db}",
            SECRET_KEY="test-secret-key-for-testing-only",
            LOG_LEVEL="DEBUG",
            ENABLE_CONSOLE_LOGGING=True,
            ENABLE_FILE_LOGGING=False,
        )

        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            yield flask_app
            db.session.remove()
            db.drop_all()
            db.engine.dispose()
    finally:
        try:
            os.close(db_fd)
        except OSError:
            pass
        _remove_sqlite_files(temp_db)


@pytest.fixture(autouse=True)
def app_context(app):
    """Automatically provide app context for all tests"""
    with app.app_context():
        yield


@pytest.fixture
def client(app):
    """Create a test client for the Flask application"""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Create a test CLI runner for the Flask application"""
    return app.test_cli_runner()


@pytest.fixture
def test_role(app):
    """Create a STAFF role holding the donation permissions"""
    role = Role(name="STAFF", display_name="Staff", description="Records donations")
    db.session.add(role)
    db.session.flush()
    for name in ("import_donations", "view_donations"):
        permission = Permission(name=name, display_name=name.replace("_", " ").title())
        db.session.add(permission)
        db.session.flush()
        db.session.add(RolePermission(role_id=role.id, permission_id=permission.id))
    db.session.commit()
    return role


@pytest.fixture
def test_user(app, test_role):
    """Create an active staff user"""
    user = User(
        username="testuser",
        email="test@example.com",
        name="Test User",
        status="active",
        role_id=test_role.id,
    )
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def inactive_user(app):
    """Create an inactive user"""
    user = User(username="inactiveuser", email="inactive@example.com", status="inactive")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def logged_in_client(client, test_user):
    """Client with ``test_user`` logged in through /auth/login"""
    response = client.post("/auth/login", json={"user_id": test_user.id})
    assert response.status_code == 200
    return client


@pytest.fixture
def test_ministry(app):
    ministry = Ministry(ministry_code="FOOD_PANTRY", ministry_name="Food Pantry", has_scale=True)
    db.session.add(ministry)
    db.session.commit()
    return ministry


@pytest.fixture
def test_organization(app):
    organization = Organization(
        organization_code="ACME_FOOD_BANK",
        organization_name="Acme Food Bank",
        contact_first_name="Wile",
        contact_last_name="Coyote",
        city="Springfield",
        state="IL",
    )
    db.session.add(organization)
    db.session.commit()
    return organization


@pytest.fixture
def test_individual(app):
    individual = Individual(
        individual_first_name="Ada",
        individual_last_name="Lovelace",
        address="12 Analytical Way",
        city="Springfield",
        state="IL",
        zip="62701",
        email="ada@example.com",
    )
    db.session.add(individual)
    db.session.commit()
    return individual


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers and ensure testing environment"""
    os.environ["FLASK_ENV"] = "testing"

    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers"""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.slow)
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
