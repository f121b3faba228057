"""Shared test fixtures for easysearch-core."""

import sqlite3
from datetime import timedelta

import pytest

from easysearch_core.auth.hashing import PasswordHasher
from easysearch_core.auth.schemas import RegistrationRequest
from easysearch_core.auth.service import AuthService
from easysearch_core.auth.token import TokenSigner
from easysearch_core.config import Settings
from easysearch_core.db.store import SQLiteCredentialStore
from easysearch_core.main import create_app

ACCESS_SECRET = "test-access-secret-0123456789abcdef"
REFRESH_SECRET = "test-refresh-secret-0123456789abcdef"


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a fresh temp-file database.

    Uses bcrypt work factor 4 to keep hashing fast.
    """
    return Settings(
        database_path=str(tmp_path / "easysearch.db"),
        jwt_access_secret=ACCESS_SECRET,
        jwt_access_expires_in="15m",
        jwt_refresh_secret=REFRESH_SECRET,
        jwt_refresh_expires_in="7d",
        bcrypt_work_factor=4,
    )


@pytest.fixture
def store(test_settings):
    """SQLite credential store with schema applied."""
    return SQLiteCredentialStore(test_settings.database_path)


@pytest.fixture
def db_conn(test_settings, store):
    """Raw connection to the test database for direct assertions."""
    conn = sqlite3.connect(test_settings.database_path)
    conn.row_factory = sqlite3.Row
    yield conn
    conn.close()


@pytest.fixture
def hasher():
    return PasswordHasher(work_factor=4)


@pytest.fixture
def access_signer():
    return TokenSigner(ACCESS_SECRET, timedelta(minutes=15), token_type="access")


@pytest.fixture
def refresh_signer():
    return TokenSigner(REFRESH_SECRET, timedelta(days=7), token_type="refresh")


@pytest.fixture
def auth_service(store, access_signer, refresh_signer, hasher):
    return AuthService(store, access_signer, refresh_signer, hasher)


@pytest.fixture
def registration():
    """Valid registration payload."""
    return RegistrationRequest(
        name="Ada",
        email="a@x.com",
        contact_number="+1000",
        password="password1",
    )


@pytest.fixture
def registered(auth_service, store, registration):
    """Register the default user.

    Returns a tuple of (user, tokens) where user is the stored UserRecord.
    """
    tokens = auth_service.register(registration)
    user = store.find_user_by_email_or_contact(email=registration.email)
    return user, tokens


@pytest.fixture
def app(test_settings):
    """Flask app wired to the test settings."""
    app = create_app(test_settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def app_service(app):
    """AuthService instance used by the app under test."""
    return app.extensions["easysearch"]["auth_service"]


@pytest.fixture
def authenticated_client(client, app_service):
    """Client plus a registered user's tokens and auth headers.

    Returns a tuple of (client, tokens, auth_headers).
    """
    tokens = app_service.register(
        RegistrationRequest(
            email="a@x.com",
            contact_number="+1000",
            password="password1",
        )
    )
    auth_headers = {"Authorization": f"Bearer {tokens.access_token}"}
    yield client, tokens, auth_headers
