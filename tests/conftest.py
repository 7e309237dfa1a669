import os
import shutil
import tempfile

import pytest

# Settings and the engine are built at import time, so the environment must be set first.
_TMP_DIR = tempfile.mkdtemp(prefix="pinifast-tests-")
UPLOAD_DIR = os.path.join(_TMP_DIR, "uploads")

os.environ.update({
    "ENVIRONMENT": "test",
    "LOG_LEVEL": "WARNING",
    "SECRET_KEY": "test-secret-key",
    "JWT_EXPIRATION_MINUTES": "1440",
    "BCRYPT_ROUNDS": "4",
    "DATABASE_PATH": os.path.join(_TMP_DIR, "test.sqlite"),
    "UPLOAD_DIR": UPLOAD_DIR,
    "MAX_FILE_SIZE": "1024",
    "ALLOWED_FILE_TYPES": "txt,png,pdf",
    "DEFAULT_ROLE": "user",
    "ENABLE_ADMIN_BOOTSTRAP": "true",
    "ADMIN_EMAIL": "admin@example.com",
    "ADMIN_PASSWORD": "adminpass123",
})

from fastapi.testclient import TestClient  # noqa: E402

from pinifast.infrastructure.database import Base, SessionLocal, engine, init_db  # noqa: E402
from pinifast.interfaces.deps import (  # noqa: E402
    get_auth_service,
    get_bootstrap_service,
    get_file_service,
    get_product_service,
    get_role_service,
    get_user_service,
)
from pinifast.main import app  # noqa: E402

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "adminpass123"

init_db()


@pytest.fixture(autouse=True)
def clean_state():
    """Fresh tables and an empty uploads directory for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    shutil.rmtree(UPLOAD_DIR, ignore_errors=True)
    os.makedirs(UPLOAD_DIR, exist_ok=True)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_service(db):
    return get_user_service(db)


@pytest.fixture
def role_service(db):
    return get_role_service(db)


@pytest.fixture
def auth_service(db):
    return get_auth_service(db)


@pytest.fixture
def product_service(db):
    return get_product_service(db)


@pytest.fixture
def file_service(db):
    return get_file_service(db)


@pytest.fixture
def bootstrap_service(db):
    return get_bootstrap_service(db)


@pytest.fixture
def seeded_roles(bootstrap_service):
    bootstrap_service.initialize_roles()


@pytest.fixture
def client():
    """App client; entering the context runs the startup bootstrap."""
    with TestClient(app) as test_client:
        yield test_client


def uploaded_files():
    return os.listdir(UPLOAD_DIR)


def login(client, email, password):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["data"]["accessToken"]


def register(client, email, password="secret123", first_name="Test", last_name="User"):
    response = client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "firstName": first_name, "lastName": last_name},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_token(client):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def user_token(client):
    return register(client, "member@example.com")["accessToken"]
