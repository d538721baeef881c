import os
import tempfile

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")
os.environ.setdefault("IMAGE_STORAGE", "local")
os.environ.setdefault("MEDIA_DIR", tempfile.mkdtemp(prefix="hr-media-"))
os.environ.setdefault("DB_PATH", os.path.join(tempfile.mkdtemp(prefix="hr-db-"), "db.json"))

import pytest
from fastapi.testclient import TestClient
from passlib.hash import pbkdf2_sha256

from app.db.backends import JsonFileBackend
from app.db.document_store import DocumentStore
from app.deps import get_image_storage, get_store
from app.main import app
from app.services.image_storage import LocalImageStorage

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-pass"


def add_user(store, email, password, role="admin", verified=True, name="User"):
    with store.with_write_lock() as db:
        return dict(db.insert("users", {
            "email": email,
            "name": name,
            "password": pbkdf2_sha256.hash(password),
            "role": role,
            "verified": verified,
        }))


def add_position(store, name):
    with store.with_write_lock() as db:
        return dict(db.insert("positions", {"name": name}))


def login_headers(client, email, password):
    r = client.post("/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['accessToken']}"}


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "db.json"


@pytest.fixture
def store(db_path):
    return DocumentStore(JsonFileBackend(str(db_path)))


@pytest.fixture
def client(store, tmp_path):
    media = LocalImageStorage(str(tmp_path / "media"), "/media")
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_image_storage] = lambda: media
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin(store):
    return add_user(store, ADMIN_EMAIL, ADMIN_PASSWORD, name="Admin")


@pytest.fixture
def admin_headers(client, admin):
    return login_headers(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def create_employee(client, admin_headers):
    counter = {"n": 0}

    def _create(**fields):
        counter["n"] += 1
        n = counter["n"]
        body = {
            "name": f"Employee {n}",
            "code": f"E{n:03d}",
            "email": f"employee{n}@example.com",
            "phone": f"0900{n:06d}",
            "identity": f"ID{n:06d}",
            **fields,
        }
        r = client.post("/employees", json=body, headers=admin_headers)
        assert r.status_code == 201, r.text
        return r.json()

    return _create


@pytest.fixture
def create_project(client, admin_headers):
    def _create(manager, employees=(), **fields):
        body = {"name": "Project", "manager": manager, "employees": [{"employeeId": e} for e in employees], **fields}
        r = client.post("/projects", json=body, headers=admin_headers)
        assert r.status_code == 201, r.text
        return r.json()

    return _create
