import os

# Test settings must be in place before medportal.config is imported
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from medportal.core.security import get_password_hash
from medportal.features.auth.dependencies import get_token_issuer, get_user_repository
from medportal.features.auth.models import DOCTOR, RECEPTIONIST, User
from medportal.features.documents.dependencies import get_document_repository, get_object_store
from medportal.features.patients.dependencies import get_patient_repository
from medportal.features.prescriptions.dependencies import get_prescription_repository
from medportal.main import app

from tests.fakes import FakeBackend


API = "/api/v1"
PASSWORD = "correct horse battery staple"


@pytest.fixture
def backend():
    backend = FakeBackend()
    backend.users.users = {
        "rita": User(id=1, username="rita", password_hash=get_password_hash(PASSWORD), role=RECEPTIONIST),
        "dr.house": User(id=2, username="dr.house", password_hash=get_password_hash(PASSWORD), role=DOCTOR),
    }
    return backend


@pytest.fixture
def client(backend):
    app.dependency_overrides[get_user_repository] = lambda: backend.users
    app.dependency_overrides[get_patient_repository] = lambda: backend.patients
    app.dependency_overrides[get_prescription_repository] = lambda: backend.prescriptions
    app.dependency_overrides[get_document_repository] = lambda: backend.documents
    app.dependency_overrides[get_object_store] = lambda: backend.store
    yield TestClient(app)
    app.dependency_overrides.clear()


def bearer(user_id: int, username: str, role: str) -> dict:
    token = get_token_issuer().issue(user_id, username, role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def receptionist_headers():
    return bearer(1, "rita", RECEPTIONIST)


@pytest.fixture
def doctor_headers():
    return bearer(2, "dr.house", DOCTOR)


@pytest.fixture
def patient_id(client, receptionist_headers):
    response = client.post(
        f"{API}/patients",
        json={"name": "Alice Smith", "age": 30, "address": "1 Main St", "phone_number": "555-0100"},
        headers=receptionist_headers,
    )
    assert response.status_code == 201
    return response.json()["id"]
