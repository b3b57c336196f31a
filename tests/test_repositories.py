"""SQLAlchemy repositories against an in-memory SQLite database."""

import asyncio

import pytest
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medportal.database import Database
from medportal.features.auth.models import User
from medportal.features.auth.repository import SQLAlchemyUserRepository
from medportal.features.documents.models import Document
from medportal.features.documents.repository import SQLAlchemyDocumentRepository
from medportal.features.documents.service import DocumentService
from medportal.features.patients.models import Patient
from medportal.features.patients.repository import SQLAlchemyPatientRepository
from medportal.features.prescriptions.models import Prescription
from medportal.features.prescriptions.repository import SQLAlchemyPrescriptionRepository
from medportal.shared.exceptions import NotFoundException

from tests.fakes import FakeObjectStore


def run_with_session(scenario):
    """Run ``scenario(session)`` on a fresh in-memory database."""

    async def runner():
        await Database.connect_db("sqlite+aiosqlite://")
        try:
            async with Database.session_factory() as session:
                return await scenario(session)
        finally:
            await Database.close_db()

    return asyncio.run(runner())


def test_user_repository():
    async def scenario(session):
        users = SQLAlchemyUserRepository(session)
        created = await users.create(User(username="rita", password_hash="hash", role="receptionist"))

        assert created.id is not None
        assert (await users.get_by_username("rita")).role == "receptionist"
        assert await users.get_by_username("nobody") is None

    run_with_session(scenario)


def test_patient_repository_lifecycle():
    async def scenario(session):
        patients = SQLAlchemyPatientRepository(session)
        patient = await patients.create(Patient(name="Alice", age=30, address="X"))

        assert patient.id is not None
        assert patient.created_at is not None
        assert patient.diagnosis is None

        updated = await patients.update_medical(patient.id, diagnosis="Flu", notes=None)
        assert updated.diagnosis == "Flu"
        assert updated.name == "Alice"

        updated = await patients.update_demographics(patient.id, "Alicia", 31, "Y", "555")
        assert (updated.name, updated.age, updated.address, updated.phone_number) == ("Alicia", 31, "Y", "555")
        assert updated.diagnosis == "Flu"

        await patients.delete(patient.id)
        with pytest.raises(NotFoundException):
            await patients.get_by_id(patient.id)
        with pytest.raises(NotFoundException):
            await patients.delete(patient.id)
        with pytest.raises(NotFoundException):
            await patients.update_medical(patient.id, diagnosis="Flu", notes=None)

    run_with_session(scenario)


def test_patient_search_and_list_order():
    async def scenario(session):
        patients = SQLAlchemyPatientRepository(session)
        for name in ("Zoe Carter", "adam carson", "Bob Smith", "100% Real"):
            await patients.create(Patient(name=name, age=20, address="X"))

        found = await patients.search_by_name("CAR")
        assert [p.name for p in found] == ["adam carson", "Zoe Carter"]

        # LIKE wildcards in the query are matched literally
        assert [p.name for p in await patients.search_by_name("%")] == ["100% Real"]
        assert await patients.search_by_name("_") == []

        listed = await patients.list_all()
        assert [p.name for p in listed] == ["100% Real", "Bob Smith", "adam carson", "Zoe Carter"]

    run_with_session(scenario)


def test_prescription_repository():
    async def scenario(session):
        patient = await SQLAlchemyPatientRepository(session).create(Patient(name="A", age=1, address="X"))
        prescriptions = SQLAlchemyPrescriptionRepository(session)

        for medication in ("First", "Second"):
            await prescriptions.create(
                Prescription(
                    patient_id=patient.id,
                    doctor_id=2,
                    medication=medication,
                    dosage="1",
                    frequency="daily",
                )
            )

        listed = await prescriptions.list_by_patient(patient.id)
        assert [p.medication for p in listed] == ["Second", "First"]
        assert await prescriptions.list_by_patient(patient.id + 1) == []

    run_with_session(scenario)


def test_document_repository():
    async def scenario(session):
        patient = await SQLAlchemyPatientRepository(session).create(Patient(name="A", age=1, address="X"))
        documents = SQLAlchemyDocumentRepository(session)

        created = []
        for name in ("a.pdf", "b.pdf"):
            created.append(
                await documents.create(
                    Document(
                        patient_id=patient.id,
                        file_name=name,
                        file_url=f"https://example.com/{name}",
                        object_id=f"docs/{name}",
                        mime_type="application/pdf",
                    )
                )
            )

        assert created[0].uploaded_at is not None
        assert [d.file_name for d in await documents.list_by_patient(patient.id)] == ["b.pdf", "a.pdf"]
        assert (await documents.get_by_id(created[0].id)).object_id == "docs/a.pdf"

        await documents.delete(created[0].id)
        with pytest.raises(NotFoundException):
            await documents.get_by_id(created[0].id)
        with pytest.raises(NotFoundException):
            await documents.delete(created[0].id)
        assert [d.file_name for d in await documents.list_by_patient(patient.id)] == ["b.pdf"]

    run_with_session(scenario)


def test_upload_keeps_object_when_row_is_committed(monkeypatch):
    async def scenario(session):
        patients = SQLAlchemyPatientRepository(session)
        patient = await patients.create(Patient(name="A", age=1, address="X"))
        store = FakeObjectStore()
        service = DocumentService(SQLAlchemyDocumentRepository(session), patients, store, folder="docs")

        async def broken_refresh(*args, **kwargs):
            raise SQLAlchemyError("connection lost after commit")

        # Anything that reloads the row after the commit now fails
        monkeypatch.setattr(AsyncSession, "refresh", broken_refresh)

        document = await service.upload_document(patient.id, b"%PDF", "a.pdf", "application/pdf")

        rows = [tuple(row) for row in await session.execute(select(Document.id, Document.object_id))]
        assert rows == [(document.id, document.object_id)]
        assert document.uploaded_at is not None
        assert store.delete_calls == []
        assert list(store.objects) == [document.object_id]

    run_with_session(scenario)
