# Documents Feature - Dependencies

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from medportal.config import settings
from medportal.core.storage import ObjectStore, create_object_store
from medportal.database import get_db
from medportal.features.documents.repository import DocumentRepository, SQLAlchemyDocumentRepository
from medportal.features.documents.service import DocumentService
from medportal.features.patients.dependencies import get_patient_repository
from medportal.features.patients.repository import PatientRepository


@lru_cache()
def get_object_store() -> ObjectStore:
    """Object store client shared by all requests."""
    return create_object_store()


def get_document_repository(db: AsyncSession = Depends(get_db)) -> DocumentRepository:
    return SQLAlchemyDocumentRepository(db)


def get_document_service(
    documents: DocumentRepository = Depends(get_document_repository),
    patients: PatientRepository = Depends(get_patient_repository),
    store: ObjectStore = Depends(get_object_store),
) -> DocumentService:
    return DocumentService(documents, patients, store, folder=settings.DOCUMENT_FOLDER)
