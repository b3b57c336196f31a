# Documents Feature - Service

import uuid
from typing import List, Optional

from medportal.core.logging import logger
from medportal.core.storage import ObjectStore, StorageError, StoredObject
from medportal.features.documents.models import Document
from medportal.features.documents.repository import DocumentRepository
from medportal.features.patients.repository import PatientRepository
from medportal.shared.exceptions import UploadFailedException, translate_storage_errors


def build_object_key(folder: str, patient_id: int, file_name: str) -> str:
    """
    Object-store key for a patient file.

    Namespaced by patient and original file name; the random segment keeps
    every upload in its own object so each row owns exactly one object.
    """
    safe_name = file_name.replace("\\", "_").replace("/", "_")
    return f"{folder}/patient_{patient_id}/{uuid.uuid4().hex}_{safe_name}"


class DocumentService:
    """
    Coordinates the object store and the document table.

    Upload is a two-step saga: write the object, then insert the row. When
    the insert fails the object is deleted once, best effort, so a failure
    leaves at worst an orphaned object in the store and never a row pointing
    at nothing.
    """

    def __init__(
        self,
        documents: DocumentRepository,
        patients: PatientRepository,
        store: ObjectStore,
        folder: str = "patient_documents",
    ):
        self.documents = documents
        self.patients = patients
        self.store = store
        self.folder = folder

    async def upload_document(
        self,
        patient_id: int,
        data: bytes,
        file_name: str,
        content_type: Optional[str] = None,
    ) -> Document:
        """
        Store a file and persist its metadata.

        Args:
            patient_id: Owner of the document
            data: File content
            file_name: Original client file name
            content_type: Client-declared MIME type, if any

        Returns:
            The persisted document, with id and upload time

        Raises:
            NotFoundException: Unknown patient (nothing is uploaded)
            UploadFailedException: The object store rejected the file
            InternalException: The metadata insert failed (object compensated)
        """
        with translate_storage_errors("upload document"):
            await self.patients.get_by_id(patient_id)

        key = build_object_key(self.folder, patient_id, file_name)
        logger.info(f"Starting document upload for patient {patient_id}: {file_name}")

        try:
            stored = await self.store.upload(data, key, content_type)
        except StorageError as e:
            logger.error(f"Object store upload failed for patient {patient_id}: {e}")
            raise UploadFailedException("Failed to upload document")

        document = Document(
            patient_id=patient_id,
            file_name=file_name,
            file_url=stored.url,
            object_id=stored.object_id,
            mime_type=content_type or "application/octet-stream",
        )

        try:
            with translate_storage_errors("save document"):
                document = await self.documents.create(document)
        except Exception:
            logger.error(f"Failed to save document metadata; rolling back object {stored.object_id}")
            await self._discard_object(stored)
            raise

        logger.info(f"Document {document.id} saved for patient {patient_id}")
        return document

    async def _discard_object(self, stored: StoredObject) -> None:
        """Compensating delete. Failures are logged and never raised."""
        try:
            await self.store.delete(stored.object_id)
            logger.info(f"Compensating delete of object {stored.object_id} succeeded")
        except Exception as e:
            logger.error(f"Compensating delete of object {stored.object_id} failed, object orphaned: {e}")

    async def get_documents_for_patient(self, patient_id: int) -> List[Document]:
        with translate_storage_errors("retrieve documents"):
            return await self.documents.list_by_patient(patient_id)

    async def delete_document(self, document_id: int) -> None:
        """
        Delete the object and the row.

        The object-store delete is best effort; the row is removed even when
        it fails. Not-found is decided by the row alone.
        """
        with translate_storage_errors("delete document"):
            document = await self.documents.get_by_id(document_id)

        await self._delete_object(document)

        with translate_storage_errors("delete document"):
            await self.documents.delete(document_id)

        logger.info(f"Deleted document {document_id}")

    async def discard_documents(self, documents: List[Document]) -> None:
        """
        Delete the stored objects of documents whose rows are already gone.

        Used after a patient delete has cascaded over the document rows.
        """
        for document in documents:
            await self._delete_object(document)

    async def _delete_object(self, document: Document) -> None:
        try:
            await self.store.delete(document.object_id)
        except Exception as e:
            logger.warning(f"Failed to delete object {document.object_id} for document {document.id}: {e}")
