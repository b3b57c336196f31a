# Documents Feature - Router

import asyncio
from typing import Awaitable, List, Optional, TypeVar

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from medportal.config import settings
from medportal.core.logging import logger
from medportal.core.security import Identity
from medportal.features.auth.dependencies import allow_receptionist, allow_staff
from medportal.features.documents.dependencies import get_document_service
from medportal.features.documents.schemas import DocumentResponse
from medportal.features.documents.service import DocumentService
from medportal.shared.exceptions import ValidationException
from medportal.shared.schemas import ResourceId


T = TypeVar("T")


router = APIRouter(tags=["Documents"])


async def run_to_completion(coro: Awaitable[T]) -> T:
    """
    Await ``coro`` in its own task and keep waiting for it if the caller is
    cancelled.

    A client disconnect then cannot abandon the upload between its steps,
    and the request-scoped database session stays open until the task is
    done. The cancellation is re-raised afterwards.
    """
    task = asyncio.ensure_future(coro)
    cancelled = False
    while True:
        try:
            result = await asyncio.shield(task)
            break
        except asyncio.CancelledError:
            if task.done():
                raise
            cancelled = True

    if cancelled:
        logger.info("Upload finished after the request was cancelled")
        raise asyncio.CancelledError()
    return result


@router.post(
    "/patients/{patient_id}/documents",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_document(
    patient_id: ResourceId,
    document: Optional[UploadFile] = File(None, description="The document to upload"),
    identity: Identity = Depends(allow_staff),
    document_service: DocumentService = Depends(get_document_service),
):
    """
    Upload a file (pdf, jpg, ...) for a patient.
    
    Send it as multipart form-data in the **document** field.
    """
    if document is None or not document.filename:
        raise ValidationException("File 'document' is required in form-data")
    
    # One byte past the limit is enough to reject the file
    data = await document.read(settings.max_upload_bytes + 1)
    if not data:
        raise ValidationException("Uploaded file is empty")
    if len(data) > settings.max_upload_bytes:
        raise ValidationException(
            f"File size exceeds {settings.MAX_UPLOAD_SIZE_MB}MB limit"
        )
    
    return await run_to_completion(
        document_service.upload_document(
            patient_id=patient_id,
            data=data,
            file_name=document.filename,
            content_type=document.content_type,
        )
    )


@router.get("/patients/{patient_id}/documents", response_model=List[DocumentResponse])
async def list_documents(
    patient_id: ResourceId,
    identity: Identity = Depends(allow_staff),
    document_service: DocumentService = Depends(get_document_service),
):
    """List a patient's documents, most recently uploaded first."""
    return await document_service.get_documents_for_patient(patient_id)


@router.delete("/documents/{doc_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    doc_id: ResourceId,
    identity: Identity = Depends(allow_receptionist),
    document_service: DocumentService = Depends(get_document_service),
):
    """Delete a document from the system and from cloud storage."""
    await document_service.delete_document(doc_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
