# Patient Management Feature - Router

from typing import List

from fastapi import APIRouter, Depends, Query, Response, status

from medportal.core.security import Identity
from medportal.features.auth.dependencies import allow_doctor, allow_receptionist, allow_staff
from medportal.features.documents.dependencies import get_document_service
from medportal.features.documents.service import DocumentService
from medportal.features.patients.dependencies import get_patient_service
from medportal.features.patients.schemas import (
    CreatePatientRequest,
    PatientResponse,
    UpdatePatientMedicalRequest,
    UpdatePatientRequest,
)
from medportal.features.patients.service import PatientService
from medportal.shared.schemas import ResourceId


router = APIRouter(prefix="/patients", tags=["Patients"])


# ============== Receptionist Endpoints ==============

@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    request: CreatePatientRequest,
    identity: Identity = Depends(allow_receptionist),
    patient_service: PatientService = Depends(get_patient_service),
):
    """
    Create a new patient.
    
    - **name**: Full name
    - **age**: Age in years (greater than 0)
    - **address**: Postal address
    - **phone_number**: Optional phone number
    """
    return await patient_service.create_patient(request)


# ============== Shared Endpoints ==============

@router.get("", response_model=List[PatientResponse])
async def list_patients(
    identity: Identity = Depends(allow_staff),
    patient_service: PatientService = Depends(get_patient_service),
):
    """List all patients, newest first."""
    return await patient_service.list_patients()


# NOTE: /search MUST be defined BEFORE /{patient_id} to avoid route conflict
@router.get("/search", response_model=List[PatientResponse])
async def search_patients(
    q: str = Query("", description="Case-insensitive substring of the patient name"),
    identity: Identity = Depends(allow_staff),
    patient_service: PatientService = Depends(get_patient_service),
):
    """Search patients by name, ordered alphabetically."""
    return await patient_service.search_patients(q)


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(
    patient_id: ResourceId,
    identity: Identity = Depends(allow_staff),
    patient_service: PatientService = Depends(get_patient_service),
):
    """Get a single patient's details."""
    return await patient_service.get_patient(patient_id)


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: ResourceId,
    request: UpdatePatientRequest,
    identity: Identity = Depends(allow_receptionist),
    patient_service: PatientService = Depends(get_patient_service),
):
    """
    Replace a patient's demographic information.
    
    Diagnosis and notes are never changed by this endpoint.
    """
    return await patient_service.update_patient(patient_id, request)


# ============== Doctor Endpoints ==============

@router.patch("/{patient_id}/medical", response_model=PatientResponse)
async def update_patient_medical(
    patient_id: ResourceId,
    request: UpdatePatientMedicalRequest,
    identity: Identity = Depends(allow_doctor),
    patient_service: PatientService = Depends(get_patient_service),
):
    """
    Update a patient's diagnosis and notes.
    
    Name, age, address and phone number are never changed by this endpoint.
    """
    return await patient_service.update_patient_medical(patient_id, request)


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(
    patient_id: ResourceId,
    identity: Identity = Depends(allow_receptionist),
    patient_service: PatientService = Depends(get_patient_service),
    document_service: DocumentService = Depends(get_document_service),
):
    """
    Delete a patient together with their prescriptions and documents.
    
    Stored files are removed after the rows, best effort.
    """
    documents = await document_service.get_documents_for_patient(patient_id)
    await patient_service.delete_patient(patient_id)
    await document_service.discard_documents(documents)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
