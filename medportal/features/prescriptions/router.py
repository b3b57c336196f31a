# Prescriptions Feature - Router

from typing import List

from fastapi import APIRouter, Depends, status

from medportal.core.security import Identity
from medportal.features.auth.dependencies import allow_doctor, allow_staff
from medportal.features.prescriptions.dependencies import get_prescription_service
from medportal.features.prescriptions.schemas import CreatePrescriptionRequest, PrescriptionResponse
from medportal.features.prescriptions.service import PrescriptionService
from medportal.shared.schemas import ResourceId


router = APIRouter(prefix="/patients/{patient_id}/prescriptions", tags=["Prescriptions"])


@router.post("", response_model=PrescriptionResponse, status_code=status.HTTP_201_CREATED)
async def create_prescription(
    patient_id: ResourceId,
    request: CreatePrescriptionRequest,
    identity: Identity = Depends(allow_doctor),
    prescription_service: PrescriptionService = Depends(get_prescription_service),
):
    """
    Create a prescription for a patient.
    
    The prescribing doctor is taken from the access token.
    
    - **medication**: Drug name
    - **dosage**: Amount per dose
    - **frequency**: How often to take it
    - **notes**: Optional instructions
    """
    return await prescription_service.create_prescription(
        patient_id=patient_id,
        doctor_id=identity.user_id,
        request=request,
    )


@router.get("", response_model=List[PrescriptionResponse])
async def list_prescriptions(
    patient_id: ResourceId,
    identity: Identity = Depends(allow_staff),
    prescription_service: PrescriptionService = Depends(get_prescription_service),
):
    """List a patient's prescriptions, newest first."""
    return await prescription_service.get_prescriptions_for_patient(patient_id)
