# Prescriptions Feature - Service

from typing import List

from medportal.core.logging import logger
from medportal.features.patients.repository import PatientRepository
from medportal.features.prescriptions.models import Prescription
from medportal.features.prescriptions.repository import PrescriptionRepository
from medportal.features.prescriptions.schemas import CreatePrescriptionRequest
from medportal.shared.exceptions import translate_storage_errors


class PrescriptionService:
    """Service class for prescription operations."""
    
    def __init__(self, prescriptions: PrescriptionRepository, patients: PatientRepository):
        self.prescriptions = prescriptions
        self.patients = patients
    
    async def create_prescription(
        self,
        patient_id: int,
        doctor_id: int,
        request: CreatePrescriptionRequest,
    ) -> Prescription:
        """
        Create a prescription for an existing patient.
        
        Args:
            patient_id: Patient the prescription is for
            doctor_id: Authenticated doctor's user id, taken from the token
            request: Medication details
            
        Returns:
            Created prescription
        """
        with translate_storage_errors("create prescription"):
            # Raises NotFoundException for unknown patients
            await self.patients.get_by_id(patient_id)
            
            prescription = Prescription(
                patient_id=patient_id,
                doctor_id=doctor_id,
                medication=request.medication,
                dosage=request.dosage,
                frequency=request.frequency,
                notes=request.notes,
            )
            prescription = await self.prescriptions.create(prescription)
        
        logger.info(
            f"Created prescription {prescription.id} for patient {patient_id} by doctor {doctor_id}"
        )
        return prescription
    
    async def get_prescriptions_for_patient(self, patient_id: int) -> List[Prescription]:
        with translate_storage_errors("retrieve prescriptions"):
            return await self.prescriptions.list_by_patient(patient_id)
