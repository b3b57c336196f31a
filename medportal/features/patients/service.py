# Patient Management Feature - Service

from typing import List

from medportal.core.logging import logger
from medportal.features.patients.models import Patient
from medportal.features.patients.repository import PatientRepository
from medportal.features.patients.schemas import (
    CreatePatientRequest,
    UpdatePatientMedicalRequest,
    UpdatePatientRequest,
)
from medportal.shared.exceptions import ValidationException, translate_storage_errors


class PatientService:
    """
    Service class for patient operations.
    
    Demographic and medical updates are separate operations over disjoint
    field sets; neither path writes the other's fields.
    """
    
    def __init__(self, patients: PatientRepository):
        self.patients = patients
    
    async def create_patient(self, request: CreatePatientRequest) -> Patient:
        """Create a patient with demographic fields only."""
        patient = Patient(
            name=request.name,
            age=request.age,
            address=request.address,
            phone_number=request.phone_number,
        )
        with translate_storage_errors("create patient"):
            patient = await self.patients.create(patient)
        
        logger.info(f"Created patient {patient.id}")
        return patient
    
    async def get_patient(self, patient_id: int) -> Patient:
        with translate_storage_errors("retrieve patient"):
            return await self.patients.get_by_id(patient_id)
    
    async def list_patients(self) -> List[Patient]:
        with translate_storage_errors("list patients"):
            return await self.patients.list_all()
    
    async def update_patient(self, patient_id: int, request: UpdatePatientRequest) -> Patient:
        """Replace name, age, address and phone number."""
        with translate_storage_errors("update patient"):
            patient = await self.patients.update_demographics(
                patient_id,
                name=request.name,
                age=request.age,
                address=request.address,
                phone_number=request.phone_number,
            )
        
        logger.info(f"Updated demographics of patient {patient_id}")
        return patient
    
    async def update_patient_medical(self, patient_id: int, request: UpdatePatientMedicalRequest) -> Patient:
        """Replace diagnosis and notes."""
        with translate_storage_errors("update patient medical info"):
            patient = await self.patients.update_medical(
                patient_id,
                diagnosis=request.diagnosis,
                notes=request.notes,
            )
        
        logger.info(f"Updated medical info of patient {patient_id}")
        return patient
    
    async def delete_patient(self, patient_id: int) -> None:
        with translate_storage_errors("delete patient"):
            await self.patients.delete(patient_id)
        
        logger.info(f"Deleted patient {patient_id}")
    
    async def search_patients(self, query: str) -> List[Patient]:
        """Case-insensitive substring match on name, ordered alphabetically."""
        query = query.strip()
        if not query:
            raise ValidationException("Query parameter 'q' is required")
        
        with translate_storage_errors("search patients"):
            return await self.patients.search_by_name(query)
