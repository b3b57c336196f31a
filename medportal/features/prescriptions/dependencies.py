# Prescriptions Feature - Dependencies

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from medportal.database import get_db
from medportal.features.patients.dependencies import get_patient_repository
from medportal.features.patients.repository import PatientRepository
from medportal.features.prescriptions.repository import (
    PrescriptionRepository,
    SQLAlchemyPrescriptionRepository,
)
from medportal.features.prescriptions.service import PrescriptionService


def get_prescription_repository(db: AsyncSession = Depends(get_db)) -> PrescriptionRepository:
    return SQLAlchemyPrescriptionRepository(db)


def get_prescription_service(
    prescriptions: PrescriptionRepository = Depends(get_prescription_repository),
    patients: PatientRepository = Depends(get_patient_repository),
) -> PrescriptionService:
    return PrescriptionService(prescriptions, patients)
