# Patient Management Feature - Dependencies

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from medportal.database import get_db
from medportal.features.patients.repository import PatientRepository, SQLAlchemyPatientRepository
from medportal.features.patients.service import PatientService


def get_patient_repository(db: AsyncSession = Depends(get_db)) -> PatientRepository:
    return SQLAlchemyPatientRepository(db)


def get_patient_service(
    patients: PatientRepository = Depends(get_patient_repository),
) -> PatientService:
    return PatientService(patients)
