# Patient Management Feature - Repository

from typing import List, Optional, Protocol

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from medportal.features.patients.models import Patient
from medportal.shared.exceptions import NotFoundException


class PatientRepository(Protocol):
    async def create(self, patient: Patient) -> Patient:
        ...

    async def get_by_id(self, patient_id: int) -> Patient:
        ...

    async def list_all(self) -> List[Patient]:
        ...

    async def update_demographics(
        self, patient_id: int, name: str, age: int, address: str, phone_number: Optional[str]
    ) -> Patient:
        ...

    async def update_medical(self, patient_id: int, diagnosis: str, notes: Optional[str]) -> Patient:
        ...

    async def delete(self, patient_id: int) -> None:
        ...

    async def search_by_name(self, query: str) -> List[Patient]:
        ...


class SQLAlchemyPatientRepository:
    """Patient rows in the relational store. Each write commits on its own."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _commit(self):
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def create(self, patient: Patient) -> Patient:
        self.session.add(patient)
        await self._commit()
        await self.session.refresh(patient)
        return patient

    async def get_by_id(self, patient_id: int) -> Patient:
        patient = await self.session.get(Patient, patient_id)
        if patient is None:
            raise NotFoundException("Patient not found")
        return patient

    async def list_all(self) -> List[Patient]:
        result = await self.session.execute(
            select(Patient).order_by(Patient.created_at.desc(), Patient.id.desc())
        )
        return list(result.scalars().all())

    async def update_demographics(
        self, patient_id: int, name: str, age: int, address: str, phone_number: Optional[str]
    ) -> Patient:
        patient = await self.get_by_id(patient_id)
        patient.name = name
        patient.age = age
        patient.address = address
        patient.phone_number = phone_number
        await self._commit()
        await self.session.refresh(patient)
        return patient

    async def update_medical(self, patient_id: int, diagnosis: str, notes: Optional[str]) -> Patient:
        patient = await self.get_by_id(patient_id)
        patient.diagnosis = diagnosis
        patient.notes = notes
        await self._commit()
        await self.session.refresh(patient)
        return patient

    async def delete(self, patient_id: int) -> None:
        patient = await self.get_by_id(patient_id)
        await self.session.delete(patient)
        await self._commit()

    async def search_by_name(self, query: str) -> List[Patient]:
        # Match the query literally, not as a LIKE pattern
        escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        result = await self.session.execute(
            select(Patient)
            .where(Patient.name.ilike(f"%{escaped}%", escape="\\"))
            .order_by(func.lower(Patient.name).asc(), Patient.id.asc())
        )
        return list(result.scalars().all())
