# Prescriptions Feature - Repository

from typing import List, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medportal.features.prescriptions.models import Prescription


class PrescriptionRepository(Protocol):
    async def create(self, prescription: Prescription) -> Prescription:
        ...

    async def list_by_patient(self, patient_id: int) -> List[Prescription]:
        ...


class SQLAlchemyPrescriptionRepository:
    """Prescription rows. There is deliberately no update or delete."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, prescription: Prescription) -> Prescription:
        self.session.add(prescription)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(prescription)
        return prescription

    async def list_by_patient(self, patient_id: int) -> List[Prescription]:
        result = await self.session.execute(
            select(Prescription)
            .where(Prescription.patient_id == patient_id)
            .order_by(Prescription.created_at.desc(), Prescription.id.desc())
        )
        return list(result.scalars().all())
