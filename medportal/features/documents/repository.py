# Documents Feature - Repository

from typing import List, Protocol

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from medportal.features.documents.models import Document
from medportal.shared.exceptions import NotFoundException


class DocumentRepository(Protocol):
    async def create(self, document: Document) -> Document:
        ...

    async def get_by_id(self, document_id: int) -> Document:
        ...

    async def list_by_patient(self, patient_id: int) -> List[Document]:
        ...

    async def delete(self, document_id: int) -> None:
        ...


class SQLAlchemyDocumentRepository:
    """Document metadata rows."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _commit(self):
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def create(self, document: Document) -> Document:
        # No refresh after commit: id and uploaded_at are set by the flush, and
        # a failure past this point must not look like a failed insert
        self.session.add(document)
        await self._commit()
        return document

    async def get_by_id(self, document_id: int) -> Document:
        document = await self.session.get(Document, document_id)
        if document is None:
            raise NotFoundException("Document not found")
        return document

    async def list_by_patient(self, patient_id: int) -> List[Document]:
        result = await self.session.execute(
            select(Document)
            .where(Document.patient_id == patient_id)
            .order_by(Document.uploaded_at.desc(), Document.id.desc())
        )
        return list(result.scalars().all())

    async def delete(self, document_id: int) -> None:
        # Hard delete by id; zero rows means a concurrent delete won the race
        result = await self.session.execute(delete(Document).where(Document.id == document_id))
        await self._commit()
        if result.rowcount == 0:
            raise NotFoundException("Document not found")
