# Authentication Feature - Repository

from typing import Optional, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medportal.features.auth.models import User


class UserRepository(Protocol):
    async def get_by_username(self, username: str) -> Optional[User]:
        ...

    async def create(self, user: User) -> User:
        ...


class SQLAlchemyUserRepository:
    """Credential store over the users table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create(self, user: User) -> User:
        self.session.add(user)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(user)
        return user
