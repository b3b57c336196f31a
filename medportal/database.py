"""Relational database connection manager."""

from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from medportal.config import settings
from medportal.core.logging import logger
from medportal.shared.models import Base


class Database:
    """SQLAlchemy async engine and session factory manager."""
    
    engine: Optional[AsyncEngine] = None
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None
    
    @classmethod
    async def connect_db(cls, database_url: Optional[str] = None):
        """Create the engine and make sure all tables exist."""
        url = database_url or settings.DATABASE_URL
        cls.engine = create_async_engine(url, echo=settings.DATABASE_ECHO, pool_pre_ping=True)
        cls.session_factory = async_sessionmaker(cls.engine, expire_on_commit=False)
        
        # Import ORM models so their tables are registered on Base.metadata
        from medportal.features.auth.models import User  # noqa: F401
        from medportal.features.patients.models import Patient  # noqa: F401
        from medportal.features.prescriptions.models import Prescription  # noqa: F401
        from medportal.features.documents.models import Document  # noqa: F401
        
        async with cls.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        
        logger.info(f"Connected to database: {cls.engine.url.render_as_string(hide_password=True)}")
    
    @classmethod
    async def close_db(cls):
        """Dispose of the engine and its connection pool."""
        if cls.engine:
            await cls.engine.dispose()
            cls.engine = None
            cls.session_factory = None
            logger.info("Closed database connection")


async def get_db() -> AsyncIterator[AsyncSession]:
    """Dependency yielding one session per request."""
    if Database.session_factory is None:
        raise RuntimeError("Database is not connected")
    async with Database.session_factory() as session:
        yield session
