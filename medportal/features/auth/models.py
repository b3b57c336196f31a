# Authentication Feature - Models

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from medportal.shared.models import Base


RECEPTIONIST = "receptionist"
DOCTOR = "doctor"
ROLES = (RECEPTIONIST, DOCTOR)


class User(Base):
    """Staff credential. Provisioned by an administrator, never via the API."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False)  # "receptionist" | "doctor"
