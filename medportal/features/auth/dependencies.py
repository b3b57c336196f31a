# Authentication Feature - Dependencies

from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession

from medportal.core.logging import logger
from medportal.core.security import Identity, TokenExpired, TokenInvalid, TokenIssuer, create_token_issuer
from medportal.database import get_db
from medportal.features.auth.models import DOCTOR, RECEPTIONIST
from medportal.features.auth.repository import SQLAlchemyUserRepository, UserRepository
from medportal.features.auth.service import AuthService
from medportal.shared.exceptions import CredentialsException, ForbiddenException


# Raw Authorization header; the Bearer format is checked strictly below
authorization_header = APIKeyHeader(name="Authorization", scheme_name="BearerAuth", auto_error=False)


@lru_cache()
def get_token_issuer() -> TokenIssuer:
    """Token issuer built once from settings."""
    return create_token_issuer()


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return SQLAlchemyUserRepository(db)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(users, token_issuer)


async def get_current_identity(
    authorization: Optional[str] = Depends(authorization_header),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> Identity:
    """
    Auth gate: resolve the caller from ``Authorization: Bearer <token>``.

    Args:
        authorization: Raw Authorization header value
        token_issuer: Verifier for the bearer token

    Returns:
        Identity: User id, username and role from the token

    Raises:
        CredentialsException: Header missing, malformed, or token rejected
    """
    if not authorization:
        raise CredentialsException("Authorization header required")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise CredentialsException("Authorization header format must be Bearer {token}")

    try:
        return token_issuer.verify(parts[1])
    except TokenExpired:
        logger.info("Rejected expired token")
        raise CredentialsException("Token has expired")
    except TokenInvalid as e:
        logger.warning(f"Rejected invalid token: {e}")
        raise CredentialsException("Invalid token")


def require_roles(*allowed_roles: str):
    """
    Role gate factory.

    The returned dependency runs after the auth gate and lets the request
    through only when the caller's role exactly matches one of
    ``allowed_roles``. Roles have no hierarchy.
    """

    async def role_gate(identity: Optional[Identity] = Depends(get_current_identity)) -> Identity:
        if identity is None or not identity.role:
            logger.error("Role gate reached without an authenticated identity")
            raise ForbiddenException("User role not found in token")

        if identity.role not in allowed_roles:
            logger.warning(
                f"User '{identity.username}' with role '{identity.role}' denied; "
                f"requires one of {list(allowed_roles)}"
            )
            raise ForbiddenException()

        return identity

    return role_gate


allow_receptionist = require_roles(RECEPTIONIST)
allow_doctor = require_roles(DOCTOR)
allow_staff = require_roles(RECEPTIONIST, DOCTOR)
