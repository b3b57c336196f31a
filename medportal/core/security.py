"""Password hashing and JWT issuing/verification."""

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from medportal.config import settings


# Password hashing context. The bcrypt work factor is fixed by BCRYPT_ROUNDS.
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash. Malformed hashes count as a mismatch."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def dummy_verify() -> None:
    """Spend the same time as a real verification when the user is unknown."""
    pwd_context.dummy_verify()


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenInvalid(TokenError):
    """Bad signature, malformed structure, missing claims or unexpected algorithm."""


class TokenExpired(TokenError):
    """Token signature is valid but its expiry has passed."""


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, as carried in the token claims."""

    user_id: int
    username: str
    role: str


class TokenIssuer:
    """
    Mints and verifies HMAC-signed access tokens.

    Claims: ``sub`` (user id as a string), ``username``, ``role`` and ``exp``
    (epoch seconds). Only the configured HS* algorithm is accepted on verify,
    so tokens declaring ``none`` or an asymmetric algorithm are rejected.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(hours=72),
    ):
        if not algorithm.startswith("HS"):
            raise ValueError(f"Unsupported token algorithm: {algorithm}")
        if not secret_key:
            raise ValueError("Token secret key must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def issue(self, user_id: int, username: str, role: str, issued_at: Optional[datetime] = None) -> str:
        """Create a signed token that expires ``expires_delta`` after ``issued_at``."""
        issued_at = issued_at or datetime.now(timezone.utc)
        expire = issued_at + self.expires_delta

        to_encode = {
            "sub": str(user_id),
            "username": username,
            "role": role,
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """
        Decode and verify a token.

        Raises:
            TokenExpired: Signature is valid but now >= exp
            TokenInvalid: Any other failure
        """
        try:
            header = jwt.get_unverified_header(token)
        except JWTError as e:
            raise TokenInvalid("Malformed token") from e

        if header.get("alg") != self.algorithm:
            raise TokenInvalid(f"Unexpected signing algorithm: {header.get('alg')}")

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except ExpiredSignatureError as e:
            raise TokenExpired("Token has expired") from e
        except JWTError as e:
            raise TokenInvalid(str(e)) from e

        # The library still accepts the exact second of expiry
        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            raise TokenInvalid("Invalid expiry claim")
        if time.time() >= exp:
            raise TokenExpired("Token has expired")

        username = payload.get("username")
        role = payload.get("role")
        if not isinstance(username, str) or not isinstance(role, str):
            raise TokenInvalid("Missing identity claims")

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise TokenInvalid("Invalid subject claim") from e

        return Identity(user_id=user_id, username=username, role=role)


def create_token_issuer() -> TokenIssuer:
    """Build the issuer from application settings."""
    return TokenIssuer(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expires_delta=timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS),
    )
