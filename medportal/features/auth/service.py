# Authentication Feature - Service

from medportal.core.logging import logger
from medportal.core.security import (
    TokenIssuer,
    dummy_verify,
    get_password_hash,
    verify_password,
)
from medportal.features.auth.models import ROLES, User
from medportal.features.auth.repository import UserRepository
from medportal.shared.exceptions import (
    CredentialsException,
    ValidationException,
    translate_storage_errors,
)


INVALID_CREDENTIALS = "Invalid username or password"


class AuthService:
    """Authentication service for handling login and credential provisioning."""
    
    def __init__(self, users: UserRepository, token_issuer: TokenIssuer):
        self.users = users
        self.token_issuer = token_issuer
    
    async def login(self, username: str, password: str) -> str:
        """
        Authenticate a user and return an access token.
        
        Unknown usernames and wrong passwords produce the same error and take
        a comparable amount of time.
        
        Returns:
            str: Signed access token
        """
        with translate_storage_errors("login"):
            user = await self.users.get_by_username(username)
        
        if user is None:
            dummy_verify()
            logger.info(f"Login failed for unknown username '{username}'")
            raise CredentialsException(INVALID_CREDENTIALS)
        
        if not verify_password(password, user.password_hash):
            logger.info(f"Login failed for user '{username}'")
            raise CredentialsException(INVALID_CREDENTIALS)
        
        token = self.token_issuer.issue(user.id, user.username, user.role)
        logger.info(f"User '{username}' logged in as {user.role}")
        return token
    
    async def create_user(self, username: str, password: str, role: str) -> User:
        """Provision a staff credential with a hashed password."""
        if role not in ROLES:
            raise ValidationException(f"Role must be one of: {', '.join(ROLES)}")
        if not username or not password:
            raise ValidationException("Username and password are required")
        
        with translate_storage_errors("create user"):
            if await self.users.get_by_username(username) is not None:
                raise ValidationException(f"Username '{username}' already exists")
            
            user = User(username=username, password_hash=get_password_hash(password), role=role)
            user = await self.users.create(user)
        
        logger.info(f"Created {role} user '{username}' (id={user.id})")
        return user
