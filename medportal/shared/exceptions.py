from contextlib import contextmanager

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from medportal.core.logging import logger


class ValidationException(HTTPException):
    """Exception for malformed or missing input."""
    
    def __init__(self, detail: str = "Invalid request"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class CredentialsException(HTTPException):
    """Exception for missing, invalid or expired credentials."""
    
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenException(HTTPException):
    """Exception for a role that is not permitted on the endpoint."""
    
    def __init__(self, detail: str = "You don't have permission to access this resource"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class NotFoundException(HTTPException):
    """Exception for resource not found."""
    
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class UploadFailedException(HTTPException):
    """Exception for an object store that rejected or could not take an upload."""
    
    def __init__(self, detail: str = "Failed to upload document"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )


class InternalException(HTTPException):
    """Exception for unexpected storage or driver failures."""
    
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )


@contextmanager
def translate_storage_errors(action: str):
    """
    Re-raise unexpected database failures as InternalException.
    
    Taxonomy exceptions raised inside the block (for example NotFoundException
    from a repository) pass through unchanged.
    
    Args:
        action: Short description used in the log line and client message
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"Database error while trying to {action}: {e}")
        raise InternalException(f"Failed to {action}") from e
