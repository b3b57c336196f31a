# Authentication Feature - Schemas

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Login request schema."""
    
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Login response schema."""
    
    token: str
