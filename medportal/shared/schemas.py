from typing import Annotated

from fastapi import Path
from pydantic import BaseModel


# Primary keys are 32-bit integer columns
MAX_RESOURCE_ID = 2**31 - 1

ResourceId = Annotated[int, Path(gt=0, le=MAX_RESOURCE_ID)]


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""
    
    error: str


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str = "ok"
