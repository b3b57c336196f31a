# Documents Feature - Schemas

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class DocumentResponse(BaseModel):
    """Response schema for document metadata (no external object id)."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    patient_id: int
    file_name: str
    file_url: str
    mime_type: str
    uploaded_at: datetime
