# Prescriptions Feature - Schemas

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreatePrescriptionRequest(BaseModel):
    """
    Request schema for a new prescription.
    
    There is no doctor_id field: the prescribing doctor is always the
    authenticated caller, and any doctor_id sent by the client is ignored.
    """
    medication: str = Field(..., min_length=1, max_length=200)
    dosage: str = Field(..., min_length=1, max_length=100)
    frequency: str = Field(..., min_length=1, max_length=100)
    notes: Optional[str] = None


class PrescriptionResponse(BaseModel):
    """Response schema for prescription data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    patient_id: int
    doctor_id: int
    medication: str
    dosage: str
    frequency: str
    notes: Optional[str] = None
    created_at: datetime
