# Patient Management Feature - Schemas

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


# ============== Demographics (receptionist) ==============

class CreatePatientRequest(BaseModel):
    """Request schema for creating a new patient."""
    name: str = Field(..., min_length=1, max_length=200)
    age: int = Field(..., gt=0, lt=200)
    address: str = Field(..., min_length=1, max_length=500)
    phone_number: Optional[str] = Field(None, max_length=32)


class UpdatePatientRequest(BaseModel):
    """Request schema for replacing a patient's demographic fields."""
    name: str = Field(..., min_length=1, max_length=200)
    age: int = Field(..., gt=0, lt=200)
    address: str = Field(..., min_length=1, max_length=500)
    phone_number: Optional[str] = Field(None, max_length=32)


# ============== Medical (doctor) ==============

class UpdatePatientMedicalRequest(BaseModel):
    """Request schema for the doctor-only medical fields."""
    diagnosis: str = Field(..., min_length=1)
    notes: Optional[str] = None


# ============== Patient Response ==============

class PatientResponse(BaseModel):
    """Response schema for patient data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    age: int
    address: str
    phone_number: Optional[str] = None
    diagnosis: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
