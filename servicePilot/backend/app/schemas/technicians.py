from pydantic import BaseModel
from typing import Optional


class TechnicianWorkloadResponse(BaseModel):
    technician_id: int
    total_hours: float


class SupportSuggestionRequest(BaseModel):
    total_hours: float


class SupportSuggestionResponse(BaseModel):
    suggested: bool
    reason: str
    technician_id: Optional[int] = None

    class Config:
        from_attributes = True
