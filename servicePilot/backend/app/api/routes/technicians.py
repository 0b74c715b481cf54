from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_active_technician
from app.db.models.technicians import Technicians
from app.schemas.technicians import (
    TechnicianWorkloadResponse,
    SupportSuggestionRequest,
    SupportSuggestionResponse,
)
from app.services.scheduling import (
    load_technician_workload,
    load_technician_workloads,
    suggest_support_technician,
)

router = APIRouter(prefix="/technicians", tags=["technicians"])


@router.get("/{technician_id}/workload", response_model=TechnicianWorkloadResponse)
def get_technician_workload(
    technician_id: int,
    db: Session = Depends(get_db),
):
    get_active_technician(technician_id, db)
    return TechnicianWorkloadResponse(
        technician_id=technician_id,
        total_hours=load_technician_workload(db, technician_id),
    )


@router.post("/{technician_id}/support-suggestion", response_model=SupportSuggestionResponse)
def get_support_suggestion(
    technician_id: int,
    payload: SupportSuggestionRequest,
    db: Session = Depends(get_db),
):
    get_active_technician(technician_id, db)

    candidate_ids = [
        t.id for t in db.query(Technicians).filter(Technicians.is_active == True).all()
    ]
    suggestion = suggest_support_technician(
        technician_id,
        payload.total_hours,
        candidate_ids,
        load_technician_workloads(db),
    )
    return SupportSuggestionResponse.model_validate(suggestion)
