from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_active_technician
from app.db.models.work_schedules import WorkSchedules
from app.schemas.work_schedules import (
    WorkScheduleCreate,
    WorkScheduleUpdate,
    WorkScheduleResponse,
    ResolvedScheduleResponse,
)
from app.services.scheduling import InvalidScheduleError, load_work_schedule, working_hours_per_day
from app.services.scheduling.business_calendar import validate_schedule
from app.services.scheduling.data_loader import to_work_schedule

router = APIRouter(prefix="/work-schedules", tags=["work-schedules"])


def _validate(rule: WorkSchedules) -> None:
    try:
        validate_schedule(to_work_schedule(rule))
    except InvalidScheduleError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


def _deactivate_other_schedules(db: Session, employee_id: int, keep_id: Optional[int] = None) -> None:
    # one active schedule per technician
    query = db.query(WorkSchedules).filter(
        WorkSchedules.employee_id == employee_id,
        WorkSchedules.is_active == True,
    )
    if keep_id is not None:
        query = query.filter(WorkSchedules.id != keep_id)
    query.update({WorkSchedules.is_active: False}, synchronize_session=False)


@router.post("", response_model=WorkScheduleResponse, status_code=status.HTTP_201_CREATED)
def create_work_schedule(
    payload: WorkScheduleCreate,
    db: Session = Depends(get_db),
):
    get_active_technician(payload.employee_id, db)

    schedule = WorkSchedules(**payload.model_dump())
    _validate(schedule)

    if schedule.is_active:
        _deactivate_other_schedules(db, payload.employee_id)

    db.add(schedule)
    db.commit()
    db.refresh(schedule)
    return schedule


@router.get("/employee/{employee_id}", response_model=ResolvedScheduleResponse)
def get_schedule_for_employee(
    employee_id: int,
    db: Session = Depends(get_db),
):
    get_active_technician(employee_id, db)

    resolution = load_work_schedule(db, employee_id)
    schedule = resolution.schedule
    return ResolvedScheduleResponse(
        employee_id=employee_id,
        work_days=sorted(schedule.work_days),
        start_time=schedule.start_time,
        end_time=schedule.end_time,
        break_duration_minutes=schedule.break_duration_minutes,
        working_hours_per_day=working_hours_per_day(schedule),
        is_default=resolution.is_default,
    )


@router.put("/{schedule_id}", response_model=WorkScheduleResponse)
def update_work_schedule(
    schedule_id: int,
    payload: WorkScheduleUpdate,
    db: Session = Depends(get_db),
):
    schedule = db.query(WorkSchedules).filter(WorkSchedules.id == schedule_id).first()
    if not schedule:
        raise HTTPException(status_code=404, detail="Work schedule not found")

    update_data = payload.model_dump(exclude_unset=True)
    null_fields = [field for field, value in update_data.items() if value is None]
    if null_fields:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Fields cannot be null: {', '.join(null_fields)}",
        )

    for field, value in update_data.items():
        setattr(schedule, field, value)

    _validate(schedule)

    if update_data.get("is_active"):
        _deactivate_other_schedules(db, schedule.employee_id, keep_id=schedule.id)

    db.commit()
    db.refresh(schedule)
    return schedule
