from pydantic import BaseModel
from datetime import time, datetime
from typing import List, Optional


class WorkScheduleBase(BaseModel):
    employee_id: int
    work_days: List[int]  # 0=Sunday ... 6=Saturday
    start_time: time
    end_time: time
    break_duration_minutes: int = 0
    is_active: bool = True


class WorkScheduleCreate(WorkScheduleBase):
    pass


class WorkScheduleUpdate(BaseModel):
    work_days: Optional[List[int]] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    break_duration_minutes: Optional[int] = None
    is_active: Optional[bool] = None


class WorkScheduleResponse(WorkScheduleBase):
    id: int
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class ResolvedScheduleResponse(BaseModel):
    """Schedule the delivery engine will use for a technician."""
    employee_id: int
    work_days: List[int]
    start_time: time
    end_time: time
    break_duration_minutes: int
    working_hours_per_day: float
    is_default: bool
