from typing import Optional
from datetime import datetime, time
from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Time, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.database import Base


class WorkSchedules(Base):
    __tablename__ = "work_schedules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    employee_id: Mapped[int] = mapped_column(Integer, ForeignKey("technicians.id"), nullable=False, index=True)
    work_days: Mapped[list[int]] = mapped_column(JSON, nullable=False)  # 0=Sunday ... 6=Saturday
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    break_duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    updated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True),nullable=True,server_default=func.now(),onupdate=func.now())
