"""
Data loader for delivery scheduling.
Fetches schedules and committed workload from the database and converts to internal types.
"""

from typing import Optional

from sqlalchemy import select, and_, func
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.models.orders import Orders, CLOSED_ORDER_STATUSES
from app.db.models.order_items import OrderItems, OrderItemStatus
from app.db.models.work_schedules import WorkSchedules

from .types import WorkSchedule, ScheduleResolution, TechnicianWorkload
from .workload import aggregate_technician_workloads


DONE_ITEM_STATUSES = [OrderItemStatus.COMPLETADO, OrderItemStatus.FINALIZADA]


def default_schedule() -> WorkSchedule:
    """Schedule assumed for technicians with nothing configured."""
    return WorkSchedule(
        work_days=frozenset(settings.DEFAULT_WORK_DAYS),
        start_time=settings.DEFAULT_START_TIME,
        end_time=settings.DEFAULT_END_TIME,
        break_duration_minutes=settings.DEFAULT_BREAK_MINUTES,
    )


def to_work_schedule(row: WorkSchedules) -> WorkSchedule:
    return WorkSchedule(
        work_days=frozenset(row.work_days or []),
        start_time=row.start_time,
        end_time=row.end_time,
        break_duration_minutes=row.break_duration_minutes or 0,
    )


def load_work_schedule(db: Session, technician_id: int) -> ScheduleResolution:
    """
    Load the active schedule for a technician.

    Returns the default schedule tagged is_default=True when none is configured.
    A configured schedule is returned as-is, even if invalid, so the caller can
    report the misconfiguration.
    """
    stmt = (
        select(WorkSchedules)
        .where(
            and_(
                WorkSchedules.employee_id == technician_id,
                WorkSchedules.is_active == True,
            )
        )
        .order_by(WorkSchedules.id.desc())
    )
    row = db.execute(stmt).scalars().first()

    if row is None:
        return ScheduleResolution(schedule=default_schedule(), is_default=True)
    return ScheduleResolution(schedule=to_work_schedule(row), is_default=False)


def _pending_item_join():
    return and_(
        OrderItems.order_id == Orders.id,
        OrderItems.status.not_in(DONE_ITEM_STATUSES),
    )


def load_technician_workload(
    db: Session,
    technician_id: int,
    exclude_order_id: Optional[int] = None,
) -> float:
    """Committed unfinished hours across the technician's other open orders."""
    conditions = [
        Orders.assigned_technician_id == technician_id,
        Orders.status.not_in(CLOSED_ORDER_STATUSES),
    ]
    if exclude_order_id is not None:
        conditions.append(Orders.id != exclude_order_id)

    stmt = (
        select(func.coalesce(func.sum(OrderItems.estimated_hours * OrderItems.quantity), 0.0))
        .select_from(Orders)
        .join(OrderItems, _pending_item_join())
        .where(and_(*conditions))
    )
    return float(db.execute(stmt).scalar_one())


def load_technician_workloads(db: Session) -> dict[int, TechnicianWorkload]:
    """Workload of every technician with open orders."""
    stmt = (
        select(
            Orders.id,
            Orders.assigned_technician_id,
            Orders.status,
            func.coalesce(func.sum(OrderItems.estimated_hours * OrderItems.quantity), 0.0),
        )
        .select_from(Orders)
        .outerjoin(OrderItems, _pending_item_join())
        .where(
            and_(
                Orders.assigned_technician_id.is_not(None),
                Orders.status.not_in(CLOSED_ORDER_STATUSES),
            )
        )
        .group_by(Orders.id, Orders.assigned_technician_id, Orders.status)
    )
    rows = db.execute(stmt).all()

    return aggregate_technician_workloads(
        {
            "assigned_technician": technician_id,
            "status": status.value,
            "hours": float(hours),
        }
        for _, technician_id, status, hours in rows
    )
