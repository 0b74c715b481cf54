"""
Delivery estimator - composes shared time, support reduction, workload
offset and the business calendar into a delivery date and time.
"""

from datetime import datetime
from typing import Optional

from .business_calendar import advance, validate_schedule, MAX_CALENDAR_DAYS
from .shared_time import resolve, validate_order_items, MAX_CONCURRENT_SHARED
from .support import (
    apply_support_reduction,
    combined_reduction_factor,
    governing_schedule,
    has_mixed_schedules,
    MIN_REDUCTION_PERCENTAGE,
    MAX_REDUCTION_PERCENTAGE,
)
from .types import (
    OrderItem,
    WorkSchedule,
    SupportTechnicianEntry,
    SharedTimeResolution,
    DeliveryEstimate,
)
from .workload import offset_hours


def _fmt_hours(hours: float) -> str:
    return f"{round(hours, 2):g}h"


def build_breakdown(
    resolution: SharedTimeResolution,
    effective_hours: float,
    support_technicians: list[SupportTechnicianEntry],
    offset: float,
    work_start: datetime,
    delivery: datetime,
    mixed_schedules: bool = False,
    max_concurrent: int = MAX_CONCURRENT_SHARED,
) -> str:
    """Human-readable trace of how the delivery instant was derived."""
    parts = []

    if offset > 0:
        parts.append(f"carga actual {_fmt_hours(offset)} antes de iniciar")

    hours = f"{_fmt_hours(resolution.exclusive_hours)} exclusivo"
    if resolution.shared_services_count:
        hours += (
            f" + {_fmt_hours(resolution.shared_hours)} compartido "
            f"(cuello de botella, {resolution.shared_services_count}/{max_concurrent})"
        )
    hours += f" → {_fmt_hours(resolution.total_hours)}"
    if not resolution.can_use_shared_time:
        hours += f" (más de {max_concurrent} compartidos, excedente secuencial)"
    parts.append(hours)

    if support_technicians:
        reduction = round((1 - combined_reduction_factor(support_technicians)) * 100, 1)
        count = len(support_technicians)
        noun = "técnico de apoyo" if count == 1 else "técnicos de apoyo"
        support = f"−{reduction:g}% con {count} {noun} → {_fmt_hours(effective_hours)} efectivas"
        if mixed_schedules:
            support += " (calendario del técnico principal)"
        parts.append(support)
    else:
        parts.append(f"{_fmt_hours(effective_hours)} efectivas")

    parts.append(
        f"inicio {work_start:%d/%m/%Y %H:%M}, entrega {delivery:%d/%m/%Y %H:%M}"
    )
    return ", ".join(parts)


def estimate_delivery(
    order_items: list[OrderItem],
    primary_schedule: WorkSchedule,
    support_technicians: Optional[list[SupportTechnicianEntry]],
    creation_instant: datetime,
    workload_snapshot: Optional[float] = 0.0,
    max_concurrent: int = MAX_CONCURRENT_SHARED,
    min_pct: int = MIN_REDUCTION_PERCENTAGE,
    max_pct: int = MAX_REDUCTION_PERCENTAGE,
    max_days: int = MAX_CALENDAR_DAYS,
) -> DeliveryEstimate:
    """
    Compute a delivery date and time for an order.

    Flow:
    1. Validate schedule, order items and support technicians
    2. Turn the workload snapshot into a backlog offset
    3. Resolve shared vs exclusive hours
    4. Apply support reductions -> effective hours
    5. Walk the calendar through the backlog, then through the effective hours
    6. Build the textual breakdown

    Raises:
        InvalidScheduleError, InvalidSupportPercentageError,
        InvalidSupportTechnicianError, InvalidOrderItemError,
        CalendarWalkLimitError
    """
    support_technicians = support_technicians or []

    # 1. Validate
    validate_schedule(primary_schedule)
    validate_order_items(order_items)

    # 2. Backlog
    offset = offset_hours(workload_snapshot)

    # 3-4. Hours
    resolution = resolve(order_items, max_concurrent=max_concurrent)
    effective_hours = apply_support_reduction(
        resolution.total_hours, support_technicians, min_pct=min_pct, max_pct=max_pct
    )

    # 5. Calendar walk
    schedule = governing_schedule(primary_schedule, support_technicians)
    work_start = advance(creation_instant, offset, schedule, max_days=max_days)
    delivery = advance(work_start, effective_hours, schedule, max_days=max_days)

    # 6. Breakdown
    breakdown = build_breakdown(
        resolution,
        effective_hours,
        support_technicians,
        offset,
        work_start,
        delivery,
        mixed_schedules=has_mixed_schedules(primary_schedule, support_technicians),
        max_concurrent=max_concurrent,
    )

    return DeliveryEstimate(
        delivery_date=delivery.date(),
        delivery_time=delivery.timetz(),
        effective_hours=effective_hours,
        breakdown=breakdown,
        can_use_shared_time=resolution.can_use_shared_time,
        shared_services_count=resolution.shared_services_count,
        workload_offset_hours=offset,
        work_start=work_start,
    )
