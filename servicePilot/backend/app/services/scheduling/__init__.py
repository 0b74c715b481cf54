"""
Delivery scheduling service package.

Usage:
    from datetime import datetime
    from app.services.scheduling import estimate_delivery, WorkSchedule, OrderItem

    # Pure calculation - caller supplies schedule and workload
    estimate = estimate_delivery(
        order_items=[OrderItem(id=1, estimated_hours=4)],
        primary_schedule=schedule,
        support_technicians=[],
        creation_instant=datetime(2025, 1, 20, 9, 0),
        workload_snapshot=0,
    )

    # Or resolve schedule and workload from the database
    from functools import partial
    from app.services.scheduling import calculate_delivery, load_work_schedule, load_technician_workload

    calculation = calculate_delivery(
        request,
        schedule_source=partial(load_work_schedule, db),
        workload_source=partial(load_technician_workload, db),
    )
"""

from .types import (
    OrderItemStatus,
    WorkSchedule,
    OrderItem,
    SupportTechnicianEntry,
    SharedTimeResolution,
    ScheduleResolution,
    DeliveryEstimate,
    DeliveryRequest,
    DeliveryCalculation,
    TechnicianWorkload,
    SupportSuggestion,
)
from .errors import (
    DeliveryCalculationError,
    InvalidScheduleError,
    InvalidSupportPercentageError,
    InvalidSupportTechnicianError,
    InvalidOrderItemError,
    WorkloadFetchTimeout,
    CalendarWalkLimitError,
)
from .business_calendar import advance, working_hours_per_day
from .shared_time import resolve
from .support import apply_support_reduction
from .workload import offset_hours, aggregate_technician_workloads, suggest_support_technician
from .estimator import estimate_delivery
from .data_loader import load_work_schedule, load_technician_workload, load_technician_workloads
from .service import calculate_delivery
from .recalculator import DeliveryRecalculator

__all__ = [
    # Types
    "OrderItemStatus",
    "WorkSchedule",
    "OrderItem",
    "SupportTechnicianEntry",
    "SharedTimeResolution",
    "ScheduleResolution",
    "DeliveryEstimate",
    "DeliveryRequest",
    "DeliveryCalculation",
    "TechnicianWorkload",
    "SupportSuggestion",
    # Errors
    "DeliveryCalculationError",
    "InvalidScheduleError",
    "InvalidSupportPercentageError",
    "InvalidSupportTechnicianError",
    "InvalidOrderItemError",
    "WorkloadFetchTimeout",
    "CalendarWalkLimitError",
    # Main entry points
    "estimate_delivery",
    "calculate_delivery",
    "DeliveryRecalculator",
    # Lower-level functions
    "advance",
    "working_hours_per_day",
    "resolve",
    "apply_support_reduction",
    "offset_hours",
    "aggregate_technician_workloads",
    "suggest_support_technician",
    "load_work_schedule",
    "load_technician_workload",
    "load_technician_workloads",
]
