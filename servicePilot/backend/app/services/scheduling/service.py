"""
Delivery scheduling service - main orchestration layer.

Resolves schedules and workload through external sources, runs the
estimator, and recovers from calculation errors so callers always get a
DeliveryCalculation back.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from dataclasses import replace
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings

from .data_loader import default_schedule
from .errors import (
    InvalidScheduleError,
    InvalidOrderItemError,
    CalendarWalkLimitError,
    WorkloadFetchTimeout,
)
from .estimator import estimate_delivery
from .shared_time import validate_order_items
from .support import validate_support_technicians
from .types import (
    DeliveryRequest,
    DeliveryCalculation,
    ScheduleResolution,
    SupportTechnicianEntry,
    WorkSchedule,
)


logger = logging.getLogger(__name__)

CALCULATION_FAILED_MESSAGE = "No se pudo calcular"
SCHEDULE_UNAVAILABLE_MESSAGE = "Horario no disponible, se usa el horario por defecto"

# technician_id -> schedule lookup
ScheduleSource = Callable[[int], ScheduleResolution]
# (technician_id, exclude_order_id) -> committed hours
WorkloadSource = Callable[[int, Optional[int]], float]


def fetch_workload(
    workload_source: WorkloadSource,
    technician_id: int,
    exclude_order_id: Optional[int] = None,
    timeout: Optional[float] = None,
) -> float:
    """
    Call the workload source with a time limit.

    Raises:
        WorkloadFetchTimeout: the source did not answer within timeout seconds
    """
    timeout = settings.WORKLOAD_FETCH_TIMEOUT_SECONDS if timeout is None else timeout
    executor = ThreadPoolExecutor(max_workers=1)
    future = executor.submit(workload_source, technician_id, exclude_order_id)
    try:
        return float(future.result(timeout=timeout))
    except FuturesTimeoutError as e:
        raise WorkloadFetchTimeout(
            f"Workload for technician {technician_id} not available after {timeout}s"
        ) from e
    finally:
        # don't block on a hung source
        executor.shutdown(wait=False)


def load_workload_hours(
    workload_source: WorkloadSource,
    technician_id: int,
    exclude_order_id: Optional[int] = None,
    timeout: Optional[float] = None,
) -> tuple[float, bool]:
    """Workload hours plus a degraded flag; failures fall back to zero."""
    try:
        return fetch_workload(workload_source, technician_id, exclude_order_id, timeout), False
    except WorkloadFetchTimeout as e:
        logger.warning(f"{e}, assuming no workload")
    except SQLAlchemyError as e:
        logger.warning(f"Workload query failed for technician {technician_id}: {e}, assuming no workload")
    return 0.0, True


def with_support_schedules(
    support_technicians: list[SupportTechnicianEntry],
    schedule_source: ScheduleSource,
) -> list[SupportTechnicianEntry]:
    """
    Fill in each support technician's own schedule where it wasn't supplied.

    A helper with nothing configured keeps schedule=None and follows the
    primary technician's calendar.
    """
    resolved = []
    for entry in support_technicians:
        if entry.schedule is None:
            resolution = schedule_source(entry.technician_id)
            if not resolution.is_default:
                entry = replace(entry, schedule=resolution.schedule)
        resolved.append(entry)
    return resolved


def load_schedules(
    request: DeliveryRequest,
    schedule_source: ScheduleSource,
) -> tuple[ScheduleResolution, DeliveryRequest, Optional[str]]:
    """
    Resolve the primary and support schedules.

    If the schedule store fails, the default schedule is used and an error
    message is returned alongside it.
    """
    try:
        resolution = schedule_source(request.technician_id)
        support_technicians = with_support_schedules(request.support_technicians, schedule_source)
    except SQLAlchemyError as e:
        logger.error(
            f"Schedule lookup failed for technician {request.technician_id}: {e}. "
            "Falling back to default schedule"
        )
        return (
            ScheduleResolution(schedule=default_schedule(), is_default=True),
            request,
            SCHEDULE_UNAVAILABLE_MESSAGE,
        )
    return resolution, replace(request, support_technicians=support_technicians), None


def validate_request(request: DeliveryRequest) -> None:
    """
    Reject bad input before any lookups.

    Raises:
        InvalidOrderItemError, InvalidSupportPercentageError,
        InvalidSupportTechnicianError
    """
    validate_order_items(request.order_items)
    validate_support_technicians(
        request.support_technicians,
        request.technician_id,
        min_pct=settings.SUPPORT_REDUCTION_MIN,
        max_pct=settings.SUPPORT_REDUCTION_MAX,
    )


def _estimate(request: DeliveryRequest, schedule: WorkSchedule, workload_hours: float):
    return estimate_delivery(
        request.order_items,
        schedule,
        request.support_technicians,
        request.creation_instant,
        workload_hours,
        max_concurrent=settings.SHARED_TIME_MAX_CONCURRENT,
        min_pct=settings.SUPPORT_REDUCTION_MIN,
        max_pct=settings.SUPPORT_REDUCTION_MAX,
        max_days=settings.CALENDAR_MAX_DAYS,
    )


def compute_delivery(
    request: DeliveryRequest,
    resolution: ScheduleResolution,
    workload_hours: float,
    workload_degraded: bool = False,
    schedule_error: Optional[str] = None,
) -> DeliveryCalculation:
    """
    Run the estimator and recover from schedule, item and calendar failures.

    - invalid schedule: recompute on the default schedule and report the error
    - invalid order item: no estimate, item error for display
    - calendar limit: no estimate, error message for display

    schedule_error carries a failed schedule lookup from load_schedules.
    Invalid support technicians are not recovered here; they are bad input.
    """
    calculation = DeliveryCalculation(
        estimate=None,
        workload_hours=workload_hours,
        workload_degraded=workload_degraded,
        used_default_schedule=resolution.is_default,
        error=schedule_error,
    )

    try:
        calculation.estimate = _estimate(request, resolution.schedule, workload_hours)
        return calculation
    except InvalidScheduleError as e:
        logger.error(
            f"Invalid schedule for technician {request.technician_id}: {e}. "
            "Falling back to default schedule"
        )
        calculation.error = f"Horario inválido: {e}"
        calculation.used_default_schedule = True
    except InvalidOrderItemError as e:
        logger.error(f"Rejected order items for technician {request.technician_id}: {e}")
        calculation.error = str(e)
        return calculation
    except CalendarWalkLimitError as e:
        logger.error(f"Delivery calculation failed for technician {request.technician_id}: {e}")
        calculation.error = CALCULATION_FAILED_MESSAGE
        return calculation

    try:
        calculation.estimate = _estimate(request, default_schedule(), workload_hours)
    except (InvalidScheduleError, CalendarWalkLimitError) as e:
        logger.error(f"Delivery calculation failed on default schedule: {e}")
        calculation.error = CALCULATION_FAILED_MESSAGE
    return calculation


def calculate_delivery(
    request: DeliveryRequest,
    schedule_source: ScheduleSource,
    workload_source: WorkloadSource,
    workload_timeout: Optional[float] = None,
) -> DeliveryCalculation:
    """
    Main entry point. Computes a delivery estimate for an order being edited.

    Flow:
    1. Validate items (non-negative) and support technicians (range, not the
       primary, no repeats)
    2. Resolve the primary and support schedules (default if the store fails)
    3. Fetch committed workload with a timeout (degrades to 0)
    4. Estimate, recovering from schedule/calendar errors

    Raises:
        InvalidOrderItemError, InvalidSupportPercentageError,
        InvalidSupportTechnicianError
    """
    validate_request(request)

    resolution, request, schedule_error = load_schedules(request, schedule_source)

    workload_hours, degraded = load_workload_hours(
        workload_source, request.technician_id, request.exclude_order_id, workload_timeout
    )

    return compute_delivery(request, resolution, workload_hours, degraded, schedule_error)
