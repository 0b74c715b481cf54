"""
Reactive delivery recalculation.

Every change to items, technician or support set issues a new request id.
A request waits out the debounce window and only applies its result if no
newer request was issued meanwhile, so a stale result never overwrites a
newer one.
"""

import asyncio
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings

from .errors import (
    InvalidOrderItemError,
    InvalidSupportPercentageError,
    InvalidSupportTechnicianError,
)
from .service import (
    ScheduleSource,
    WorkloadSource,
    compute_delivery,
    load_schedules,
    validate_request,
)
from .types import DeliveryRequest, DeliveryCalculation, DeliveryEstimate


logger = logging.getLogger(__name__)


class DeliveryRecalculator:
    """
    Latest-request-wins wrapper around the delivery calculation.

    last_estimate keeps the most recent successful estimate; error holds the
    message of the most recently applied calculation, if it failed.
    """

    def __init__(
        self,
        schedule_source: ScheduleSource,
        workload_source: WorkloadSource,
        debounce_seconds: Optional[float] = None,
        workload_timeout: Optional[float] = None,
    ):
        self.schedule_source = schedule_source
        self.workload_source = workload_source
        self.debounce_seconds = (
            settings.RECALC_DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds
        )
        self.workload_timeout = (
            settings.WORKLOAD_FETCH_TIMEOUT_SECONDS if workload_timeout is None else workload_timeout
        )
        self._latest_request_id = 0
        self.last_estimate: Optional[DeliveryEstimate] = None
        self.last_calculation: Optional[DeliveryCalculation] = None
        self.error: Optional[str] = None

    @property
    def latest_request_id(self) -> int:
        return self._latest_request_id

    def next_request_id(self) -> int:
        self._latest_request_id += 1
        return self._latest_request_id

    def is_current(self, request_id: int) -> bool:
        return request_id == self._latest_request_id

    async def recalculate(self, request: DeliveryRequest) -> Optional[DeliveryCalculation]:
        """
        Debounced recalculation.

        Returns the applied calculation, or None if this request was
        superseded before it could be applied.
        """
        request_id = self.next_request_id()

        await asyncio.sleep(self.debounce_seconds)
        if not self.is_current(request_id):
            logger.debug(f"Delivery request {request_id} superseded during debounce")
            return None

        try:
            validate_request(request)
        except (InvalidOrderItemError, InvalidSupportPercentageError, InvalidSupportTechnicianError) as e:
            logger.error(f"Rejected delivery request {request_id}: {e}")
            calculation = DeliveryCalculation(estimate=None, error=str(e))
            self._apply(calculation)
            return calculation

        resolution, request, schedule_error = await asyncio.to_thread(
            load_schedules, request, self.schedule_source
        )
        if not self.is_current(request_id):
            logger.debug(f"Delivery request {request_id} superseded during schedule lookup")
            return None

        workload_hours, degraded = await self._fetch_workload(request)
        if not self.is_current(request_id):
            logger.debug(f"Delivery request {request_id} superseded during workload fetch")
            return None

        calculation = compute_delivery(request, resolution, workload_hours, degraded, schedule_error)
        self._apply(calculation)
        return calculation

    async def _fetch_workload(self, request: DeliveryRequest) -> tuple[float, bool]:
        try:
            hours = await asyncio.wait_for(
                asyncio.to_thread(self.workload_source, request.technician_id, request.exclude_order_id),
                timeout=self.workload_timeout,
            )
            return float(hours), False
        except asyncio.TimeoutError:
            logger.warning(
                f"Workload for technician {request.technician_id} not available after "
                f"{self.workload_timeout}s, assuming no workload"
            )
        except SQLAlchemyError as e:
            logger.warning(f"Workload query failed for technician {request.technician_id}: {e}, assuming no workload")
        return 0.0, True

    def _apply(self, calculation: DeliveryCalculation) -> None:
        self.last_calculation = calculation
        if calculation.estimate is not None:
            self.last_estimate = calculation.estimate
        self.error = calculation.error
