"""
Internal data types for delivery scheduling.
decoupled from SQLAlchemy models for cleaner logic.
"""

from dataclasses import dataclass, field
from datetime import date, time, datetime
from enum import Enum
from typing import Optional


class OrderItemStatus(str, Enum):
    PENDIENTE = "pendiente"
    EN_PROCESO = "en_proceso"
    COMPLETADO = "completado"
    FINALIZADA = "finalizada"


# Items in these states contribute no remaining hours
DONE_ITEM_STATUSES = {OrderItemStatus.COMPLETADO, OrderItemStatus.FINALIZADA}


@dataclass(frozen=True)
class WorkSchedule:
    """A technician's recurring weekly availability."""
    work_days: frozenset[int]  # 0=Sunday ... 6=Saturday
    start_time: time
    end_time: time
    break_duration_minutes: int = 0

    def __post_init__(self):
        # accept any iterable of weekday indices
        object.__setattr__(self, "work_days", frozenset(self.work_days))

    @property
    def window_minutes(self) -> int:
        start = self.start_time.hour * 60 + self.start_time.minute
        end = self.end_time.hour * 60 + self.end_time.minute
        return end - start


@dataclass(frozen=True)
class OrderItem:
    """One billable line of work belonging to an order."""
    id: int
    estimated_hours: float
    shared_time: bool = False
    status: OrderItemStatus = OrderItemStatus.PENDIENTE
    service_type_id: Optional[int] = None
    quantity: int = 1

    @property
    def total_hours(self) -> float:
        return self.estimated_hours * self.quantity

    @property
    def is_done(self) -> bool:
        return self.status in DONE_ITEM_STATUSES


@dataclass(frozen=True)
class SupportTechnicianEntry:
    technician_id: int
    reduction_percentage: int  # 1-50
    schedule: Optional[WorkSchedule] = None  # None = primary's schedule


@dataclass(frozen=True)
class SharedTimeResolution:
    exclusive_hours: float
    shared_hours: float
    shared_services_count: int
    can_use_shared_time: bool

    @property
    def total_hours(self) -> float:
        return self.exclusive_hours + self.shared_hours


@dataclass(frozen=True)
class ScheduleResolution:
    """Result of looking up a technician's schedule.

    is_default tells "nothing configured" apart from a configured
    schedule, which may still be invalid.
    """
    schedule: WorkSchedule
    is_default: bool = False


@dataclass(frozen=True)
class DeliveryEstimate:
    """Output of the delivery estimator."""
    delivery_date: date
    delivery_time: time
    effective_hours: float
    breakdown: str
    can_use_shared_time: bool
    shared_services_count: int
    workload_offset_hours: float = 0.0
    work_start: Optional[datetime] = None  # cursor after the backlog is burned off


@dataclass
class DeliveryRequest:
    """Everything the invocation surface needs for one calculation."""
    order_items: list[OrderItem]
    technician_id: int
    creation_instant: datetime
    support_technicians: list[SupportTechnicianEntry] = field(default_factory=list)
    exclude_order_id: Optional[int] = None  # the order being edited


@dataclass
class DeliveryCalculation:
    """Outcome at the calculation boundary.

    estimate is None only when no date could be produced at all.
    """
    estimate: Optional[DeliveryEstimate]
    workload_hours: float = 0.0
    workload_degraded: bool = False
    used_default_schedule: bool = False
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.estimate is not None and self.error is None


@dataclass
class TechnicianWorkload:
    technician_id: int
    current_orders: int = 0
    total_hours: float = 0.0


@dataclass
class SupportSuggestion:
    suggested: bool
    reason: str
    technician_id: Optional[int] = None
