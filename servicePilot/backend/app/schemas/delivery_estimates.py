from pydantic import BaseModel
from datetime import date, time, datetime
from typing import List, Optional
from app.db.models.order_items import OrderItemStatus


class OrderItemInput(BaseModel):
    id: int
    estimated_hours: float
    shared_time: bool = False
    status: OrderItemStatus = OrderItemStatus.PENDIENTE
    service_type_id: Optional[int] = None
    quantity: int = 1


class SupportTechnicianInput(BaseModel):
    technician_id: int
    reduction_percentage: int  # 1-50


class DeliveryEstimateRequest(BaseModel):
    technician_id: int
    items: List[OrderItemInput]
    support_technicians: List[SupportTechnicianInput] = []
    creation_instant: Optional[datetime] = None  # defaults to now
    exclude_order_id: Optional[int] = None


class DeliveryEstimateOut(BaseModel):
    delivery_date: date
    delivery_time: time
    effective_hours: float
    breakdown: str
    can_use_shared_time: bool
    shared_services_count: int
    workload_offset_hours: float
    work_start: Optional[datetime] = None

    class Config:
        from_attributes = True


class DeliveryEstimateResponse(BaseModel):
    success: bool
    estimate: Optional[DeliveryEstimateOut]
    workload_hours: float
    workload_degraded: bool
    used_default_schedule: bool
    error: Optional[str] = None

    class Config:
        from_attributes = True
