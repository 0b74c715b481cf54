from datetime import datetime
from functools import partial
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_active_technician
from app.schemas.delivery_estimates import DeliveryEstimateRequest, DeliveryEstimateResponse
from app.services.scheduling import (
    DeliveryRequest,
    OrderItem,
    OrderItemStatus,
    SupportTechnicianEntry,
    InvalidSupportPercentageError,
    InvalidSupportTechnicianError,
    InvalidOrderItemError,
    calculate_delivery,
    load_work_schedule,
    load_technician_workload,
)

router = APIRouter(prefix="/delivery-estimates", tags=["delivery-estimates"])


@router.post("", response_model=DeliveryEstimateResponse)
def create_delivery_estimate(
    payload: DeliveryEstimateRequest,
    db: Session = Depends(get_db),
):
    get_active_technician(payload.technician_id, db)

    request = DeliveryRequest(
        order_items=[
            OrderItem(
                id=item.id,
                estimated_hours=item.estimated_hours,
                shared_time=item.shared_time,
                status=OrderItemStatus(item.status.value),
                service_type_id=item.service_type_id,
                quantity=item.quantity,
            )
            for item in payload.items
        ],
        technician_id=payload.technician_id,
        creation_instant=payload.creation_instant or datetime.now(),
        support_technicians=[
            SupportTechnicianEntry(
                technician_id=st.technician_id,
                reduction_percentage=st.reduction_percentage,
            )
            for st in payload.support_technicians
        ],
        exclude_order_id=payload.exclude_order_id,
    )

    try:
        calculation = calculate_delivery(
            request,
            schedule_source=partial(load_work_schedule, db),
            workload_source=partial(load_technician_workload, db),
        )
    except (InvalidOrderItemError, InvalidSupportPercentageError, InvalidSupportTechnicianError) as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    return DeliveryEstimateResponse.model_validate(calculation)
