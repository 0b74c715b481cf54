from app.db.database import Base

# Import models
from app.db.models.technicians import Technicians
from app.db.models.work_schedules import WorkSchedules
from app.db.models.orders import Orders, OrderStatus
from app.db.models.order_items import OrderItems, OrderItemStatus
from app.db.models.order_support_technicians import OrderSupportTechnicians

__all__ = [
    "Base",
    # Models
    "Technicians",
    "WorkSchedules",
    "Orders",
    "OrderItems",
    "OrderSupportTechnicians",
    # Enums
    "OrderStatus",
    "OrderItemStatus",
]
