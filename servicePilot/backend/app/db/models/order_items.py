from sqlalchemy import Integer, Float, Boolean, DateTime, ForeignKey, Enum as SQLEnum, func
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from enum import Enum
from typing import Optional
from app.db.database import Base


class OrderItemStatus(str, Enum):
    PENDIENTE = "pendiente"
    EN_PROCESO = "en_proceso"
    COMPLETADO = "completado"
    FINALIZADA = "finalizada"


class OrderItems(Base):
    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_id: Mapped[int] = mapped_column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    service_type_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    estimated_hours: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    shared_time: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[OrderItemStatus] = mapped_column(SQLEnum(OrderItemStatus, name="order_item_status_enum"), nullable=False, default=OrderItemStatus.PENDIENTE)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
