from sqlalchemy import Integer, Date, DateTime, ForeignKey, Enum as SQLEnum, Index, func
from datetime import date, datetime
from sqlalchemy.orm import Mapped, mapped_column
from enum import Enum
from typing import Optional
from app.db.database import Base


class OrderStatus(str, Enum):
    PENDIENTE = "pendiente"
    EN_PROCESO = "en_proceso"
    EN_CAMINO = "en_camino"
    FINALIZADA = "finalizada"
    CANCELADA = "cancelada"


# Orders in these states no longer count towards a technician's load
CLOSED_ORDER_STATUSES = [OrderStatus.FINALIZADA, OrderStatus.CANCELADA]


class Orders(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    assigned_technician_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("technicians.id"), nullable=True)
    status: Mapped[OrderStatus] = mapped_column(SQLEnum(OrderStatus, name="order_status_enum"), nullable=False, default=OrderStatus.PENDIENTE)
    delivery_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_orders_technician_status", "assigned_technician_id", "status"),
    )
