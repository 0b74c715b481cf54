from sqlalchemy import Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from app.db.database import Base


class OrderSupportTechnicians(Base):
    __tablename__ = "order_support_technicians"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_id: Mapped[int] = mapped_column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    technician_id: Mapped[int] = mapped_column(Integer, ForeignKey("technicians.id"), nullable=False)
    reduction_percentage: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-50

    __table_args__ = (
        UniqueConstraint("order_id", "technician_id", name="uq_order_support_technician"),
    )
