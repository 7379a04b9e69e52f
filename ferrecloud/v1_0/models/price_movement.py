from datetime import datetime
from sqlalchemy import Integer, String, Numeric, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base

MOVEMENT_SUPPLIER_PRICE_UPDATE = "supplier_price_update"
MOVEMENT_MANUAL_EDIT = "manual_edit"

class PriceMovement(Base):
    __tablename__ = "price_movement"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("product.id", ondelete="CASCADE"), nullable=False, index=True
    )
    log_id: Mapped[int | None] = mapped_column(
        ForeignKey("price_update_log.id", ondelete="SET NULL"), nullable=True, index=True
    )
    movement_type: Mapped[str] = mapped_column(String(40), nullable=False)
    previous_cost: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    new_cost: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    variation: Mapped[float] = mapped_column(Numeric(8, 2, asdecimal=False), nullable=False, default=0.0)
    notes: Mapped[str | None] = mapped_column(String(300), nullable=True)
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)

    product = relationship("Product", back_populates="price_movements")
