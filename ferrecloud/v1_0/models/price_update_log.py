from datetime import datetime
from enum import Enum
from sqlalchemy import Integer, String, Numeric, DateTime, ForeignKey, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base


class PriceUpdateStatus(str, Enum):
    PENDING = "pending"
    APPLIED = "applied"
    CANCELLED = "cancelled"


class PriceUpdateLog(Base):
    __tablename__ = "price_update_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    supplier_id: Mapped[int] = mapped_column(
        ForeignKey("supplier.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    template_id: Mapped[int | None] = mapped_column(
        ForeignKey("supplier_import_template.id", ondelete="SET NULL"), nullable=True, index=True
    )
    file_name: Mapped[str | None] = mapped_column(String, nullable=True)

    # pending -> applied | cancelled
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PriceUpdateStatus.PENDING.value,
        server_default=PriceUpdateStatus.PENDING.value,
        index=True,
    )

    total_products: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_products: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    not_found_products: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    discontinued_products: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    avg_variation_percent: Mapped[float] = mapped_column(
        Numeric(8, 2, asdecimal=False),
        nullable=False,
        server_default=text("0.00"),
        default=0.0,
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    applied_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    applied_by: Mapped[str | None] = mapped_column(String, nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    supplier = relationship("Supplier", lazy="selectin")
    details = relationship(
        "PriceUpdateDetail",
        back_populates="log",
        cascade="all, delete-orphan",
        order_by="PriceUpdateDetail.position",
    )
