from datetime import datetime
from sqlalchemy import String, Numeric, Integer, Boolean, DateTime, ForeignKey, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base

class Product(Base):
    __tablename__ = "product"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    sku: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True)

    supplier_id: Mapped[int | None] = mapped_column(
        ForeignKey("supplier.id", ondelete="SET NULL"), nullable=True, index=True
    )
    # código del producto en el catálogo del proveedor
    supplier_code: Mapped[str | None] = mapped_column(String, nullable=True, index=True)

    cost_price: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        nullable=False,
        server_default=text("0.00"),
        default=0.0,
    )
    tax_percent: Mapped[float] = mapped_column(
        Numeric(5, 2, asdecimal=False),
        nullable=False,
        server_default=text("21.00"),
        default=21.0,
    )
    cost_with_tax: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        nullable=False,
        server_default=text("0.00"),
        default=0.0,
    )
    sale_price: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False),
        nullable=False,
        server_default=text("0.00"),
        default=0.0,
    )
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # is_active = False => discontinuado
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    price_movements = relationship(
        "PriceMovement",
        back_populates="product",
        cascade="all, delete-orphan",
    )

    def recompute_cost_with_tax(self) -> None:
        cost = float(self.cost_price or 0.0)
        tax = float(self.tax_percent or 0.0)
        self.cost_with_tax = round(cost * (1 + tax / 100), 2)
