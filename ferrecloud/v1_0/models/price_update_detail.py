from enum import Enum
from sqlalchemy import Integer, String, Numeric, ForeignKey, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base


class DetailStatus(str, Enum):
    UPDATE = "update"
    NOT_FOUND = "not_found"
    DISCONTINUED = "discontinued"


class PriceUpdateDetail(Base):
    __tablename__ = "price_update_detail"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    log_id: Mapped[int] = mapped_column(
        ForeignKey("price_update_log.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # orden de la fila en el archivo, base 1
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    product_id: Mapped[int | None] = mapped_column(
        ForeignKey("product.id", ondelete="SET NULL"), nullable=True, index=True
    )

    supplier_code: Mapped[str] = mapped_column(String, nullable=False, default="")
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    sku: Mapped[str | None] = mapped_column(String, nullable=True)
    product_name: Mapped[str | None] = mapped_column(String, nullable=True)

    old_price: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=False, server_default=text("0.00"), default=0.0
    )
    new_price: Mapped[float] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=False, server_default=text("0.00"), default=0.0
    )
    variation: Mapped[float] = mapped_column(
        Numeric(8, 2, asdecimal=False), nullable=False, server_default=text("0.00"), default=0.0
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    log = relationship("PriceUpdateLog", back_populates="details")
