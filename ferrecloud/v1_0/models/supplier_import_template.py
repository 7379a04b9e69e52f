from datetime import datetime
from typing import Any, Dict
from sqlalchemy import Integer, String, Boolean, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from .base import Base

class SupplierImportTemplate(Base):
    __tablename__ = "supplier_import_template"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    supplier_id: Mapped[int] = mapped_column(
        ForeignKey("supplier.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    # { "supplierCode": "A", "description": "B", "price": "C", ... }
    column_mapping: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    has_header_row: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
    start_row: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    sheet_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    supplier = relationship("Supplier", back_populates="import_templates")
