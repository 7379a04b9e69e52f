from datetime import datetime
from typing import Optional

from ferrecloud.v1_0.schemas.camel import CamelModel

class ProductDTO(CamelModel):
    """Full product row."""
    id: int
    sku: str
    name: str
    description: Optional[str] = None
    supplier_id: Optional[int] = None
    supplier_code: Optional[str] = None
    cost_price: float
    tax_percent: float
    cost_with_tax: float
    sale_price: float
    stock_quantity: int
    is_active: bool
    updated_at: Optional[datetime] = None

class PriceMovementDTO(CamelModel):
    """Audit row of a product cost change."""
    id: int
    product_id: int
    log_id: Optional[int] = None
    movement_type: str
    previous_cost: float
    new_cost: float
    variation: float
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
