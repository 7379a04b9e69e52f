from typing import Optional
from pydantic import Field

from .camel import CamelModel

class ProductPatch(CamelModel):
    """Partial update (PATCH) of a catalog product."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=500)
    supplier_code: Optional[str] = Field(None, max_length=120)
    cost_price: Optional[float] = Field(None, ge=0.0)
    tax_percent: Optional[float] = Field(None, ge=0.0, le=100.0)
    sale_price: Optional[float] = Field(None, ge=0.0)
    is_active: Optional[bool] = None
