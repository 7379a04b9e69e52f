from typing import Optional

from ferrecloud.v1_0.schemas.camel import CamelModel

class SupplierDTO(CamelModel):
    """Supplier row for the price-list selector."""
    id: int
    name: str
    tax_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    is_active: bool = True
