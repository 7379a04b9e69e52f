from datetime import datetime
from typing import Dict, List, Optional

from ferrecloud.v1_0.schemas.camel import CamelModel
from .page import PageDTO

class ParsedPriceListDTO(CamelModel):
    """Rows extracted from an uploaded price list, before analysis."""
    file_name: str
    template_id: int
    total: int
    rows: List[Dict[str, str]]

class PriceUpdateSummaryDTO(CamelModel):
    total: int
    updated: int
    not_found: int
    discontinued: int
    avg_variation: float

class PriceUpdateDetailDTO(CamelModel):
    position: int
    supplier_code: str
    description: Optional[str] = None
    sku: Optional[str] = None
    product_name: Optional[str] = None
    old_price: float
    new_price: float
    variation: float
    status: str

class PriceUpdateAnalysisDTO(CamelModel):
    """Response of analyze: the persisted log id plus its classification."""
    log_id: int
    status: str
    summary: PriceUpdateSummaryDTO
    details: List[PriceUpdateDetailDTO]

class PriceUpdateLogDTO(CamelModel):
    """History row of a price-list import attempt."""
    id: int
    supplier_id: int
    supplier_name: Optional[str] = None
    template_id: Optional[int] = None
    file_name: Optional[str] = None
    status: str
    summary: PriceUpdateSummaryDTO
    created_at: Optional[datetime] = None
    applied_at: Optional[datetime] = None
    applied_by: Optional[str] = None
    cancelled_at: Optional[datetime] = None

class PriceUpdateLogDetailDTO(PriceUpdateLogDTO):
    details: List[PriceUpdateDetailDTO]

class PriceUpdateResultDTO(CamelModel):
    """
    Outcome of apply / cancel.

    updated_products counts the costs actually written. skipped_products
    holds the rest of the `update` rows: products discontinued or deleted
    after analysis, and rows whose new price equals the current cost. The
    two add up to summary.updated of the log.
    """
    log_id: int
    status: str
    updated_products: int = 0
    skipped_products: int = 0
    applied_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

PriceUpdateLogPageDTO = PageDTO[PriceUpdateLogDTO]
