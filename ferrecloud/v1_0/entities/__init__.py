from .page import PageDTO
from .supplier_DTO import SupplierDTO
from .product_DTO import ProductDTO, PriceMovementDTO
from .import_template_DTO import ImportTemplateDTO
from .price_update_DTO import (
    ParsedPriceListDTO,
    PriceUpdateSummaryDTO,
    PriceUpdateDetailDTO,
    PriceUpdateAnalysisDTO,
    PriceUpdateLogDTO,
    PriceUpdateLogDetailDTO,
    PriceUpdateResultDTO,
    PriceUpdateLogPageDTO,
)


__all__ = [
    "PageDTO",
    "SupplierDTO",
    "ProductDTO", "PriceMovementDTO",
    "ImportTemplateDTO",
    "ParsedPriceListDTO",
    "PriceUpdateSummaryDTO",
    "PriceUpdateDetailDTO",
    "PriceUpdateAnalysisDTO",
    "PriceUpdateLogDTO",
    "PriceUpdateLogDetailDTO",
    "PriceUpdateResultDTO",
    "PriceUpdateLogPageDTO",
]
