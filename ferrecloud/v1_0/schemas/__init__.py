from .camel import CamelModel
from .import_template_schema import ImportTemplateCreate, ImportTemplateUpdate
from .price_update_schema import NormalizedRow, PriceUpdateAnalyzeRequest, PriceUpdateApplyRequest
from .product_schema import ProductPatch

__all__ = [
    "CamelModel",
    "ImportTemplateCreate",
    "ImportTemplateUpdate",
    "NormalizedRow",
    "PriceUpdateAnalyzeRequest",
    "PriceUpdateApplyRequest",
    "ProductPatch",
]
