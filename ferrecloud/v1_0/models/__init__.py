from .base import Base
from .supplier import Supplier
from .product import Product
from .supplier_import_template import SupplierImportTemplate
from .price_update_log import PriceUpdateLog, PriceUpdateStatus
from .price_update_detail import PriceUpdateDetail, DetailStatus
from .price_movement import PriceMovement, MOVEMENT_SUPPLIER_PRICE_UPDATE, MOVEMENT_MANUAL_EDIT
__all__ = [
    "Base",
    "Supplier",
    "Product",
    "SupplierImportTemplate",
    "PriceUpdateLog",
    "PriceUpdateStatus",
    "PriceUpdateDetail",
    "DetailStatus",
    "PriceMovement",
    "MOVEMENT_SUPPLIER_PRICE_UPDATE",
    "MOVEMENT_MANUAL_EDIT",
]
