from .base_repository import BaseRepository
from .supplier_repository import SupplierRepository
from .product_repository import ProductRepository
from .import_template_repository import ImportTemplateRepository
from .price_update_log_repository import PriceUpdateLogRepository
from .price_update_detail_repository import PriceUpdateDetailRepository
from .price_movement_repository import PriceMovementRepository
__all__ = [
    "BaseRepository",
    "SupplierRepository",
    "ProductRepository",
    "ImportTemplateRepository",
    "PriceUpdateLogRepository",
    "PriceUpdateDetailRepository",
    "PriceMovementRepository",
]
