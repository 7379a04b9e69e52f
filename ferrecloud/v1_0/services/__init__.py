from .supplier_service import SupplierService
from .product_service import ProductService
from .import_template_service import ImportTemplateService
from .price_update_service import PriceUpdateService
__all__=[
    "SupplierService",
    "ProductService",
    "ImportTemplateService",
    "PriceUpdateService",
    ]
