from .supplier_router import router as supplier_router
from .product_router import router as product_router
from .import_template_router import router as import_template_router
from .price_update_router import router as price_update_router
defined_routers = [
    supplier_router,
    product_router,
    import_template_router,
    price_update_router,
    ]
