from dependency_injector import containers, providers
from ferrecloud.v1_0.repositories import (
    SupplierRepository,
    ProductRepository,
    ImportTemplateRepository,
    PriceUpdateLogRepository,
    PriceUpdateDetailRepository,
    PriceMovementRepository,
    )
from ferrecloud.v1_0.services import (
    SupplierService,
    ProductService,
    ImportTemplateService,
    PriceUpdateService,
    )

class APIContainer(containers.DeclarativeContainer):
    supplier_repository = providers.Singleton(SupplierRepository)
    product_repository = providers.Singleton(ProductRepository)
    import_template_repository = providers.Singleton(ImportTemplateRepository)
    price_update_log_repository = providers.Singleton(PriceUpdateLogRepository)
    price_update_detail_repository = providers.Singleton(PriceUpdateDetailRepository)
    price_movement_repository = providers.Singleton(PriceMovementRepository)

    supplier_service = providers.Singleton(
        SupplierService,
        supplier_repository = supplier_repository
    )
    product_service = providers.Singleton(
        ProductService,
        product_repository = product_repository,
        price_movement_repository = price_movement_repository
    )
    import_template_service = providers.Singleton(
        ImportTemplateService,
        import_template_repository = import_template_repository,
        supplier_repository = supplier_repository
    )
    price_update_service = providers.Singleton(
        PriceUpdateService,
        price_update_log_repository = price_update_log_repository,
        price_update_detail_repository = price_update_detail_repository,
        import_template_repository = import_template_repository,
        supplier_repository = supplier_repository,
        product_repository = product_repository,
        price_movement_repository = price_movement_repository
    )
