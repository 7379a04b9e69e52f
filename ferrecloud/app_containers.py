from dependency_injector import containers, providers
from ferrecloud.v1_0.v1_containers import APIContainer
from ferrecloud.storage.database import async_session

class ApplicationContainer(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=[
                "ferrecloud.v1_0.routers.supplier_router",
                "ferrecloud.v1_0.routers.product_router",
                "ferrecloud.v1_0.routers.import_template_router",
                "ferrecloud.v1_0.routers.price_update_router",
            ]
    )
    db_session = providers.Object(async_session)

    api_container = providers.Container(
        APIContainer
    )
