from typing import List
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from ferrecloud.storage.database.db_connector import get_db
from ferrecloud.app_containers import ApplicationContainer
from ferrecloud.core.errors import AppError
from ferrecloud.core.logger import logger

from ferrecloud.v1_0.schemas import ProductPatch
from ferrecloud.v1_0.entities import ProductDTO, PriceMovementDTO
from ferrecloud.v1_0.services import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

@router.get(
    "/{product_id}",
    response_model=ProductDTO,
    summary="Get product by ID",
)
@inject
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(Provide[ApplicationContainer.api_container.product_service]),
):
    logger.debug("[ProductRouter] get id=%s", product_id)
    try:
        return await service.get(product_id, db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[ProductRouter] get error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch product")

@router.patch(
    "/{product_id}",
    response_model=ProductDTO,
    summary="Partially update a product",
)
@inject
async def update_product(
    product_id: int,
    request: ProductPatch,
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(Provide[ApplicationContainer.api_container.product_service]),
):
    data = request.model_dump(exclude_unset=True)
    logger.info("[ProductRouter] update id=%s data=%s", product_id, data)
    if not data:
        raise HTTPException(status_code=400, detail="No fields to update")
    try:
        return await service.update_partial(product_id, data, db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[ProductRouter] update error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update product")

@router.get(
    "/{product_id}/price-movements",
    response_model=List[PriceMovementDTO],
    summary="Cost-change history of a product",
)
@inject
async def list_price_movements(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    service: ProductService = Depends(Provide[ApplicationContainer.api_container.product_service]),
):
    logger.debug("[ProductRouter] price movements id=%s", product_id)
    try:
        return await service.list_price_movements(product_id, db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[ProductRouter] price movements error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list price movements")
