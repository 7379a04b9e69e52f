from typing import List
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from ferrecloud.storage.database.db_connector import get_db
from ferrecloud.app_containers import ApplicationContainer
from ferrecloud.core.errors import AppError
from ferrecloud.core.logger import logger

from ferrecloud.v1_0.entities import SupplierDTO
from ferrecloud.v1_0.services import SupplierService

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])

@router.get(
    "",
    response_model=List[SupplierDTO],
    summary="List all suppliers",
)
@inject
async def list_suppliers(
    db: AsyncSession = Depends(get_db),
    service: SupplierService = Depends(Provide[ApplicationContainer.api_container.supplier_service]),
):
    logger.debug("[SupplierRouter] list")
    try:
        return await service.list_all(db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[SupplierRouter] list error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list suppliers")

@router.get(
    "/{supplier_id}",
    response_model=SupplierDTO,
    summary="Get supplier by ID",
)
@inject
async def get_supplier(
    supplier_id: int,
    db: AsyncSession = Depends(get_db),
    service: SupplierService = Depends(Provide[ApplicationContainer.api_container.supplier_service]),
):
    logger.debug("[SupplierRouter] get id=%s", supplier_id)
    try:
        return await service.get(supplier_id, db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[SupplierRouter] get error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch supplier")
