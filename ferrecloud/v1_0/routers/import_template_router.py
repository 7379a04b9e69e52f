from typing import List
from fastapi import APIRouter, HTTPException, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from dependency_injector.wiring import inject, Provide

from ferrecloud.storage.database.db_connector import get_db
from ferrecloud.app_containers import ApplicationContainer
from ferrecloud.core.errors import AppError
from ferrecloud.core.logger import logger

from ferrecloud.v1_0.schemas import ImportTemplateCreate, ImportTemplateUpdate
from ferrecloud.v1_0.entities import ImportTemplateDTO
from ferrecloud.v1_0.services import ImportTemplateService

router = APIRouter(prefix="/supplier-import-templates", tags=["Import templates"])

@router.get(
    "",
    response_model=List[ImportTemplateDTO],
    summary="List the import templates of a supplier",
)
@inject
async def list_templates(
    supplier_id: int = Query(..., alias="supplierId", ge=1),
    db: AsyncSession = Depends(get_db),
    service: ImportTemplateService = Depends(Provide[ApplicationContainer.api_container.import_template_service]),
):
    logger.debug("[ImportTemplateRouter] list supplier=%s", supplier_id)
    try:
        return await service.list_for_supplier(supplier_id, db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[ImportTemplateRouter] list error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list import templates")

@router.get(
    "/{template_id}",
    response_model=ImportTemplateDTO,
    summary="Get import template by ID",
)
@inject
async def get_template(
    template_id: int,
    db: AsyncSession = Depends(get_db),
    service: ImportTemplateService = Depends(Provide[ApplicationContainer.api_container.import_template_service]),
):
    logger.debug("[ImportTemplateRouter] get id=%s", template_id)
    try:
        return await service.get(template_id, db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[ImportTemplateRouter] get error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch import template")

@router.post(
    "",
    response_model=ImportTemplateDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create an import template",
)
@inject
async def create_template(
    request: ImportTemplateCreate,
    db: AsyncSession = Depends(get_db),
    service: ImportTemplateService = Depends(Provide[ApplicationContainer.api_container.import_template_service]),
):
    logger.info("[ImportTemplateRouter] create payload=%s", request.model_dump())
    try:
        return await service.create(request, db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[ImportTemplateRouter] create error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create import template")

@router.put(
    "/{template_id}",
    response_model=ImportTemplateDTO,
    summary="Replace an import template",
)
@inject
async def update_template(
    template_id: int,
    request: ImportTemplateUpdate,
    db: AsyncSession = Depends(get_db),
    service: ImportTemplateService = Depends(Provide[ApplicationContainer.api_container.import_template_service]),
):
    logger.info("[ImportTemplateRouter] update id=%s", template_id)
    try:
        return await service.update(template_id, request, db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[ImportTemplateRouter] update error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update import template")

@router.delete(
    "/{template_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an import template",
)
@inject
async def delete_template(
    template_id: int,
    db: AsyncSession = Depends(get_db),
    service: ImportTemplateService = Depends(Provide[ApplicationContainer.api_container.import_template_service]),
):
    logger.info("[ImportTemplateRouter] delete id=%s", template_id)
    try:
        await service.delete(template_id, db)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[ImportTemplateRouter] delete error: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete import template")
