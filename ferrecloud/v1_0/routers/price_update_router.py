from typing import Optional
from fastapi import (
    APIRouter, HTTPException, Depends, status, UploadFile, File, Form, Query, Body
)
from dependency_injector.wiring import inject, Provide
from sqlalchemy.ext.asyncio import AsyncSession

from ferrecloud.storage.database.db_connector import get_db
from ferrecloud.app_containers import ApplicationContainer
from ferrecloud.core.errors import AppError
from ferrecloud.core.logger import logger
from ferrecloud.core.settings import settings
from ferrecloud.v1_0.helper.io import SUPPORTED_EXTENSIONS, FileFmt, file_extension
from ferrecloud.v1_0.schemas import PriceUpdateAnalyzeRequest, PriceUpdateApplyRequest
from ferrecloud.v1_0.entities import (
    ParsedPriceListDTO,
    PriceUpdateAnalysisDTO,
    PriceUpdateLogDetailDTO,
    PriceUpdateLogPageDTO,
    PriceUpdateResultDTO,
)
from ferrecloud.v1_0.services import PriceUpdateService

router = APIRouter(prefix="/price-updates", tags=["Price updates"])

SPREADSHEET_CT = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/octet-stream",
}

@router.post(
    "/parse",
    response_model=ParsedPriceListDTO,
    status_code=status.HTTP_200_OK,
    summary="Read a supplier price list with an import template",
)
@inject
async def parse_price_list(
    file: UploadFile = File(..., description=".csv, .xlsx o .xls"),
    template_id: int = Form(..., alias="templateId", ge=1),
    db: AsyncSession = Depends(get_db),
    svc: PriceUpdateService = Depends(Provide[ApplicationContainer.api_container.price_update_service]),
):
    if not file.filename:
        raise HTTPException(400, "filename requerido")
    if file_extension(file.filename) not in SUPPORTED_EXTENSIONS:
        raise HTTPException(415, "Solo .csv, .xlsx o .xls")

    content = await file.read()
    if not content:
        raise HTTPException(400, "archivo vacío")
    if len(content) > settings.PRICE_LIST_MAX_BYTES:
        raise HTTPException(413, f"archivo excede {settings.PRICE_LIST_MAX_MB}MB")

    ct = (file.content_type or "").split(";")[0].strip().lower()
    if ct and ct not in SPREADSHEET_CT:
        logger.debug("[PriceUpdateRouter] content-type atípico: %s (continuando por extensión)", ct)

    try:
        return await svc.parse_file(content, file.filename, template_id, db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[PriceUpdateRouter] parse error: %s", e, exc_info=True)
        raise HTTPException(500, "Failed to parse price list")

@router.post(
    "/analyze",
    response_model=PriceUpdateAnalysisDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Classify price-list rows and store a pending log",
)
@inject
async def analyze_price_list(
    request: PriceUpdateAnalyzeRequest,
    db: AsyncSession = Depends(get_db),
    svc: PriceUpdateService = Depends(Provide[ApplicationContainer.api_container.price_update_service]),
):
    logger.info(
        "[PriceUpdateRouter] analyze supplier=%s template=%s rows=%s",
        request.supplier_id,
        request.template_id,
        len(request.data),
    )
    try:
        return await svc.analyze(request, db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[PriceUpdateRouter] analyze error: %s", e, exc_info=True)
        raise HTTPException(500, "Failed to analyze price list")

@router.get(
    "",
    response_model=PriceUpdateLogPageDTO,
    summary="Paginated history of price updates",
)
@inject
async def list_price_updates(
    page: int = Query(1, ge=1),
    supplier_id: Optional[int] = Query(None, alias="supplierId", ge=1),
    log_status: Optional[str] = Query(None, alias="status", description="pending | applied | cancelled"),
    db: AsyncSession = Depends(get_db),
    svc: PriceUpdateService = Depends(Provide[ApplicationContainer.api_container.price_update_service]),
):
    logger.debug("[PriceUpdateRouter] list page=%s supplier=%s status=%s", page, supplier_id, log_status)
    try:
        return await svc.list_paginated(page, db, supplier_id=supplier_id, status=log_status)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[PriceUpdateRouter] list error: %s", e, exc_info=True)
        raise HTTPException(500, "Failed to list price updates")

@router.get(
    "/{log_id}",
    response_model=PriceUpdateLogDetailDTO,
    summary="Price update log with its detail rows",
)
@inject
async def get_price_update(
    log_id: int,
    db: AsyncSession = Depends(get_db),
    svc: PriceUpdateService = Depends(Provide[ApplicationContainer.api_container.price_update_service]),
):
    logger.debug("[PriceUpdateRouter] get id=%s", log_id)
    try:
        return await svc.get_log(log_id, db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[PriceUpdateRouter] get error: %s", e, exc_info=True)
        raise HTTPException(500, "Failed to fetch price update")

@router.get(
    "/{log_id}/export",
    summary="Download the detail rows of a price update",
)
@inject
async def export_price_update(
    log_id: int,
    fmt: FileFmt = Query("csv"),
    db: AsyncSession = Depends(get_db),
    svc: PriceUpdateService = Depends(Provide[ApplicationContainer.api_container.price_update_service]),
):
    try:
        return await svc.export_details(log_id, fmt, db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[PriceUpdateRouter] export error: %s", e, exc_info=True)
        raise HTTPException(500, "Failed to export price update")

@router.post(
    "/{log_id}/apply",
    response_model=PriceUpdateResultDTO,
    summary="Apply the new costs of a pending price update",
)
@inject
async def apply_price_update(
    log_id: int,
    request: Optional[PriceUpdateApplyRequest] = Body(None),
    db: AsyncSession = Depends(get_db),
    svc: PriceUpdateService = Depends(Provide[ApplicationContainer.api_container.price_update_service]),
):
    applied_by = request.applied_by if request else None
    logger.info("[PriceUpdateRouter] apply id=%s by=%s", log_id, applied_by)
    try:
        return await svc.apply(log_id, db, applied_by=applied_by)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[PriceUpdateRouter] apply error: %s", e, exc_info=True)
        raise HTTPException(500, "Failed to apply price update")

@router.post(
    "/{log_id}/cancel",
    response_model=PriceUpdateResultDTO,
    summary="Cancel a pending price update",
)
@inject
async def cancel_price_update(
    log_id: int,
    db: AsyncSession = Depends(get_db),
    svc: PriceUpdateService = Depends(Provide[ApplicationContainer.api_container.price_update_service]),
):
    logger.info("[PriceUpdateRouter] cancel id=%s", log_id)
    try:
        return await svc.cancel(log_id, db)
    except (AppError, HTTPException):
        raise
    except Exception as e:
        logger.error("[PriceUpdateRouter] cancel error: %s", e, exc_info=True)
        raise HTTPException(500, "Failed to cancel price update")
