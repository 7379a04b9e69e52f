from datetime import datetime, timezone
from math import ceil
from typing import List, Optional

from fastapi import Response
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from ferrecloud.core.errors import (
    InvalidStateError,
    NotFoundError,
    ParseError,
    ValidationError,
)
from ferrecloud.core.logger import logger
from ferrecloud.core.realtime import publish_safely
from ferrecloud.core.settings import settings
from ferrecloud.utils.tx import maybe_begin, unit_of_work
from ferrecloud.v1_0.helper.io import (
    ColumnMapping,
    ParseOptions,
    parse_price_list,
    rows_from_details,
    write_csv,
    write_xlsx,
    DETAIL_FIELDS,
    NUMERIC_FIELDS,
    FileFmt,
)
from ferrecloud.v1_0.helper.pricing import (
    CatalogProduct,
    ReconciliationSummary,
    compute_variation,
    price_rows,
    reconcile,
)
from ferrecloud.v1_0.models import (
    DetailStatus,
    PriceMovement,
    PriceUpdateDetail,
    PriceUpdateLog,
    PriceUpdateStatus,
    MOVEMENT_SUPPLIER_PRICE_UPDATE,
)
from ferrecloud.v1_0.repositories import (
    ImportTemplateRepository,
    PriceMovementRepository,
    PriceUpdateDetailRepository,
    PriceUpdateLogRepository,
    ProductRepository,
    SupplierRepository,
)
from ferrecloud.v1_0.schemas import PriceUpdateAnalyzeRequest
from ferrecloud.v1_0.entities import (
    ParsedPriceListDTO,
    PriceUpdateAnalysisDTO,
    PriceUpdateDetailDTO,
    PriceUpdateLogDTO,
    PriceUpdateLogDetailDTO,
    PriceUpdateLogPageDTO,
    PriceUpdateResultDTO,
    PriceUpdateSummaryDTO,
)

def _summary_from_log(log: PriceUpdateLog) -> PriceUpdateSummaryDTO:
    return PriceUpdateSummaryDTO(
        total=int(log.total_products or 0),
        updated=int(log.updated_products or 0),
        not_found=int(log.not_found_products or 0),
        discontinued=int(log.discontinued_products or 0),
        avg_variation=float(log.avg_variation_percent or 0.0),
    )

def _summary_dto(s: ReconciliationSummary) -> PriceUpdateSummaryDTO:
    return PriceUpdateSummaryDTO(
        total=s.total,
        updated=s.updated,
        not_found=s.not_found,
        discontinued=s.discontinued,
        avg_variation=s.avg_variation,
    )

def to_detail_dto(d: PriceUpdateDetail) -> PriceUpdateDetailDTO:
    return PriceUpdateDetailDTO(
        position=d.position,
        supplier_code=d.supplier_code,
        description=d.description,
        sku=d.sku,
        product_name=d.product_name,
        old_price=float(d.old_price or 0.0),
        new_price=float(d.new_price or 0.0),
        variation=float(d.variation or 0.0),
        status=d.status,
    )

def to_log_dto(log: PriceUpdateLog) -> PriceUpdateLogDTO:
    return PriceUpdateLogDTO(
        id=log.id,
        supplier_id=log.supplier_id,
        supplier_name=log.supplier.name if log.supplier else None,
        template_id=log.template_id,
        file_name=log.file_name,
        status=log.status,
        summary=_summary_from_log(log),
        created_at=log.created_at,
        applied_at=log.applied_at,
        applied_by=log.applied_by,
        cancelled_at=log.cancelled_at,
    )

class PriceUpdateService:
    """
    Supplier price-list pipeline: parse -> analyze (pending log) -> apply | cancel.
    """

    def __init__(
        self,
        price_update_log_repository: PriceUpdateLogRepository,
        price_update_detail_repository: PriceUpdateDetailRepository,
        import_template_repository: ImportTemplateRepository,
        supplier_repository: SupplierRepository,
        product_repository: ProductRepository,
        price_movement_repository: PriceMovementRepository,
    ) -> None:
        self.log_repository = price_update_log_repository
        self.detail_repository = price_update_detail_repository
        self.template_repository = import_template_repository
        self.supplier_repository = supplier_repository
        self.product_repository = product_repository
        self.movement_repository = price_movement_repository
        self.PAGE_SIZE = settings.PRICE_UPDATE_PAGE_SIZE

    async def _raise_not_pending(self, log_id: int, db: AsyncSession) -> None:
        log = await self.log_repository.get_log(log_id, db)
        if not log:
            raise NotFoundError("Price update log", log_id)
        logger.warning(
            "[PriceUpdateService] Log ID=%s is %s, expected pending",
            log_id,
            log.status,
        )
        raise InvalidStateError(
            f"Price update {log_id} is already {log.status}",
            current_state=log.status,
        )

    async def parse_file(
        self,
        content: bytes,
        filename: str,
        template_id: int,
        db: AsyncSession,
    ) -> ParsedPriceListDTO:
        """
        Read an uploaded price list with a stored template.

        Nothing is written; the rows are returned for review and later
        sent back to analyze.

        Args:
            content: Raw file bytes (.csv, .xlsx or .xls).
            filename: Original file name; its extension selects the reader.
            template_id: Template holding the column mapping and layout.
            db: Active async database session.

        Returns:
            ParsedPriceListDTO with the normalized rows in file order.

        Raises:
            NotFoundError: Unknown template.
            ParseError: Empty or unreadable file, missing sheet.
        """
        logger.info(
            "[PriceUpdateService] Parse file=%s bytes=%s template ID=%s",
            filename,
            len(content or b""),
            template_id,
        )
        if not content:
            raise ParseError("File is empty", details={"file": filename})

        async with maybe_begin(db):
            t = await self.template_repository.get_template_by_id(template_id, db)
            if not t:
                raise NotFoundError("Import template", template_id)
            opts = ParseOptions(
                mapping=ColumnMapping.from_dict(t.column_mapping or {}),
                has_header_row=t.has_header_row,
                start_row=t.start_row,
                sheet_name=t.sheet_name,
            )

        rows = await run_in_threadpool(parse_price_list, content, filename, opts)
        return ParsedPriceListDTO(
            file_name=filename,
            template_id=template_id,
            total=len(rows),
            rows=rows,
        )

    async def analyze(
        self,
        payload: PriceUpdateAnalyzeRequest,
        db: AsyncSession,
    ) -> PriceUpdateAnalysisDTO:
        """
        Classify normalized rows against the supplier's catalog and persist
        a pending log with one detail per row.

        Operations:
        - Verify the supplier exists and owns the template.
        - Parse every price; any invalid price rejects the whole request.
        - Match rows by exact supplier code (lowest product id on duplicates).
        - Store log + details atomically.

        Args:
            payload: PriceUpdateAnalyzeRequest.
            db: Active async database session.

        Returns:
            PriceUpdateAnalysisDTO with logId, summary and details in input order.

        Raises:
            NotFoundError: Unknown supplier or template (or template of another supplier).
            ValidationError: Rows with a non-numeric or negative price.
            StorageError: Database failure; nothing is persisted.
        """
        logger.info(
            "[PriceUpdateService] Analyze supplier ID=%s template ID=%s rows=%s",
            payload.supplier_id,
            payload.template_id,
            len(payload.data),
        )
        rows = [r.model_dump(by_alias=True) for r in payload.data]

        async with unit_of_work(db, "analyze price list"):
            supplier = await self.supplier_repository.get_supplier_by_id(payload.supplier_id, db)
            if not supplier:
                raise NotFoundError("Supplier", payload.supplier_id)
            template = await self.template_repository.get_template_by_id(payload.template_id, db)
            if not template or template.supplier_id != supplier.id:
                raise NotFoundError("Import template", payload.template_id)

            priced, errors = price_rows(rows)
            if errors:
                raise ValidationError(
                    f"{len(errors)} row(s) have a missing or invalid price; "
                    "fix them or remove rows without a price (headings, notes) before analyzing",
                    details={"errors": errors},
                )

            matches = await self.product_repository.map_by_supplier_codes(
                supplier.id,
                [r.supplier_code for r in priced],
                db,
            )
            catalog = {
                code: CatalogProduct(
                    id=p.id,
                    sku=p.sku,
                    name=p.name,
                    cost_price=float(p.cost_price or 0.0),
                    is_active=p.is_active,
                )
                for code, p in matches.items()
            }
            reconciled, summary = reconcile(priced, catalog)

            log = await self.log_repository.create_log(
                PriceUpdateLog(
                    supplier_id=supplier.id,
                    template_id=template.id,
                    file_name=payload.file_name,
                    total_products=summary.total,
                    updated_products=summary.updated,
                    not_found_products=summary.not_found,
                    discontinued_products=summary.discontinued,
                    avg_variation_percent=summary.avg_variation,
                ),
                db,
            )
            details = await self.detail_repository.insert_details(
                [
                    PriceUpdateDetail(
                        log_id=log.id,
                        position=r.position,
                        product_id=r.product_id,
                        supplier_code=r.supplier_code,
                        description=r.description,
                        sku=r.sku,
                        product_name=r.product_name,
                        old_price=r.old_price,
                        new_price=r.new_price,
                        variation=r.variation,
                        status=r.status.value,
                    )
                    for r in reconciled
                ],
                db,
            )
            dto = PriceUpdateAnalysisDTO(
                log_id=log.id,
                status=PriceUpdateStatus.PENDING.value,
                summary=_summary_dto(summary),
                details=[to_detail_dto(d) for d in details],
            )

        logger.info(
            "[PriceUpdateService] Log ID=%s created: total=%s update=%s not_found=%s discontinued=%s",
            dto.log_id,
            summary.total,
            summary.updated,
            summary.not_found,
            summary.discontinued,
        )
        return dto

    async def apply(
        self,
        log_id: int,
        db: AsyncSession,
        applied_by: Optional[str] = None,
    ) -> PriceUpdateResultDTO:
        """
        Write the new costs of every "update" detail of a pending log.

        The pending -> applied transition is a single guarded UPDATE, so two
        concurrent applies cannot both succeed. Products that were
        discontinued or deleted after the analysis, or whose cost already
        equals the new price, are skipped without a movement.

        Args:
            log_id: Identifier of the pending log.
            db: Active async database session.
            applied_by: Optional operator name.

        Returns:
            PriceUpdateResultDTO with the number of products written.

        Raises:
            NotFoundError: Unknown log.
            InvalidStateError: Log already applied or cancelled.
            StorageError: Database failure; no product is modified.
        """
        logger.info("[PriceUpdateService] Apply log ID=%s by=%s", log_id, applied_by)
        now = datetime.now(timezone.utc)
        changed: List[int] = []
        skipped = 0

        async with unit_of_work(db, "apply price update"):
            ok = await self.log_repository.transition(
                log_id,
                PriceUpdateStatus.APPLIED,
                db,
                applied_by=applied_by,
                at=now,
            )
            if not ok:
                await self._raise_not_pending(log_id, db)

            log = await self.log_repository.get_log(log_id, db)
            details = await self.detail_repository.list_by_log(
                log_id,
                db,
                status=DetailStatus.UPDATE.value,
            )
            products = await self.product_repository.list_by_ids_for_update(
                [d.product_id for d in details if d.product_id is not None],
                db,
            )

            movements: List[PriceMovement] = []
            for d in details:
                p = products.get(d.product_id) if d.product_id is not None else None
                if p is None or not p.is_active:
                    skipped += 1
                    continue
                previous = float(p.cost_price or 0.0)
                new_cost = float(d.new_price or 0.0)
                if round(new_cost - previous, 2) == 0:
                    skipped += 1
                    continue

                await self.product_repository.set_cost(p, new_cost, db)
                movements.append(
                    PriceMovement(
                        product_id=p.id,
                        log_id=log_id,
                        movement_type=MOVEMENT_SUPPLIER_PRICE_UPDATE,
                        previous_cost=previous,
                        new_cost=new_cost,
                        variation=compute_variation(previous, new_cost),
                        notes=f"Price list {log.file_name}" if log and log.file_name else None,
                        created_by=applied_by,
                    )
                )
                changed.append(p.id)

            await self.movement_repository.add_movements(movements, db)

        logger.info(
            "[PriceUpdateService] Log ID=%s applied: updated=%s skipped=%s",
            log_id,
            len(changed),
            skipped,
        )

        for product_id in changed:
            await publish_safely("product", "updated", {"id": product_id})
        await publish_safely(
            "price_update",
            "applied",
            {"id": log_id, "updatedProducts": len(changed)},
        )

        return PriceUpdateResultDTO(
            log_id=log_id,
            status=PriceUpdateStatus.APPLIED.value,
            updated_products=len(changed),
            skipped_products=skipped,
            applied_at=now,
        )

    async def cancel(
        self,
        log_id: int,
        db: AsyncSession,
    ) -> PriceUpdateResultDTO:
        """
        Mark a pending log as cancelled. No product is touched.

        Raises:
            NotFoundError: Unknown log.
            InvalidStateError: Log already applied or cancelled.
        """
        logger.warning("[PriceUpdateService] Cancel log ID=%s", log_id)
        now = datetime.now(timezone.utc)

        async with unit_of_work(db, "cancel price update"):
            ok = await self.log_repository.transition(
                log_id,
                PriceUpdateStatus.CANCELLED,
                db,
                at=now,
            )
            if not ok:
                await self._raise_not_pending(log_id, db)

        await publish_safely("price_update", "cancelled", {"id": log_id})
        return PriceUpdateResultDTO(
            log_id=log_id,
            status=PriceUpdateStatus.CANCELLED.value,
            cancelled_at=now,
        )

    async def get_log(
        self,
        log_id: int,
        db: AsyncSession,
    ) -> PriceUpdateLogDetailDTO:
        logger.debug("[PriceUpdateService] Get log ID=%s", log_id)
        async with maybe_begin(db):
            log = await self.log_repository.get_log(log_id, db, with_details=True)
            if not log:
                raise NotFoundError("Price update log", log_id)
            base = to_log_dto(log)
            return PriceUpdateLogDetailDTO(
                **base.model_dump(),
                details=[to_detail_dto(d) for d in log.details],
            )

    async def list_paginated(
        self,
        page: int,
        db: AsyncSession,
        supplier_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> PriceUpdateLogPageDTO:
        """
        History of price-list imports, newest first.

        Args:
            page: Page number (1-based).
            db: Active async database session.
            supplier_id: Optional supplier filter.
            status: Optional status filter (pending | applied | cancelled).

        Returns:
            PriceUpdateLogPageDTO with pagination metadata.
        """
        if status is not None and status not in {s.value for s in PriceUpdateStatus}:
            raise ValidationError(
                "Invalid status filter",
                details={"status": status, "allowed": [s.value for s in PriceUpdateStatus]},
            )
        page = max(page, 1)
        page_size = self.PAGE_SIZE
        offset = (page - 1) * page_size

        async with maybe_begin(db):
            items, total = await self.log_repository.list_paginated(
                offset,
                page_size,
                db,
                supplier_id=supplier_id,
                status=status,
            )
            view_items = [to_log_dto(log) for log in items]

        total = int(total or 0)
        total_pages = max(1, ceil(total / page_size)) if total else 1

        return PriceUpdateLogPageDTO(
            items=view_items,
            page=page,
            page_size=page_size,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )

    async def export_details(
        self,
        log_id: int,
        fmt: FileFmt,
        db: AsyncSession,
    ) -> Response:
        """
        Download the detail rows of a log as CSV or XLSX.

        Raises:
            NotFoundError: Unknown log.
        """
        logger.info("[PriceUpdateService] Export log ID=%s fmt=%s", log_id, fmt)
        async with maybe_begin(db):
            log = await self.log_repository.get_log(log_id, db)
            if not log:
                raise NotFoundError("Price update log", log_id)
            details = await self.detail_repository.list_by_log(log_id, db)
            rows = rows_from_details([to_detail_dto(d) for d in details])

        filename = f"price_update_{log_id}.{fmt}"
        if fmt == "xlsx":
            return write_xlsx(
                rows,
                DETAIL_FIELDS,
                filename,
                sheet_title=f"price_update_{log_id}",
                numeric_fields=NUMERIC_FIELDS,
            )
        return write_csv(rows, DETAIL_FIELDS, filename)
